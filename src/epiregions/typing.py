"""
Type hints that are used throughout
"""

from __future__ import annotations

import datetime as dt
from typing import Any, Union

from typing_extensions import TypeAlias

DATE_LIKE: TypeAlias = Union[dt.date, str]
"""
Type alias for something we can turn into a date

Strings must be in ISO format (e.g. `"2020-03-04"`).
"""

JSONDict: TypeAlias = dict[str, Any]
"""
Type alias for the JSON-compatible dictionaries produced by serialisation
"""
