"""
Exceptions that are used throughout
"""

from __future__ import annotations

from collections.abc import Collection
from typing import Any


class UnrecognisedValueError(ValueError):
    """
    Raised when a value is not recognised
    """

    def __init__(
        self,
        unrecognised_value: Any,
        name: str,
        known_values: Collection[Any],
    ) -> None:
        """
        Initialise the error

        Parameters
        ----------
        unrecognised_value
            The unrecognised value

        name
            Name of the thing that was being looked up

            This is only used to provide a helpful error message.

        known_values
            The values we do recognise
        """
        error_msg = (
            f"{unrecognised_value!r} is not a recognised value for {name}. "
            f"{known_values=}"
        )
        super().__init__(error_msg)
