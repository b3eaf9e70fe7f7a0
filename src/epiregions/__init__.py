"""
Hierarchical epidemic statistics

Roll reports and time series up from provinces to the world,
and derive daily changes.
"""

import importlib.metadata

__version__ = importlib.metadata.version("epiregions")
