"""
PyRank: rank queries over timed quality records

Augmented dual-AVL index answering global and time-windowed order
statistics by quality.
"""

__version__ = "0.1.0"

from .config import NOT_FOUND, Config, setup_logging
from .exceptions import InvariantError, PyRankError, ResourceExhaustedError
from .catalog import Catalog
from .reference import ReferenceCatalog
from .batch import bulk_add, bulk_remove, from_arrays, ranked_times

__all__ = [
    "Catalog",
    "Config",
    "InvariantError",
    "NOT_FOUND",
    "PyRankError",
    "ReferenceCatalog",
    "ResourceExhaustedError",
    "bulk_add",
    "bulk_remove",
    "from_arrays",
    "ranked_times",
    "setup_logging",
]
