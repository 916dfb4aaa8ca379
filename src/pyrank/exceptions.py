"""
Exceptions raised by pyrank.
"""


class PyRankError(Exception):
    """Base exception for all pyrank errors."""

    pass


class InvariantError(PyRankError):
    """Raised when a tree or catalog fails an invariant check."""

    pass


class ResourceExhaustedError(PyRankError, MemoryError):
    """Raised when a record cannot be allocated; the catalog is left unchanged."""

    pass
