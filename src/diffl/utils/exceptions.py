"""Exceptions raised by the difference operators.

Both derive from ValueError, such that callers treating any invalid input alike may
keep catching ValueError.

"""

__all__ = ["DimensionMismatchError", "UnsupportedEdgeError"]


class DimensionMismatchError(ValueError):
    """Raised when the shape of an output buffer does not fit the input array."""


class UnsupportedEdgeError(ValueError):
    """Raised when a boundary treatment is not admissible in the given context."""
