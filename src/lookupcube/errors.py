"""
Exceptions raised by cube construction and cube operations.

Every failure is a synchronous precondition violation. Each concrete error
also derives from the closest builtin so that plain ``except KeyError`` or
``except ValueError`` clauses keep working.
"""


class CubeError(Exception):
    """Base class for all lookupcube errors."""


class MissingArgumentError(CubeError, TypeError):
    """Raised when a required dimension, key, key part or function is None."""


class DuplicateDimensionError(CubeError, ValueError):
    """Raised when a dimension appears twice in a dimension list or key."""


class UnknownDimensionError(CubeError, ValueError):
    """Raised when an operation names a dimension the cube does not have."""


class DimensionMismatchError(CubeError, ValueError):
    """Raised when cubes (or a key and a cube) have different dimension sets."""


class DuplicateKeyError(CubeError, ValueError):
    """Raised when the same key is inserted twice into one index."""


class KeyNotFoundError(CubeError, KeyError):
    """Raised when a cube has no value for the requested key."""


class MissingDimensionError(CubeError, KeyError):
    """Raised when a key has no part for the requested dimension."""
