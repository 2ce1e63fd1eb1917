"""
Dimensions and the equality strategies bound to them.

A dimension is an axis of classification. Two dimensions are the same only
if they are the same object: constructing two dimensions with equivalent
strategies yields two distinct axes. The strategy decides when two values
on that axis denote the same coordinate.
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional
from abc import ABC, abstractmethod

from lookupcube.errors import MissingArgumentError


class EqualityStrategy(ABC):
    """Equality and hashing over the value domain of one dimension."""

    @abstractmethod
    def equal(self, a: Any, b: Any) -> bool:
        """Return True if ``a`` and ``b`` denote the same coordinate."""
        pass

    @abstractmethod
    def hash(self, value: Any) -> int:
        """Return a hash consistent with ``equal``."""
        pass


class NaturalEquality(EqualityStrategy):
    """Python's own ``==`` and ``hash()``."""

    def equal(self, a: Any, b: Any) -> bool:
        return a == b

    def hash(self, value: Any) -> int:
        return hash(value)

    def __repr__(self):
        return "NaturalEquality()"


class ProjectedEquality(EqualityStrategy):
    """
    Compares values by a projection of them.

    Two values are equal when ``projection(a) == projection(b)``, e.g.
    ``ProjectedEquality(lambda d: d.date())`` treats datetimes on the same
    day as one coordinate.
    """

    def __init__(self, projection: Callable[[Any], Any]):
        if projection is None:
            raise MissingArgumentError("projection must not be None")
        self.projection = projection

    def equal(self, a: Any, b: Any) -> bool:
        return self.projection(a) == self.projection(b)

    def hash(self, value: Any) -> int:
        return hash(self.projection(value))

    def __repr__(self):
        return f"ProjectedEquality({self.projection!r})"


class CaseInsensitiveEquality(ProjectedEquality):
    """String coordinates compared without regard to case."""

    def __init__(self):
        super().__init__(str.casefold)

    def __repr__(self):
        return "CaseInsensitiveEquality()"


class CallableEquality(EqualityStrategy):
    """Adapts a plain ``(equal, hash)`` function pair."""

    def __init__(self, equal: Callable[[Any, Any], bool],
                 hash: Callable[[Any], int]):
        if equal is None or hash is None:
            raise MissingArgumentError("both equal and hash functions are required")
        self._equal = equal
        self._hash = hash

    def equal(self, a: Any, b: Any) -> bool:
        return bool(self._equal(a, b))

    def hash(self, value: Any) -> int:
        return self._hash(value)


NATURAL = NaturalEquality()


@dataclass(frozen=True, eq=False)
class Dimension:
    """
    An axis of a cube.

    Compared and hashed by identity. The strategy is fixed for the lifetime
    of the dimension.

    Attributes:
        strategy: Equality/hash strategy over this axis's values
        name: Optional display name (not part of the identity)
    """
    strategy: EqualityStrategy
    name: Optional[str] = None

    def __post_init__(self):
        if self.strategy is None:
            raise MissingArgumentError("a dimension requires an equality strategy")

    @classmethod
    def natural(cls, name: Optional[str] = None) -> "Dimension":
        """Create a dimension that compares values with ``==``."""
        return cls(NATURAL, name)

    def equal(self, a: Any, b: Any) -> bool:
        return self.strategy.equal(a, b)

    def hash_value(self, value: Any) -> int:
        return self.strategy.hash(value)

    def __repr__(self):
        if self.name:
            return f"Dimension({self.name!r})"
        return f"Dimension(<{id(self):#x}>)"
