"""
Key parts and keys: the coordinates of a cube.

A KeyPart is one coordinate (dimension, value). A Key is a complete
coordinate tuple holding at most one part per dimension. Both are immutable
and hashable; comparisons go through each dimension's equality strategy.
"""

from typing import Any, Dict, FrozenSet, Iterable, Iterator, Tuple

from lookupcube.cube.dimension import Dimension
from lookupcube.errors import (
    DuplicateDimensionError, MissingArgumentError, MissingDimensionError
)


class KeyPart:
    """A single (dimension, value) coordinate."""

    __slots__ = ("_dimension", "_value")

    def __init__(self, dimension: Dimension, value: Any):
        if dimension is None:
            raise MissingArgumentError("dimension must not be None")
        if value is None:
            raise MissingArgumentError("value must not be None")
        self._dimension = dimension
        self._value = value

    @property
    def dimension(self) -> Dimension:
        return self._dimension

    @property
    def value(self) -> Any:
        return self._value

    def __eq__(self, other):
        if not isinstance(other, KeyPart):
            return NotImplemented
        return (self._dimension is other._dimension
                and self._dimension.equal(self._value, other._value))

    def __hash__(self):
        return hash(self._dimension) ^ self._dimension.hash_value(self._value)

    def __repr__(self):
        return f"KeyPart({self._dimension!r}, {self._value!r})"


class Key:
    """
    An immutable set of key parts, one per participating dimension.

    Two keys are equal when they cover the same dimensions and their parts
    are equal dimension by dimension. The hash is the XOR of the part
    hashes; it is computed on first use and cached.
    """

    __slots__ = ("_parts", "_hash")

    def __init__(self, *parts: KeyPart):
        self._parts: Dict[Dimension, KeyPart] = {}
        self._hash = None
        for part in parts:
            if part is None:
                raise MissingArgumentError("one or more of the key parts were None")
            if part.dimension in self._parts:
                raise DuplicateDimensionError(
                    f"key has more than one part for {part.dimension!r}"
                )
            self._parts[part.dimension] = part

    @classmethod
    def from_parts(cls, parts: Iterable[KeyPart]) -> "Key":
        """Build a key from any iterable of key parts."""
        if parts is None:
            raise MissingArgumentError("parts must not be None")
        return cls(*parts)

    @classmethod
    def _trusted(cls, parts: Iterable[KeyPart]) -> "Key":
        # Parts already known to be non-None with distinct dimensions.
        key = cls.__new__(cls)
        key._parts = {part.dimension: part for part in parts}
        key._hash = None
        return key

    def get_key_part(self, dimension: Dimension) -> KeyPart:
        """Return the part for ``dimension``."""
        try:
            return self._parts[dimension]
        except KeyError:
            raise MissingDimensionError(f"key has no part for {dimension!r}") from None

    def get_value(self, dimension: Dimension) -> Any:
        """Return the raw coordinate value on ``dimension``."""
        return self.get_key_part(dimension).value

    @property
    def key_parts(self) -> Tuple[KeyPart, ...]:
        return tuple(self._parts.values())

    @property
    def dimensions(self) -> FrozenSet[Dimension]:
        return frozenset(self._parts)

    def extend(self, key_part: KeyPart) -> "Key":
        """Return a new key with ``key_part`` added on a new dimension."""
        if key_part.dimension in self._parts:
            raise DuplicateDimensionError(
                f"key already has a part for {key_part.dimension!r}"
            )
        return Key._trusted(list(self._parts.values()) + [key_part])

    def drop(self, dimension: Dimension) -> "Key":
        """Return a new key without the part for ``dimension``."""
        if dimension not in self._parts:
            raise MissingDimensionError(f"key has no part for {dimension!r}")
        return Key._trusted(
            part for dim, part in self._parts.items() if dim is not dimension
        )

    def __len__(self):
        return len(self._parts)

    def __iter__(self) -> Iterator[KeyPart]:
        return iter(self._parts.values())

    def __contains__(self, dimension):
        return dimension in self._parts

    def __eq__(self, other):
        if not isinstance(other, Key):
            return NotImplemented
        if self is other:
            return True
        if len(self._parts) != len(other._parts):
            return False
        for dimension, part in self._parts.items():
            other_part = other._parts.get(dimension)
            if other_part is None or part != other_part:
                return False
        return True

    def __hash__(self):
        if self._hash is None:
            value = 0
            for part in self._parts.values():
                value ^= hash(part)
            self._hash = value
        return self._hash

    def __repr__(self):
        parts = ", ".join(
            f"{part.dimension.name or '?'}={part.value!r}" for part in self._parts.values()
        )
        return f"Key({parts})"
