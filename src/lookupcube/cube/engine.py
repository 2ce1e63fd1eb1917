"""
Cube Engine: an immutable N-dimensional lookup table.

A cube holds a fixed set of dimensions, a Key -> value table and, for each
dimension, a reverse index from key part to the keys carrying it. Every
operation below builds a new cube through a fresh IndexBuilder:

- Construction: define, singleton, empty
- Combination: merge, resolving_merge, add_dimension
- Filtering: splice (one reverse-index bucket), exclude (full scan)
- Reduction: collapse (drop a dimension by grouping), convert (map values)
"""

import logging
from typing import (
    Callable, Dict, Generic, Iterator, List, Optional, Tuple, TypeVar
)

from lookupcube.cube.builder import IndexBuilder, check_key_dimensions, index_key
from lookupcube.cube.dimension import Dimension
from lookupcube.cube.groups import Collision, Group
from lookupcube.cube.key import Key, KeyPart
from lookupcube.errors import (
    DimensionMismatchError, DuplicateDimensionError, DuplicateKeyError,
    KeyNotFoundError, MissingArgumentError, UnknownDimensionError
)

logger = logging.getLogger(__name__)

T = TypeVar("T")
U = TypeVar("U")


class Cube(Generic[T]):
    """
    An N-dimensional lookup cube.

    Build cubes with ``Cube.define`` or ``Cube.singleton`` and combine them
    with ``merge``/``resolving_merge``. Query with ``cube[key]`` once the
    key covers exactly the cube's dimensions.
    """

    def __init__(self, builder: IndexBuilder):
        """
        Take over the tables of a filled builder.

        Prefer the ``define``/``singleton`` factories; the builder must not
        be reused afterwards.
        """
        self._values: Dict[Key, T] = builder.values
        self._index = builder.index

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @staticmethod
    def null() -> "Cube":
        """The shared zero-dimension cube."""
        return _NULL_CUBE

    @classmethod
    def define(cls, *dimensions: Dimension) -> "Cube":
        """
        Create an empty cube over ``dimensions``.

        Returns the shared null cube when no dimension is given.

        Raises:
            DuplicateDimensionError: if a dimension is listed twice
            MissingArgumentError: if a dimension is None
        """
        if not dimensions:
            return Cube.null()
        return cls(IndexBuilder(dimensions))

    @classmethod
    def singleton(cls, key: Key, value: T) -> "Cube[T]":
        """
        Create a cube holding ``value`` at ``key``.

        The cube's dimensions are the key's dimensions. A key without parts
        yields the shared null cube and ``value`` is discarded.
        """
        if key is None:
            raise MissingArgumentError("key must not be None")
        if len(key) == 0:
            logger.warning("Singleton with an empty key returns the null cube; value discarded")
            return Cube.null()
        builder = IndexBuilder(part.dimension for part in key)
        builder.add(key, value)
        return cls(builder)

    def empty(self) -> "Cube[T]":
        """Return a cube over the same dimensions with no entries."""
        return Cube(IndexBuilder(self._index))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def dimensions(self) -> Tuple[Dimension, ...]:
        return tuple(self._index)

    @property
    def is_empty(self) -> bool:
        return not self._values

    def contains_key(self, key: Key) -> bool:
        return key in self._values

    def get_keys(self) -> List[Key]:
        return list(self._values)

    def try_get_value(self, key: Key) -> Tuple[bool, Optional[T]]:
        """Return ``(True, value)`` if ``key`` is present, else ``(False, None)``."""
        if key in self._values:
            return True, self._values[key]
        return False, None

    def get(self, key: Key, default: Optional[T] = None) -> Optional[T]:
        return self._values.get(key, default)

    def items(self) -> List[Tuple[Key, T]]:
        return list(self._values.items())

    def values(self) -> List[T]:
        return list(self._values.values())

    def get_unique_key_parts(self, dimension: Dimension) -> List[KeyPart]:
        """Return the distinct key parts observed on ``dimension``."""
        return list(self._lookup(dimension))

    def __getitem__(self, key: Key) -> T:
        try:
            return self._values[key]
        except KeyError:
            raise KeyNotFoundError(f"{key!r} is not in the cube") from None

    def __setitem__(self, key: Key, value: T) -> None:
        if key is None:
            raise MissingArgumentError("key must not be None")
        if key in self._values:
            self._values[key] = value
            return
        check_key_dimensions(self._index, key)
        self._values[key] = value
        index_key(self._index, key)

    def __contains__(self, key):
        return key in self._values

    def __len__(self):
        return len(self._values)

    def __iter__(self) -> Iterator[Key]:
        return iter(self._values)

    def __eq__(self, other):
        if not isinstance(other, Cube):
            return NotImplemented
        return self._has_same_dimensions(other) and self._values == other._values

    __hash__ = None

    def __repr__(self):
        dims = ", ".join(repr(d) for d in self._index)
        return f"Cube(dimensions=[{dims}], entries={len(self._values)})"

    # ------------------------------------------------------------------
    # Combination
    # ------------------------------------------------------------------

    def add_dimension(self, key_part: KeyPart) -> "Cube[T]":
        """
        Extend every key with ``key_part`` on a new dimension.

        Raises:
            DuplicateDimensionError: if the dimension is already in the cube
        """
        if key_part is None:
            raise MissingArgumentError("key_part must not be None")
        if key_part.dimension in self._index:
            raise DuplicateDimensionError(f"{key_part.dimension!r} already exists in the cube")
        builder = IndexBuilder(list(self._index) + [key_part.dimension])
        for key, value in self._values.items():
            builder.add(key.extend(key_part), value)
        return Cube(builder)

    def merge(self, *others: "Cube[T]") -> "Cube[T]":
        """
        Union this cube with ``others``.

        All cubes must share the same dimension set and no key may appear in
        more than one of them. With no other cube, returns ``self``.

        Raises:
            DimensionMismatchError: if a cube has a different dimension set
            DuplicateKeyError: if two cubes share a key
        """
        cubes = list(others)
        if not cubes:
            return self
        self._validate_merge(cubes)
        cubes.append(self)
        builder = IndexBuilder(self._index)
        for cube in cubes:
            for key, value in cube._values.items():
                if builder.contains_key(key):
                    raise DuplicateKeyError(f"two or more cubes had the key {key!r}")
                builder.add(key, value)
        logger.debug(f"Merged {len(cubes)} cubes into {len(builder.values)} entries")
        return Cube(builder)

    def resolving_merge(self, combiner: Callable[[Collision], U],
                        *others: "Cube[T]") -> "Cube[U]":
        """
        Union this cube with ``others``, resolving shared keys.

        Values landing on one key are gathered into a Collision (other cubes
        in order, this cube last) and ``combiner`` is called exactly once per
        distinct key. Always rebuilds, even without ``others``, so the
        combiner sees every entry.
        """
        if combiner is None:
            raise MissingArgumentError("combiner must not be None")
        cubes = list(others)
        self._validate_merge(cubes)
        cubes.append(self)
        collisions: Dict[Key, Collision] = {}
        for cube in cubes:
            for key, value in cube._values.items():
                collision = collisions.get(key)
                if collision is None:
                    collision = collisions[key] = Collision(key)
                collision._add(value)
        builder = IndexBuilder(self._index)
        for key, collision in collisions.items():
            builder.add(key, combiner(collision))
        logger.debug(f"Resolving merge of {len(cubes)} cubes produced {len(collisions)} entries")
        return Cube(builder)

    def _validate_merge(self, others: List["Cube"]) -> None:
        for cube in others:
            if cube is None:
                raise MissingArgumentError("one or more of the cubes were None")
            if not self._has_same_dimensions(cube):
                raise DimensionMismatchError("cannot merge cubes with different dimensions")

    def _has_same_dimensions(self, other: "Cube") -> bool:
        return (len(other._index) == len(self._index)
                and all(dimension in self._index for dimension in other._index))

    # ------------------------------------------------------------------
    # Filtering
    # ------------------------------------------------------------------

    def splice(self, key_part: KeyPart) -> "Cube[T]":
        """
        Keep only the entries whose coordinate equals ``key_part``.

        The dimension is kept. Uses the reverse index, so the cost depends
        on the size of the result rather than the cube.
        """
        if key_part is None:
            raise MissingArgumentError("key_part must not be None")
        lookup = self._lookup(key_part.dimension)
        builder = IndexBuilder(self._index)
        for key in lookup.get(key_part, ()):
            builder.add(key, self._values[key])
        logger.debug(f"Spliced {key_part!r}: {len(builder.values)} of {len(self._values)} entries")
        return Cube(builder)

    def exclude(self, key_part: KeyPart) -> "Cube[T]":
        """Keep only the entries whose coordinate differs from ``key_part``."""
        if key_part is None:
            raise MissingArgumentError("key_part must not be None")
        self._lookup(key_part.dimension)
        builder = IndexBuilder(self._index)
        for key, value in self._values.items():
            if key.get_key_part(key_part.dimension) != key_part:
                builder.add(key, value)
        logger.debug(f"Excluded {key_part!r}: {len(builder.values)} of {len(self._values)} entries")
        return Cube(builder)

    def _lookup(self, dimension: Dimension) -> Dict[KeyPart, List[Key]]:
        if dimension is None:
            raise MissingArgumentError("dimension must not be None")
        try:
            return self._index[dimension]
        except KeyError:
            raise UnknownDimensionError(f"{dimension!r} is not in the cube") from None

    # ------------------------------------------------------------------
    # Reduction
    # ------------------------------------------------------------------

    def collapse(self, dimension: Dimension,
                 aggregator: Callable[[Group], U]) -> "Cube[U]":
        """
        Remove ``dimension`` by aggregating the entries it distinguished.

        Entries whose keys agree on every other dimension form a Group;
        ``aggregator`` turns each group into one value of the new cube.

        Raises:
            UnknownDimensionError: if ``dimension`` is not in the cube
        """
        self._lookup(dimension)
        if aggregator is None:
            raise MissingArgumentError("aggregator must not be None")
        groups: Dict[Key, Group] = {}
        for key, value in self._values.items():
            removed = key.get_key_part(dimension)
            reduced = key.drop(dimension)
            group = groups.get(reduced)
            if group is None:
                group = groups[reduced] = Group(reduced)
            group._add_pair(removed.value, value)
        builder = IndexBuilder(d for d in self._index if d is not dimension)
        for key, group in groups.items():
            builder.add(key, aggregator(group))
        logger.debug(f"Collapsed {dimension!r}: {len(self._values)} entries into {len(groups)}")
        return Cube(builder)

    def convert(self, converter: Callable[[T], U]) -> "Cube[U]":
        """Apply ``converter`` to every value; keys are unchanged."""
        if converter is None:
            raise MissingArgumentError("converter must not be None")
        builder = IndexBuilder(self._index)
        for key, value in self._values.items():
            builder.add(key, converter(value))
        return Cube(builder)


# Created once at import; shared by every zero-dimension define/singleton.
_NULL_CUBE = Cube(IndexBuilder(()))
