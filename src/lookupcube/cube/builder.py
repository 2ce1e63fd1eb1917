"""
Scratch index used while a new Cube is being assembled.

An IndexBuilder never outlives the operation that creates it: the Cube
constructor takes over its tables and the builder is discarded.
"""

from typing import Any, Dict, Iterable, List

from lookupcube.cube.dimension import Dimension
from lookupcube.cube.key import Key, KeyPart
from lookupcube.errors import (
    DimensionMismatchError, DuplicateDimensionError, DuplicateKeyError,
    MissingArgumentError
)

ReverseIndex = Dict[Dimension, Dict[KeyPart, List[Key]]]


def index_key(index: ReverseIndex, key: Key) -> None:
    """Append ``key`` to the reverse-index bucket of each of its parts."""
    for part in key:
        index[part.dimension].setdefault(part, []).append(key)


def check_key_dimensions(index: ReverseIndex, key: Key) -> None:
    """Raise DimensionMismatchError unless ``key`` covers exactly the indexed dimensions."""
    if len(key) != len(index) or any(part.dimension not in index for part in key):
        raise DimensionMismatchError(
            f"{key!r} does not match the cube dimensions {list(index)!r}"
        )


class IndexBuilder:
    """
    Accumulates a value table and a per-dimension reverse index.

    Not thread-safe; owned by exactly one constructing operation.
    """

    def __init__(self, dimensions: Iterable[Dimension]):
        self.index: ReverseIndex = {}
        for dimension in dimensions:
            if dimension is None:
                raise MissingArgumentError("one or more of the dimensions were None")
            if dimension in self.index:
                raise DuplicateDimensionError(f"{dimension!r} appears more than once")
            self.index[dimension] = {}
        self.values: Dict[Key, Any] = {}

    @property
    def dimensions(self) -> List[Dimension]:
        return list(self.index)

    def add(self, key: Key, value: Any) -> None:
        if key in self.values:
            raise DuplicateKeyError(f"{key!r} is already present")
        check_key_dimensions(self.index, key)
        self.values[key] = value
        index_key(self.index, key)

    def contains_key(self, key: Key) -> bool:
        return key in self.values
