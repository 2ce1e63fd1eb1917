"""
Containers handed to caller-supplied reduction functions.

A Group gathers the entries that Collapse folds into one reduced key. A
Collision gathers the values that ResolvingMerge finds on one key across
the merged cubes. Both are filled by the cube engine and are read-only to
the aggregator or combiner that receives them.
"""

from dataclasses import dataclass
from typing import Any, Iterator, List, Tuple

from lookupcube.cube.key import Key


@dataclass(frozen=True)
class GroupPair:
    """One collapsed entry: the removed coordinate value and the original value."""
    key_part_value: Any
    value: Any


class Group:
    """
    Entries that reduce to the same key when a dimension is collapsed.

    Attributes:
        key: The reduced key (without the collapsed dimension)
        pairs: GroupPair per original entry, in table iteration order
    """

    def __init__(self, key: Key):
        self._key = key
        self._pairs: List[GroupPair] = []

    @property
    def key(self) -> Key:
        return self._key

    @property
    def pairs(self) -> Tuple[GroupPair, ...]:
        return tuple(self._pairs)

    @property
    def values(self) -> List[Any]:
        """The original values, without their removed coordinates."""
        return [pair.value for pair in self._pairs]

    def _add_pair(self, key_part_value: Any, value: Any) -> None:
        self._pairs.append(GroupPair(key_part_value, value))

    def __len__(self):
        return len(self._pairs)

    def __iter__(self) -> Iterator[GroupPair]:
        return iter(self._pairs)

    def __repr__(self):
        return f"Group({self._key!r}, pairs={len(self._pairs)})"


class Collision:
    """
    Values that land on the same key in a resolving merge.

    Values are ordered by contributing cube; the receiving cube contributes
    last.
    """

    def __init__(self, key: Key):
        self._key = key
        self._values: List[Any] = []

    @property
    def key(self) -> Key:
        return self._key

    @property
    def values(self) -> Tuple[Any, ...]:
        return tuple(self._values)

    def _add(self, value: Any) -> None:
        self._values.append(value)

    def __len__(self):
        return len(self._values)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._values)

    def __repr__(self):
        return f"Collision({self._key!r}, values={len(self._values)})"
