"""
Stock aggregate functions for Collapse and ResolvingMerge.

``AggregateFunction.SUM.reduce(values)`` works on any sequence; the
adapters turn an aggregate into the callable each cube operation expects:

    cube.collapse(week, group_aggregator(AggregateFunction.SUM))
    cube.resolving_merge(collision_combiner(AggregateFunction.MAX), other)
"""

from enum import Enum
from typing import Any, Callable, Sequence

from lookupcube.cube.groups import Collision, Group


class AggregateFunction(Enum):
    """Supported aggregate functions."""
    SUM = "SUM"
    AVG = "AVG"
    COUNT = "COUNT"
    MIN = "MIN"
    MAX = "MAX"
    FIRST = "FIRST"
    LAST = "LAST"

    def reduce(self, values: Sequence[Any]) -> Any:
        """
        Reduce ``values`` to a single value.

        SUM and AVG use plain Python arithmetic so Decimal inputs stay exact.

        Raises:
            ValueError: if ``values`` is empty (except for COUNT)
        """
        values = list(values)
        if self is AggregateFunction.COUNT:
            return len(values)
        if not values:
            raise ValueError(f"{self.value} of an empty sequence")
        if self is AggregateFunction.SUM:
            return sum(values[1:], values[0])
        elif self is AggregateFunction.AVG:
            return sum(values[1:], values[0]) / len(values)
        elif self is AggregateFunction.MIN:
            return min(values)
        elif self is AggregateFunction.MAX:
            return max(values)
        elif self is AggregateFunction.FIRST:
            return values[0]
        else:
            return values[-1]


def group_aggregator(function: AggregateFunction) -> Callable[[Group], Any]:
    """Return a Collapse aggregator applying ``function`` to each group's values."""
    def aggregate(group: Group) -> Any:
        return function.reduce(group.values)
    aggregate.__name__ = f"group_{function.value.lower()}"
    return aggregate


def collision_combiner(function: AggregateFunction) -> Callable[[Collision], Any]:
    """Return a ResolvingMerge combiner applying ``function`` to each collision."""
    def combine(collision: Collision) -> Any:
        return function.reduce(collision.values)
    combine.__name__ = f"collision_{function.value.lower()}"
    return combine
