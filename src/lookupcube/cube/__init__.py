"""
Cube module: dimensions, keys and the immutable lookup cube engine.
"""

from lookupcube.cube.dimension import (
    Dimension, EqualityStrategy, NaturalEquality, ProjectedEquality,
    CaseInsensitiveEquality, CallableEquality
)
from lookupcube.cube.key import Key, KeyPart
from lookupcube.cube.groups import Group, GroupPair, Collision
from lookupcube.cube.engine import Cube
from lookupcube.cube.aggregates import (
    AggregateFunction, group_aggregator, collision_combiner
)
from lookupcube.cube.frame import (
    CubeSummary, cube_from_frame, cube_to_frame, summarize
)

__all__ = [
    "Dimension", "EqualityStrategy", "NaturalEquality", "ProjectedEquality",
    "CaseInsensitiveEquality", "CallableEquality",
    "Key", "KeyPart",
    "Group", "GroupPair", "Collision",
    "Cube",
    "AggregateFunction", "group_aggregator", "collision_combiner",
    "CubeSummary", "cube_from_frame", "cube_to_frame", "summarize",
]
