"""
lookupcube: an in-memory multi-dimensional associative lookup structure.

Index a sparse set of values by any number of orthogonal dimensions, then
splice, exclude, merge and collapse the resulting cube without re-scanning
the data for every query.
"""

__version__ = "0.1.0"

from lookupcube.cube.dimension import Dimension, EqualityStrategy
from lookupcube.cube.key import Key, KeyPart
from lookupcube.cube.groups import Group, Collision
from lookupcube.cube.engine import Cube
from lookupcube.cube.aggregates import AggregateFunction
from lookupcube.errors import CubeError

__all__ = [
    "Dimension",
    "EqualityStrategy",
    "Key",
    "KeyPart",
    "Group",
    "Collision",
    "Cube",
    "AggregateFunction",
    "CubeError",
]
