"""
Tabular interop: build cubes from pandas DataFrames and flatten them back.

Each row of the frame becomes one singleton cube; all singletons are then
combined in a single merge (or resolving merge) so the result is built once.
"""

import logging
import numbers
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional

import numpy as np
import pandas as pd

from lookupcube.cube.dimension import Dimension
from lookupcube.cube.engine import Cube
from lookupcube.cube.groups import Collision
from lookupcube.cube.key import Key, KeyPart
from lookupcube.errors import MissingArgumentError

logger = logging.getLogger(__name__)


def cube_from_frame(frame: pd.DataFrame,
                    dimensions: Dict[str, Dimension],
                    value_column: str,
                    combiner: Optional[Callable[[Collision], Any]] = None) -> Cube:
    """
    Build a cube from the rows of ``frame``.

    Args:
        frame: Source records, one fact per row
        dimensions: Maps column name -> Dimension; the column holds the coordinate
        value_column: Column holding the cube values
        combiner: Resolves rows sharing a key; without it shared keys raise
            DuplicateKeyError

    Returns:
        Cube over ``dimensions`` (in mapping order)
    """
    if frame is None:
        raise MissingArgumentError("frame must not be None")
    if not dimensions:
        raise MissingArgumentError("at least one dimension column is required")
    columns = list(dimensions)
    missing = [c for c in columns + [value_column] if c not in frame.columns]
    if missing:
        raise ValueError(f"Unknown columns: {missing}. Available: {list(frame.columns)}")

    complete = frame.dropna(subset=columns)
    dropped = len(frame) - len(complete)
    if dropped:
        logger.warning(f"Dropped {dropped} rows with a missing coordinate")

    coordinates = zip(*(complete[c].tolist() for c in columns))
    singletons = []
    for row, value in zip(coordinates, complete[value_column].tolist()):
        key = Key(*(KeyPart(dimensions[c], v) for c, v in zip(columns, row)))
        singletons.append(Cube.singleton(key, value))

    base = Cube.define(*dimensions.values())
    if combiner is None:
        cube = base.merge(*singletons)
    else:
        cube = base.resolving_merge(combiner, *singletons)
    logger.info(f"Built cube with {len(cube)} entries from {len(complete)} rows")
    return cube


def _column_names(cube: Cube) -> List[str]:
    return [d.name or f"dim_{i}" for i, d in enumerate(cube.dimensions)]


def cube_to_frame(cube: Cube, value_column: str = "value") -> pd.DataFrame:
    """Flatten ``cube`` to one row per entry: a column per dimension plus the value."""
    if cube is None:
        raise MissingArgumentError("cube must not be None")
    names = _column_names(cube)
    if len(set(names)) != len(names) or value_column in names:
        raise ValueError(f"Column names must be distinct: {names + [value_column]}")

    records: Dict[str, List[Any]] = {name: [] for name in names}
    records[value_column] = []
    for key, value in cube.items():
        for name, dimension in zip(names, cube.dimensions):
            records[name].append(key.get_value(dimension))
        records[value_column].append(value)
    return pd.DataFrame(records, columns=names + [value_column])


@dataclass
class CubeSummary:
    """
    Shape and value statistics of a cube.

    Attributes:
        row_count: Number of entries
        cardinality: Distinct coordinates per dimension (by column name)
        statistics: mean/std/min/max of the values; empty if not numeric
    """
    row_count: int
    cardinality: Dict[str, int]
    statistics: Dict[str, float] = field(default_factory=dict)

    def get_summary(self) -> Dict[str, Any]:
        return {
            "row_count": self.row_count,
            "dimensions": self.cardinality,
            "values": self.statistics,
        }


def _is_number(value: Any) -> bool:
    return isinstance(value, (numbers.Real, Decimal)) and not isinstance(value, bool)


def summarize(cube: Cube) -> CubeSummary:
    """Compute a CubeSummary for ``cube``."""
    names = _column_names(cube)
    cardinality = {
        name: len(cube.get_unique_key_parts(dimension))
        for name, dimension in zip(names, cube.dimensions)
    }
    statistics: Dict[str, float] = {}
    values = cube.values()
    if values and all(_is_number(v) for v in values):
        data = np.asarray(values, dtype=float)
        statistics = {
            "mean": float(np.mean(data)),
            "std": float(np.std(data, ddof=1)) if len(data) > 1 else 0.0,
            "min": float(np.min(data)),
            "max": float(np.max(data)),
        }
    return CubeSummary(row_count=len(cube), cardinality=cardinality, statistics=statistics)
