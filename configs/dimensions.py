"""
Reusable dimension sets for the example datasets.

- calendar: month -> week -> day_of_week, for dated facts
- retail: store and product, with product codes compared case-insensitively

Dimensions are identities: build a set once and share it between every cube
that must be merged or queried together.
"""

from datetime import date
from typing import Dict

from lookupcube.cube.dimension import CaseInsensitiveEquality, Dimension
from lookupcube.cube.key import Key, KeyPart


def create_calendar_dimensions() -> Dict[str, Dimension]:
    """
    Calendar dimensions.

    - month: 1..12
    - week: day of year // 7 (0..52)
    - day_of_week: weekday name, e.g. 'Sunday'
    """
    return {
        "month": Dimension.natural("month"),
        "week": Dimension.natural("week"),
        "day_of_week": Dimension.natural("day_of_week"),
    }


def create_retail_dimensions() -> Dict[str, Dimension]:
    """Store and product dimensions; 'sku-1' and 'SKU-1' are one product."""
    return {
        "store": Dimension.natural("store"),
        "product": Dimension(CaseInsensitiveEquality(), "product"),
    }


def calendar_key(dimensions: Dict[str, Dimension], day: date) -> Key:
    """Build the calendar Key for ``day``."""
    return Key(
        KeyPart(dimensions["month"], day.month),
        KeyPart(dimensions["week"], day.timetuple().tm_yday // 7),
        KeyPart(dimensions["day_of_week"], day.strftime("%A")),
    )


# Dimension set registry
DIMENSION_SETS = {
    "calendar": create_calendar_dimensions,
    "retail": create_retail_dimensions,
}


def get_dimensions(name: str) -> Dict[str, Dimension]:
    """Get a fresh dimension set by name."""
    if name not in DIMENSION_SETS:
        raise ValueError(f"Unknown dimension set: {name}. Available: {list(DIMENSION_SETS.keys())}")
    return DIMENSION_SETS[name]()
