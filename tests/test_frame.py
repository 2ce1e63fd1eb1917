"""
Unit tests for stock aggregates and DataFrame interop.
"""

from decimal import Decimal

import numpy as np
import pandas as pd
import pytest
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from lookupcube.cube.aggregates import AggregateFunction, collision_combiner, group_aggregator
from lookupcube.cube.dimension import Dimension
from lookupcube.cube.engine import Cube
from lookupcube.cube.frame import cube_from_frame, cube_to_frame, summarize
from lookupcube.cube.key import Key, KeyPart
from lookupcube.errors import DuplicateKeyError, MissingArgumentError


@pytest.fixture
def dims():
    return {"store": Dimension.natural("store"), "item": Dimension.natural("item")}


@pytest.fixture
def fact_df():
    return pd.DataFrame({
        'store': ['CA_1', 'CA_1', 'TX_1', 'TX_1', 'TX_1'],
        'item': ['A', 'B', 'A', 'B', 'B'],
        'units': [100, 200, 150, 250, 50],
    })


class TestAggregateFunction:
    def test_reduce(self):
        values = [3, 1, 2]
        assert AggregateFunction.SUM.reduce(values) == 6
        assert AggregateFunction.AVG.reduce(values) == 2
        assert AggregateFunction.COUNT.reduce(values) == 3
        assert AggregateFunction.MIN.reduce(values) == 1
        assert AggregateFunction.MAX.reduce(values) == 3
        assert AggregateFunction.FIRST.reduce(values) == 3
        assert AggregateFunction.LAST.reduce(values) == 2

    def test_decimal_sum_is_exact(self):
        values = [Decimal("0.10"), Decimal("0.20")]
        assert AggregateFunction.SUM.reduce(values) == Decimal("0.30")

    def test_empty(self):
        assert AggregateFunction.COUNT.reduce([]) == 0
        with pytest.raises(ValueError):
            AggregateFunction.SUM.reduce([])

    def test_adapters(self, dims):
        key = Key(KeyPart(dims["store"], "CA_1"), KeyPart(dims["item"], "A"))
        cube = Cube.singleton(key, 2).resolving_merge(
            collision_combiner(AggregateFunction.MAX), Cube.singleton(key, 5)
        )
        assert cube[key] == 5
        by_store = cube.collapse(dims["item"], group_aggregator(AggregateFunction.COUNT))
        assert by_store[Key(KeyPart(dims["store"], "CA_1"))] == 1


class TestCubeFromFrame:
    def test_duplicate_rows_without_combiner(self, fact_df, dims):
        with pytest.raises(DuplicateKeyError):
            cube_from_frame(fact_df, dims, 'units')

    def test_combiner_resolves_duplicates(self, fact_df, dims):
        cube = cube_from_frame(fact_df, dims, 'units',
                               combiner=collision_combiner(AggregateFunction.SUM))
        assert len(cube) == 4
        key = Key(KeyPart(dims["store"], "TX_1"), KeyPart(dims["item"], "B"))
        assert cube[key] == 300

    def test_rows_with_missing_coordinate_are_dropped(self, dims):
        df = pd.DataFrame({'store': ['CA_1', None], 'item': ['A', 'B'], 'units': [1, 2]})
        cube = cube_from_frame(df, dims, 'units')
        assert len(cube) == 1

    def test_empty_frame(self, dims):
        df = pd.DataFrame({'store': [], 'item': [], 'units': []})
        cube = cube_from_frame(df, dims, 'units')
        assert cube.is_empty
        assert cube.dimensions == (dims["store"], dims["item"])

    def test_unknown_column(self, fact_df, dims):
        with pytest.raises(ValueError):
            cube_from_frame(fact_df, dims, 'revenue')

    def test_requires_dimensions(self, fact_df):
        with pytest.raises(MissingArgumentError):
            cube_from_frame(fact_df, {}, 'units')


class TestCubeToFrame:
    def test_flatten(self, fact_df, dims):
        cube = cube_from_frame(fact_df.iloc[:4], dims, 'units')
        df = cube_to_frame(cube, value_column='units')
        assert list(df.columns) == ['store', 'item', 'units']
        assert len(df) == 4
        assert df['units'].sum() == 700

    def test_unnamed_dimensions(self):
        axis = Dimension.natural()
        cube = Cube.singleton(Key(KeyPart(axis, 1)), 'x')
        assert list(cube_to_frame(cube).columns) == ['dim_0', 'value']


class TestSummarize:
    def test_numeric_statistics(self, fact_df, dims):
        cube = cube_from_frame(fact_df.iloc[:4], dims, 'units')
        summary = summarize(cube)
        assert summary.row_count == 4
        assert summary.cardinality == {'store': 2, 'item': 2}
        assert summary.statistics['mean'] == pytest.approx(175.0)
        assert summary.statistics['std'] == pytest.approx(np.std([100, 200, 150, 250], ddof=1))
        assert summary.statistics['max'] == 250.0

    def test_non_numeric_values(self, dims):
        cube = Cube.singleton(Key(KeyPart(dims["store"], "CA_1"), KeyPart(dims["item"], "A")), "n/a")
        assert summarize(cube).statistics == {}

    def test_numeric_looking_strings_are_not_numbers(self, dims):
        cube = Cube.define(dims["store"], dims["item"]).merge(
            Cube.singleton(Key(KeyPart(dims["store"], "CA_1"), KeyPart(dims["item"], "A")), "10"),
            Cube.singleton(Key(KeyPart(dims["store"], "CA_1"), KeyPart(dims["item"], "B")), "20"),
        )
        assert summarize(cube).statistics == {}

    def test_decimal_values_are_numbers(self, dims):
        cube = Cube.singleton(Key(KeyPart(dims["store"], "CA_1"), KeyPart(dims["item"], "A")),
                              Decimal("2.5"))
        assert summarize(cube).statistics["mean"] == pytest.approx(2.5)

    def test_get_summary(self, dims):
        summary = summarize(Cube.define(dims["store"], dims["item"]))
        assert summary.get_summary() == {
            "row_count": 0,
            "dimensions": {"store": 0, "item": 0},
            "values": {},
        }


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
