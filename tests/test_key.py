"""
Unit tests for dimensions, key parts and keys.
"""

import pytest
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from lookupcube.cube.dimension import (
    Dimension, NaturalEquality, ProjectedEquality, CaseInsensitiveEquality, CallableEquality
)
from lookupcube.cube.key import Key, KeyPart
from lookupcube.errors import (
    DuplicateDimensionError, MissingArgumentError, MissingDimensionError
)


@pytest.fixture
def color():
    return Dimension.natural("color")


@pytest.fixture
def size():
    return Dimension.natural("size")


class TestDimension:
    def test_identity_not_structure(self):
        a = Dimension(NaturalEquality(), "axis")
        b = Dimension(NaturalEquality(), "axis")
        assert a != b
        assert a == a
        assert len({a, b}) == 2

    def test_strategy_required(self):
        with pytest.raises(MissingArgumentError):
            Dimension(None)

    def test_strategy_is_fixed(self, color):
        with pytest.raises(AttributeError):
            color.strategy = CaseInsensitiveEquality()

    def test_projected_equality(self):
        parity = Dimension(ProjectedEquality(lambda n: n % 2), "parity")
        assert KeyPart(parity, 1) == KeyPart(parity, 3)
        assert hash(KeyPart(parity, 1)) == hash(KeyPart(parity, 3))
        assert KeyPart(parity, 1) != KeyPart(parity, 2)

    def test_callable_equality(self):
        rounded = Dimension(CallableEquality(lambda a, b: round(a) == round(b),
                                             lambda v: hash(round(v))))
        assert KeyPart(rounded, 1.1) == KeyPart(rounded, 0.9)

    def test_callable_equality_requires_both(self):
        with pytest.raises(MissingArgumentError):
            CallableEquality(None, hash)


class TestKeyPart:
    def test_missing_arguments(self, color):
        with pytest.raises(MissingArgumentError):
            KeyPart(None, "red")
        with pytest.raises(MissingArgumentError):
            KeyPart(color, None)

    def test_equality_uses_dimension_identity(self, color):
        other = Dimension.natural("color")
        assert KeyPart(color, "red") == KeyPart(color, "red")
        assert KeyPart(color, "red") != KeyPart(other, "red")
        assert KeyPart(color, "red") != KeyPart(color, "blue")

    def test_case_insensitive_dimension(self):
        product = Dimension(CaseInsensitiveEquality(), "product")
        assert KeyPart(product, "SKU-1") == KeyPart(product, "sku-1")
        assert hash(KeyPart(product, "SKU-1")) == hash(KeyPart(product, "sku-1"))


class TestKey:
    def test_duplicate_dimension(self, color):
        with pytest.raises(DuplicateDimensionError):
            Key(KeyPart(color, "red"), KeyPart(color, "blue"))

    def test_none_part(self, color):
        with pytest.raises(MissingArgumentError):
            Key(KeyPart(color, "red"), None)

    def test_order_independent_equality(self, color, size):
        a = Key(KeyPart(color, "red"), KeyPart(size, 10))
        b = Key(KeyPart(size, 10), KeyPart(color, "red"))
        assert a == b
        assert hash(a) == hash(b)

    def test_different_dimension_sets_are_unequal(self, color, size):
        a = Key(KeyPart(color, "red"))
        b = Key(KeyPart(color, "red"), KeyPart(size, 10))
        assert a != b
        assert b != a

    def test_hash_is_xor_of_parts(self, color, size):
        red = KeyPart(color, "red")
        ten = KeyPart(size, 10)
        assert hash(Key(red, ten)) == hash(red) ^ hash(ten)
        assert hash(Key()) == 0

    def test_get_key_part(self, color, size):
        key = Key(KeyPart(color, "red"))
        assert key.get_key_part(color) == KeyPart(color, "red")
        assert key.get_value(color) == "red"
        with pytest.raises(MissingDimensionError):
            key.get_key_part(size)

    def test_missing_dimension_is_a_key_error(self, color, size):
        with pytest.raises(KeyError):
            Key(KeyPart(color, "red")).get_key_part(size)

    def test_extend_and_drop(self, color, size):
        key = Key(KeyPart(color, "red"))
        extended = key.extend(KeyPart(size, 10))
        assert extended.dimensions == frozenset([color, size])
        assert extended.drop(size) == key
        assert len(key) == 1
        with pytest.raises(DuplicateDimensionError):
            extended.extend(KeyPart(size, 12))

    def test_from_parts(self, color, size):
        parts = [KeyPart(color, "red"), KeyPart(size, 10)]
        assert Key.from_parts(parts) == Key(*parts)
        assert color in Key.from_parts(parts)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
