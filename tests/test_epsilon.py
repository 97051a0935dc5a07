#!/usr/bin/env python3
"""
Unit tests for tolerance-aware comparison.

Tests ToleranceValue and the comparison functions in approxkit.epsilon.
"""

import itertools

import numpy as np
import pytest
import torch

from approxkit.config import ComparisonMode
from approxkit.epsilon import (
    Ordering,
    ToleranceValue,
    compare,
    distance,
    distinguishable,
    equivalent,
    greater,
    greater_equal,
    less,
    less_equal,
)
from approxkit.errors import ConfigurationError, DomainError


class TestRelations:
    """Test cases for the six relational operators."""

    def test_distinct_values(self):
        a = ToleranceValue(0.0, 1.0)
        b = ToleranceValue(5.0, 1.0)

        assert not (a == b)
        assert a != b
        assert a < b
        assert not (a > b)
        assert b > a
        assert a <= b
        assert not (b <= a)

    def test_equivalent_values(self):
        a = ToleranceValue(0.0, 1.0)
        b = ToleranceValue(0.5, 1.0)

        assert a == b
        assert not (a != b)
        assert not (a < b)
        assert not (a > b)
        assert a <= b
        assert b <= a

    def test_boundary_is_inclusive(self):
        assert ToleranceValue(0.0, 1.0) == ToleranceValue(1.0, 1.0)
        assert ToleranceValue(0.0, 1.0) != ToleranceValue(1.25, 1.0)

    def test_larger_tolerance_wins(self):
        """A tight value compared with a loose one uses the loose radius."""
        tight = ToleranceValue(0.0, 0.1)
        loose = ToleranceValue(0.5, 1.0)

        assert tight == loose
        assert loose == tight
        assert tight != ToleranceValue(0.5, 0.1)

    def test_not_equal_is_complement(self):
        values = [ToleranceValue(v, e) for v, e in itertools.product(
            [-2.0, -0.5, 0.0, 0.75, 3.0], [0.0, 0.5, 1.0])]

        for a, b in itertools.product(values, repeat=2):
            assert (a == b) != (a != b)
            assert equivalent(a, b) == (not distinguishable(a, b))

    def test_non_transitive(self):
        """Tolerance chains drift: a == b and b == c but a != c."""
        a = ToleranceValue(0.0, 1.0)
        b = ToleranceValue(1.0, 1.0)
        c = ToleranceValue(2.0, 1.0)

        assert a == b
        assert b == c
        assert a != c

    def test_non_transitive_wider_steps(self):
        a = ToleranceValue(0.0, 1.5)
        b = ToleranceValue(1.5, 1.5)
        c = ToleranceValue(3.0, 1.5)

        assert a == b
        assert b == c
        assert a != c
        assert a < c

    def test_scalar_operand_has_zero_tolerance(self):
        x = ToleranceValue(1.0, 0.1)

        assert x == 1.05
        assert x != 1.5
        assert x < 1.5
        assert 1.5 > x


class TestGreaterEqual:
    """Both interpretations of >= are available."""

    def test_literal_mode(self):
        a = ToleranceValue(0.0, 1.0, mode="literal")
        b = ToleranceValue(0.5, 1.0, mode="literal")
        far = ToleranceValue(5.0, 1.0, mode="literal")

        # Equivalent and the right operand is larger
        assert a >= b
        # Equivalent but the right operand is smaller
        assert not (b >= a)
        # Strictly greater, yet not >= under the literal rule
        assert far > a
        assert not (far >= a)

    def test_corrected_mode(self):
        a = ToleranceValue(0.0, 1.0, mode=ComparisonMode.CORRECTED)
        b = ToleranceValue(0.5, 1.0, mode=ComparisonMode.CORRECTED)
        far = ToleranceValue(5.0, 1.0, mode=ComparisonMode.CORRECTED)

        assert a >= b
        assert b >= a
        assert far >= a
        assert not (a >= far)

    def test_mode_per_call(self):
        a = ToleranceValue(5.0, 1.0)
        b = ToleranceValue(0.0, 1.0)

        assert not greater_equal(a, b, mode="literal")
        assert greater_equal(a, b, mode="corrected")

    def test_default_mode_is_literal(self):
        assert ToleranceValue(0.0, 1.0).mode is ComparisonMode.LITERAL

    def test_unknown_mode(self):
        with pytest.raises(ConfigurationError):
            ToleranceValue(0.0, 1.0, mode="sloppy")


class TestNamedComparisons:
    """Named predicates and the tri-state comparison."""

    def test_predicates_match_operators(self):
        a = ToleranceValue(0.0, 0.5)
        b = ToleranceValue(2.0, 0.5)

        assert less(a, b) == (a < b)
        assert greater(a, b) == (a > b)
        assert less_equal(a, b) == (a <= b)
        assert greater_equal(a, b) == (a >= b)

    def test_compare(self):
        a = ToleranceValue(0.0, 1.0)

        assert compare(a, ToleranceValue(0.5, 0.0)) is Ordering.EQUIVALENT
        assert compare(a, ToleranceValue(3.0, 1.0)) is Ordering.LESS
        assert compare(a, ToleranceValue(-3.0, 1.0)) is Ordering.GREATER


class TestElementwise:
    """Arrays and tensors are compared element by element."""

    def test_ndarray_relations(self):
        a = ToleranceValue(np.array([0.0, 5.0, 0.0]), 1.0)
        b = ToleranceValue(np.array([3.0, 5.5, -3.0]), 1.0)

        np.testing.assert_array_equal(a == b, [False, True, False])
        np.testing.assert_array_equal(a != b, [True, False, True])
        np.testing.assert_array_equal(a < b, [True, False, False])
        np.testing.assert_array_equal(a > b, [False, False, True])
        np.testing.assert_array_equal(a <= b, [True, True, False])
        np.testing.assert_array_equal(greater_equal(a, b, mode="literal"), [False, True, False])
        np.testing.assert_array_equal(greater_equal(a, b, mode="corrected"), [False, True, True])

    def test_ndarray_tolerance(self):
        a = ToleranceValue(np.array([0.0, 0.0]), np.array([0.1, 2.0]))
        b = ToleranceValue(np.array([1.0, 1.0]), np.array([0.1, 0.1]))

        np.testing.assert_array_equal(equivalent(a, b), [False, True])
        np.testing.assert_array_equal(less(a, b), [True, False])

    def test_tensor_relations(self):
        a = ToleranceValue(torch.tensor([0.0, 5.0]), 1.0)
        b = ToleranceValue(torch.tensor([3.0, 5.5]), 1.0)

        assert torch.equal(a < b, torch.tensor([True, False]))
        assert torch.equal(a == b, torch.tensor([False, True]))
        assert torch.equal(less_equal(b, a), torch.tensor([False, True]))

    def test_compare_requires_scalars(self):
        a = ToleranceValue(np.array([0.0, 5.0]), 1.0)
        b = ToleranceValue(np.array([3.0, 5.5]), 1.0)

        with pytest.raises(DomainError):
            compare(a, b)

    def test_negative_tolerance_element(self):
        with pytest.raises(DomainError):
            ToleranceValue(np.array([0.0, 1.0]), np.array([0.5, -0.5]))


class TestDistance:
    """distance on plain values and lifted to tolerance values."""

    def test_plain(self):
        assert distance(3.0, 5.0) == 2.0
        assert distance(5.0, 3.0) == 2.0

    def test_lifted(self):
        a = ToleranceValue(0.0, 1.0)
        b = ToleranceValue(5.0, 0.25)

        d = distance(a, b)

        assert isinstance(d, ToleranceValue)
        assert d.value == 5.0
        assert d.eps == 1.0

    def test_lifted_distances_compare_approximately(self):
        d1 = distance(ToleranceValue(0.0, 1.0), ToleranceValue(5.0, 1.0))
        d2 = distance(ToleranceValue(0.0, 0.5), ToleranceValue(5.5, 0.5))

        assert d1 == d2


class TestValueObject:
    """Construction, conversion and immutability."""

    def test_conversion(self):
        x = ToleranceValue(2.5, 0.1)
        assert float(x) == 2.5
        assert x.value == 2.5
        assert x.eps == 0.1

    def test_immutable(self):
        x = ToleranceValue(2.5, 0.1)
        with pytest.raises(AttributeError):
            x.value = 3.0
        with pytest.raises(AttributeError):
            del x.eps

    def test_unhashable(self):
        with pytest.raises(TypeError):
            hash(ToleranceValue(0.0, 1.0))

    def test_negative_tolerance(self):
        with pytest.raises(DomainError):
            ToleranceValue(0.0, -1.0)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
