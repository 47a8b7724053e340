"""
test_money.py — Test suite for the money comparator

================================================================================
TEST STRUCTURE
================================================================================

1. UNIT TESTS
   Deterministic cases: rounding ties, sign handling, input types,
   alternative rounding modes, sorting.

2. PROPERTY-BASED TESTS (Hypothesis)
   Properties that must hold for ANY finite decimal amount:
   idempotence, fixed exponent, bounded rounding error, ordering laws.

================================================================================
"""

import dataclasses
from decimal import Decimal

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from quickbooks_common import (
    MoneyComparator,
    RoundingMode,
    DEFAULT_COMPARATOR,
    apply_precision,
    compare,
    are_amounts_equal,
    InvalidArgumentError,
)


# ==============================================================================
# TEST HELPERS
# ==============================================================================

def amounts(places=6, limit=10_000_000):
    """Finite decimal amounts with more precision than cents."""
    return st.decimals(
        min_value=-limit,
        max_value=limit,
        allow_nan=False,
        allow_infinity=False,
        places=places,
    )


# ==============================================================================
# UNIT TESTS: apply_precision
# ==============================================================================

class TestApplyPrecision:
    """Tests for rounding to two decimal places."""

    def test_half_up_positive_tie(self):
        assert apply_precision(Decimal("0.125")) == Decimal("0.13")

    def test_half_up_negative_tie(self):
        # ties move away from zero on both sides
        assert apply_precision(Decimal("-0.125")) == Decimal("-0.13")

    def test_rounds_down_below_tie(self):
        assert apply_precision(Decimal("10.004")) == Decimal("10.00")

    def test_rounds_up_above_tie(self):
        assert apply_precision(Decimal("10.006")) == Decimal("10.01")

    def test_carry_into_integer_part(self):
        assert apply_precision(Decimal("9.995")) == Decimal("10.00")

    def test_pads_to_two_places(self):
        result = apply_precision(Decimal("5"))
        assert str(result) == "5.00"
        assert result.as_tuple().exponent == -2

    def test_accepts_int(self):
        assert str(apply_precision(7)) == "7.00"

    def test_does_not_touch_input(self):
        value = Decimal("3.14159")
        result = apply_precision(value)
        assert value == Decimal("3.14159")
        assert result is not value

    def test_large_amount_beyond_context_precision(self):
        """More digits than the default 28-digit context still rounds exactly."""
        value = Decimal("1" + "0" * 40 + ".005")
        assert apply_precision(value) == Decimal("1" + "0" * 40 + ".01")

    def test_exponent_beyond_default_context_range(self):
        """Exponents past the default Emax still round without InvalidOperation."""
        result = apply_precision(Decimal("1E+1000000"))
        assert result == Decimal("1E+1000000")
        assert result.as_tuple().exponent == -2

    def test_tiny_exponent_rounds_to_zero(self):
        assert apply_precision(Decimal("1E-1000000")) == Decimal("0.00")

    def test_huge_amounts_compare(self):
        assert compare(Decimal("2E+1000000"), Decimal("1E+1000000")) == 1

    def test_float_is_refused(self):
        with pytest.raises(TypeError):
            apply_precision(0.125)

    @pytest.mark.parametrize("value", [True, False])
    def test_bool_is_refused(self, value):
        with pytest.raises(TypeError):
            apply_precision(value)

    def test_string_is_refused(self):
        with pytest.raises(TypeError):
            apply_precision("0.125")

    @pytest.mark.parametrize("value", ["NaN", "Infinity", "-Infinity", "sNaN"])
    def test_non_finite_is_refused(self, value):
        with pytest.raises(InvalidArgumentError) as exc_info:
            apply_precision(Decimal(value))
        assert isinstance(exc_info.value, ValueError)
        assert exc_info.value.code == "INVALID_ARGUMENT"


# ==============================================================================
# UNIT TESTS: compare / are_amounts_equal
# ==============================================================================

class TestCompare:
    """Tests for three-way comparison of rounded amounts."""

    def test_sub_cent_difference_is_equal(self):
        assert compare(Decimal("10.001"), Decimal("10.004")) == 0

    def test_greater(self):
        assert compare(Decimal("10.006"), Decimal("10.001")) == 1

    def test_less(self):
        assert compare(Decimal("10.001"), Decimal("10.006")) == -1

    def test_scale_does_not_matter(self):
        assert compare(Decimal("1.5"), Decimal("1.500000")) == 0

    def test_int_and_decimal(self):
        assert compare(10, Decimal("10.004")) == 0

    def test_comparator_is_callable(self):
        assert MoneyComparator()(Decimal("2.00"), Decimal("1.99")) == 1


class TestAreAmountsEqual:
    """Tests for equality of monetary amounts."""

    def test_equal_after_rounding(self):
        assert are_amounts_equal(Decimal("10.001"), Decimal("10.004"))

    def test_not_equal_after_rounding(self):
        assert not are_amounts_equal(Decimal("10.001"), Decimal("10.006"))

    def test_negative_amounts(self):
        assert are_amounts_equal(Decimal("-0.125"), Decimal("-0.13"))
        assert not are_amounts_equal(Decimal("-0.125"), Decimal("0.125"))

    def test_zero_and_negative_zero(self):
        assert are_amounts_equal(Decimal("-0.001"), Decimal("0"))


# ==============================================================================
# UNIT TESTS: MoneyComparator configuration
# ==============================================================================

class TestMoneyComparator:
    """Tests for non-default rounding modes and precision."""

    def test_default_policy(self):
        assert DEFAULT_COMPARATOR.places == 2
        assert DEFAULT_COMPARATOR.rounding is RoundingMode.HALF_UP

    @pytest.mark.parametrize(
        "mode, value, expected",
        [
            (RoundingMode.HALF_EVEN, "0.125", "0.12"),
            (RoundingMode.HALF_EVEN, "0.135", "0.14"),
            (RoundingMode.HALF_DOWN, "0.125", "0.12"),
            (RoundingMode.HALF_DOWN, "0.126", "0.13"),
            (RoundingMode.UP, "0.121", "0.13"),
            (RoundingMode.UP, "-0.121", "-0.13"),
            (RoundingMode.DOWN, "0.129", "0.12"),
            (RoundingMode.DOWN, "-0.129", "-0.12"),
        ],
    )
    def test_rounding_modes(self, mode, value, expected):
        comparator = MoneyComparator(rounding=mode)
        assert comparator.apply_precision(Decimal(value)) == Decimal(expected)

    def test_zero_places(self):
        comparator = MoneyComparator(places=0)
        result = comparator.apply_precision(Decimal("2.5"))
        assert result == Decimal("3")
        assert result.as_tuple().exponent == 0

    def test_three_places(self):
        comparator = MoneyComparator(places=3)
        assert comparator.apply_precision(Decimal("1.0005")) == Decimal("1.001")
        assert not comparator.are_amounts_equal(Decimal("1.001"), Decimal("1.004"))

    @pytest.mark.parametrize("places", [-1, True, "2", 2.0])
    def test_invalid_places(self, places):
        with pytest.raises(InvalidArgumentError):
            MoneyComparator(places=places)

    def test_rounding_must_be_enum(self):
        with pytest.raises(TypeError):
            MoneyComparator(rounding="ROUND_HALF_UP")

    def test_is_immutable(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            DEFAULT_COMPARATOR.places = 4


class TestSorting:
    """The comparator orders collections of amounts."""

    def test_sorted_with_key(self):
        values = [Decimal("1.006"), Decimal("0.5"), Decimal("1.004")]
        result = sorted(values, key=MoneyComparator().key)
        assert result == [Decimal("0.5"), Decimal("1.004"), Decimal("1.006")]

    def test_sort_is_stable_for_equal_amounts(self):
        values = [Decimal("1.004"), Decimal("1.001"), Decimal("1.003")]
        result = sorted(values, key=MoneyComparator().key)
        assert result == values

    def test_max_by_rounded_amount(self):
        values = [Decimal("2.994"), Decimal("2.996"), Decimal("1")]
        assert max(values, key=DEFAULT_COMPARATOR.key) == Decimal("2.996")


# ==============================================================================
# PROPERTY-BASED TESTS
# ==============================================================================

class TestProperties:
    """Properties that hold for every finite amount."""

    @given(value=amounts())
    @settings(max_examples=500)
    def test_idempotent(self, value):
        once = apply_precision(value)
        assert apply_precision(once) == once

    @given(value=amounts())
    @settings(max_examples=500)
    def test_always_two_places(self, value):
        assert apply_precision(value).as_tuple().exponent == -2

    @given(value=amounts())
    @settings(max_examples=500)
    def test_rounding_error_at_most_half_cent(self, value):
        assert abs(apply_precision(value) - value) <= Decimal("0.005")

    @given(value=amounts())
    @settings(max_examples=500)
    def test_half_up_is_symmetric(self, value):
        assert apply_precision(-value) == -apply_precision(value)

    @given(first=amounts(), second=amounts())
    @settings(max_examples=500)
    def test_antisymmetric(self, first, second):
        assert compare(first, second) == -compare(second, first)

    @given(first=amounts(), second=amounts())
    @settings(max_examples=500)
    def test_equality_matches_rounded_values(self, first, second):
        expected = apply_precision(first) == apply_precision(second)
        assert are_amounts_equal(first, second) == expected

    @given(value=amounts(), noise=st.decimals(min_value=0, max_value=Decimal("0.004"), places=3))
    @settings(max_examples=300)
    def test_sub_cent_noise_on_whole_cents_is_ignored(self, value, noise):
        cents = apply_precision(value)
        if cents >= 0:
            assert are_amounts_equal(cents, cents + noise)
        else:
            assert are_amounts_equal(cents, cents - noise)
