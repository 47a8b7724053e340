"""
money.py — Canonical comparison of monetary amounts

================================================================================
DESIGN PRINCIPLES
================================================================================

1. EXACT DECIMALS ONLY
   Amounts are decimal.Decimal (or int). Floats are refused with TypeError:
   a binary float is not an exact amount, and converting it here would hide
   the error at the call site.

2. ROUND, THEN COMPARE
   Amounts are often computed with more precision than the currency allows
   (rate x fractional quantity). Both operands are rounded to the money
   precision before comparing, so 10.004 and 10.001 are the same amount.

3. FIXED DEFAULT POLICY
   Two fractional digits, HALF_UP (ties go away from zero: 0.125 -> 0.13,
   -0.125 -> -0.13). Other rounding modes are available through
   MoneyComparator(rounding=...), but the module-level functions always use
   the default policy.

4. NO STATE
   MoneyComparator is a frozen dataclass. Every operation returns a new
   Decimal. Safe to share between threads.

================================================================================
USAGE
================================================================================

    from decimal import Decimal
    from quickbooks_common.money import MoneyComparator, RoundingMode, are_amounts_equal

    are_amounts_equal(Decimal("10.001"), Decimal("10.004"))   # True

    bankers = MoneyComparator(rounding=RoundingMode.HALF_EVEN)
    bankers.apply_precision(Decimal("0.125"))                 # Decimal("0.12")

    sorted(amounts, key=MoneyComparator().key)

================================================================================
"""

from __future__ import annotations

import decimal
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from functools import cmp_to_key
from typing import Any, Callable

from .errors import InvalidArgumentError
from .logging_config import get_logger

logger = get_logger("money")


# ==============================================================================
# ROUNDING STRATEGIES
# ==============================================================================

class RoundingMode(Enum):
    """
    Rounding strategies for monetary amounts.

    - HALF_UP: commercial rounding, ties away from zero (0.125 -> 0.13)
    - HALF_EVEN: banker's rounding, minimizes statistical bias
    - HALF_DOWN: ties toward zero (0.125 -> 0.12)
    - UP: always away from zero
    - DOWN: always toward zero (truncation)
    """
    HALF_UP = decimal.ROUND_HALF_UP
    HALF_EVEN = decimal.ROUND_HALF_EVEN
    HALF_DOWN = decimal.ROUND_HALF_DOWN
    UP = decimal.ROUND_UP
    DOWN = decimal.ROUND_DOWN


DEFAULT_PLACES = 2
DEFAULT_ROUNDING = RoundingMode.HALF_UP

# Floor for the working precision used while quantizing. Raised per value
# when the rounded result needs more digits.
_MIN_PRECISION = 28


def _as_decimal(value: Any, label: str) -> Decimal:
    """Coerce an exact amount to Decimal. Floats and non-finite values are refused."""
    if isinstance(value, float):
        raise TypeError(
            f"{label} must be a Decimal or int, not float. "
            f"Use Decimal(str(x)) to convert explicitly."
        )
    if isinstance(value, bool):
        raise TypeError(f"{label} must be a Decimal or int, not bool")
    if isinstance(value, int):
        return Decimal(value)
    if not isinstance(value, Decimal):
        raise TypeError(f"{label} must be a Decimal or int, not {type(value).__name__}")
    if not value.is_finite():
        logger.debug(
            "non_finite_amount_rejected",
            extra={"argument": label, "value": str(value)},
        )
        raise InvalidArgumentError(
            f"{label} must be a finite amount (was given `{value}`).",
            name=label,
            value=value,
        )
    return value


# ==============================================================================
# MONEY COMPARATOR
# ==============================================================================

@dataclass(frozen=True, slots=True)
class MoneyComparator:
    """
    Comparator for Decimal values that represent money.

    INVARIANTS:
    1. apply_precision() always returns a Decimal with exactly `places`
       fractional digits
    2. apply_precision() is idempotent
    3. compare() returns -1, 0 or 1 and is consistent with the numeric order
       of the rounded values

    USAGE:
        cmp = MoneyComparator()
        cmp.compare(Decimal("1.004"), Decimal("1.001"))   # 0
        cmp(Decimal("1.006"), Decimal("1.001"))           # 1
    """
    places: int = DEFAULT_PLACES
    rounding: RoundingMode = DEFAULT_ROUNDING

    def __post_init__(self) -> None:
        if isinstance(self.places, bool) or not isinstance(self.places, int) or self.places < 0:
            raise InvalidArgumentError(
                f"places must be a non-negative int (was given `{self.places}`).",
                name="places",
                value=self.places,
            )
        if not isinstance(self.rounding, RoundingMode):
            raise TypeError(
                f"rounding must be a RoundingMode, not {type(self.rounding).__name__}"
            )

    def apply_precision(self, value: Decimal | int) -> Decimal:
        """
        Round a value to the configured number of decimal places.

        The ambient decimal context is not used: a local context wide enough
        for the rounded result, with the widest exponent range, is built per
        call, so very large or very small amounts never raise InvalidOperation.

        Returns:
            A new Decimal with exponent -places.
        """
        amount = _as_decimal(value, "value")
        exponent = Decimal(1).scaleb(-self.places)
        # adjusted() + 1 integer digits, plus the fraction, plus one for a carry
        needed = amount.adjusted() + self.places + 2
        context = decimal.Context(
            prec=max(_MIN_PRECISION, needed),
            Emax=decimal.MAX_EMAX,
            Emin=decimal.MIN_EMIN,
        )
        return amount.quantize(exponent, rounding=self.rounding.value, context=context)

    def compare(self, first: Decimal | int, second: Decimal | int) -> int:
        """Three-way comparison of two amounts after rounding both."""
        a = self.apply_precision(first)
        b = self.apply_precision(second)
        return (a > b) - (a < b)

    def __call__(self, first: Decimal | int, second: Decimal | int) -> int:
        return self.compare(first, second)

    def are_amounts_equal(self, first: Decimal | int, second: Decimal | int) -> bool:
        """Whether two values are the same amount once rounded."""
        return self.compare(first, second) == 0

    @property
    def key(self) -> Callable[[Decimal | int], Any]:
        """Sort key, for sorted(amounts, key=comparator.key)."""
        return cmp_to_key(self.compare)


# ==============================================================================
# MODULE-LEVEL SHORTCUTS (default policy: 2 places, HALF_UP)
# ==============================================================================

DEFAULT_COMPARATOR = MoneyComparator()


def apply_precision(value: Decimal | int) -> Decimal:
    """Round to two decimal places, HALF_UP."""
    return DEFAULT_COMPARATOR.apply_precision(value)


def compare(first: Decimal | int, second: Decimal | int) -> int:
    return DEFAULT_COMPARATOR.compare(first, second)


def are_amounts_equal(first: Decimal | int, second: Decimal | int) -> bool:
    """
    Compare two values for equality, treating both as monetary amounts.

    >>> are_amounts_equal(Decimal("10.001"), Decimal("10.004"))
    True
    >>> are_amounts_equal(Decimal("10.001"), Decimal("10.006"))
    False
    """
    return DEFAULT_COMPARATOR.are_amounts_equal(first, second)
