"""
quickbooks_common — Shared validation and money helpers for the QuickBooks integration

================================================================================
QUICK START
================================================================================

Money comparison (2 decimal places, HALF_UP):

    from decimal import Decimal
    from quickbooks_common import apply_precision, are_amounts_equal

    apply_precision(Decimal("0.125"))                          # Decimal("0.13")
    are_amounts_equal(Decimal("10.001"), Decimal("10.004"))    # True

Argument checks:

    from quickbooks_common import argument

    argument.ensure_in_range(quantity, 1, 999, "quantity")
    argument.ensure_positive_or_zero(unit_price, "unit price")
    argument.ensure_all_or_none_null(
        "start and end dates go together", start_date, end_date
    )

Write-once fields:

    argument.ensure_unset(self._txn_id, txn_id, "transaction ID")
    self._txn_id = txn_id

================================================================================
"""

from . import argument

from .money import (
    MoneyComparator,
    RoundingMode,
    DEFAULT_COMPARATOR,
    apply_precision,
    compare,
    are_amounts_equal,
)

from .errors import (
    QuickBooksCommonError,
    InvalidArgumentError,
    InvalidStateError,
)

from .logging_config import configure_logging, get_logger

__version__ = "1.0.0"
__license__ = "GPL-3.0-or-later"

__all__ = [
    # Money
    "MoneyComparator",
    "RoundingMode",
    "DEFAULT_COMPARATOR",
    "apply_precision",
    "compare",
    "are_amounts_equal",
    # Validation
    "argument",
    # Errors
    "QuickBooksCommonError",
    "InvalidArgumentError",
    "InvalidStateError",
    # Logging
    "configure_logging",
    "get_logger",
]
