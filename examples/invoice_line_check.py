#!/usr/bin/env python3
"""
invoice_line_check.py — Validating an invoice line before sending it to QuickBooks

================================================================================
THE PROBLEM
================================================================================

    >>> Decimal("3") * Decimal("19.99") * Decimal("0.0825")
    Decimal('4.947525')

Tax computed locally carries sub-cent digits. QuickBooks stores cents. A
naive equality check between the local total and the total QuickBooks
sends back fails on every line that had a fraction of a cent.

================================================================================
THE FIX
================================================================================

    from quickbooks_common import are_amounts_equal

    are_amounts_equal(local_total, remote_total)   # rounds both to cents first

The argument helpers keep bad lines from getting that far.

================================================================================
"""

import sys
from decimal import Decimal
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from quickbooks_common import (
    InvalidArgumentError,
    InvalidStateError,
    apply_precision,
    are_amounts_equal,
    argument,
)


class InvoiceLine:
    """A line whose QuickBooks ID may be assigned once."""

    def __init__(self, quantity, unit_price, tax_rate, discount=None, discount_reason=None):
        argument.ensure_in_range(quantity, 1, 9999, "quantity")
        argument.ensure_positive_or_zero(unit_price, "unit price")
        argument.ensure_in_range(tax_rate, Decimal("0"), Decimal("1"), "tax rate")
        argument.ensure_all_or_none_null(
            "A discount needs a reason", discount, discount_reason
        )
        if discount is not None:
            argument.ensure_negative_or_zero(discount, "discount")

        self.quantity = quantity
        self.unit_price = unit_price
        self.tax_rate = tax_rate
        self.discount = discount or Decimal("0")
        self.discount_reason = discount_reason
        self._qb_id = None

    @property
    def total(self):
        subtotal = self.quantity * self.unit_price + self.discount
        return subtotal * (1 + self.tax_rate)

    def assign_qb_id(self, qb_id):
        argument.ensure_not_null(qb_id, "QuickBooks ID")
        argument.ensure_unset(self._qb_id, qb_id, "QuickBooks ID")
        self._qb_id = qb_id


def demonstrate_comparison():
    print("=" * 60)
    print("RECONCILING TOTALS")
    print("=" * 60)
    line = InvoiceLine(3, Decimal("19.99"), Decimal("0.0825"))
    remote_total = Decimal("64.92")
    print(f"Local total:  {line.total}")
    print(f"Rounded:      {apply_precision(line.total)}")
    print(f"Remote total: {remote_total}")
    print(f"Exact match?  {line.total == remote_total}")
    print(f"Same amount?  {are_amounts_equal(line.total, remote_total)}")
    print()


def demonstrate_validation():
    print("=" * 60)
    print("REJECTED INPUT")
    print("=" * 60)
    attempts = [
        lambda: InvoiceLine(0, Decimal("1.00"), Decimal("0")),
        lambda: InvoiceLine(1, Decimal("-1.00"), Decimal("0")),
        lambda: InvoiceLine(1, Decimal("1.00"), Decimal("0"), discount=Decimal("-0.50")),
    ]
    for attempt in attempts:
        try:
            attempt()
        except InvalidArgumentError as e:
            print(f"[{e.code}] {e}")

    line = InvoiceLine(1, Decimal("1.00"), Decimal("0"))
    line.assign_qb_id("42")
    line.assign_qb_id("42")
    try:
        line.assign_qb_id("43")
    except InvalidStateError as e:
        print(f"[{e.code}] {e}")
    print()


if __name__ == "__main__":
    demonstrate_comparison()
    demonstrate_validation()
