"""
errors.py — Typed exceptions raised by the validation helpers

================================================================================
HIERARCHY
================================================================================

    QuickBooksCommonError (base)
    |
    +-- InvalidArgumentError   (also a ValueError)
    |       A supplied value violates a precondition: out of range, wrong
    |       sign, None when required, inconsistent all-or-none group.
    |
    +-- InvalidStateError      (also a RuntimeError)
            A write-once field was already set to a different value.

Every class carries a machine-readable `code` class attribute and keeps the
offending values as attributes, so callers can catch by type and inspect
structured data instead of parsing messages.

Nothing in this package catches these errors. They always reach the caller.

================================================================================
"""

from __future__ import annotations

from typing import Any


class QuickBooksCommonError(Exception):
    """Base exception for all errors raised by quickbooks_common."""

    code: str = "QUICKBOOKS_COMMON_ERROR"


class InvalidArgumentError(QuickBooksCommonError, ValueError):
    """A supplied argument violates a stated precondition."""

    code: str = "INVALID_ARGUMENT"

    def __init__(self, message: str, name: str | None = None, value: Any = None):
        self.name = name
        self.value = value
        super().__init__(message)


class InvalidStateError(QuickBooksCommonError, RuntimeError):
    """A field that may only be set once was set to a different value."""

    code: str = "INVALID_STATE"

    def __init__(self, message: str, name: str, current_value: Any, new_value: Any):
        self.name = name
        self.current_value = current_value
        self.new_value = new_value
        super().__init__(message)
