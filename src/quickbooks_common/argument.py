"""
argument.py — Precondition checks for arguments and write-once fields

================================================================================
OVERVIEW
================================================================================

Stateless checks a caller runs at the top of its own operations:

    all_non_null(*values)                         -> bool, never raises
    ensure_in_range(value, min, max, name)        -> InvalidArgumentError
    ensure_negative_or_zero(value, name)          -> InvalidArgumentError
    ensure_positive_or_zero(value, name)          -> InvalidArgumentError
    ensure_not_null(value, name)                  -> InvalidArgumentError
    ensure_all_or_none_null(message, *values)     -> InvalidArgumentError
    ensure_unset(current, new, name)              -> InvalidStateError
    ensure_unset_when(current, new, is_empty, name) -> InvalidStateError

Each check either passes with no side effect or raises before the caller
does any work. Nothing is caught or retried here.

================================================================================
WRITE-ONCE FIELDS
================================================================================

ensure_unset() guards a field that may be assigned once, or re-assigned
only to the value it already holds. What "not yet assigned" means depends
on the type of the current value:

    numbers (int, float, Decimal, ...)  zero
    collections (list, set, dict, ...)  None or empty
    anything else (str, objects, None)  None

ensure_unset_when() takes that emptiness test as a plain callable.

================================================================================
"""

from __future__ import annotations

import numbers
from collections.abc import Collection
from decimal import Decimal
from functools import singledispatch
from typing import Any, Callable, TypeVar

from .errors import InvalidArgumentError, InvalidStateError
from .logging_config import get_logger

logger = get_logger("argument")

T = TypeVar("T")


def _invalid_argument(check: str, message: str, name: str | None, value: Any) -> InvalidArgumentError:
    logger.debug(
        "argument_check_failed",
        extra={"check": check, "argument": name, "code": InvalidArgumentError.code},
    )
    return InvalidArgumentError(message, name=name, value=value)


def _invalid_state(message: str, name: str, current_value: Any, new_value: Any) -> InvalidStateError:
    logger.debug(
        "field_reassignment_rejected",
        extra={"check": "ensure_unset", "argument": name, "code": InvalidStateError.code},
    )
    return InvalidStateError(message, name=name, current_value=current_value, new_value=new_value)


# ==============================================================================
# NULL / RANGE / SIGN CHECKS
# ==============================================================================

def all_non_null(*values: Any) -> bool:
    """
    Check if the provided values are all non-None.

    Returns:
        True if no value is None (vacuously True for no values).
    """
    return all(v is not None for v in values)


def ensure_in_range(value: Any, min_value: Any, max_value: Any, name: str) -> None:
    """
    Ensure that a value lies within [min_value, max_value], inclusively.

    Args:
        value: The value of the argument being checked.
        min_value: The minimum inclusive value for the argument.
        max_value: The maximum inclusive value for the argument.
        name: The human-friendly name for the argument (for error messages).

    Raises:
        InvalidArgumentError: If value < min_value or value > max_value.
    """
    if value < min_value or value > max_value:
        raise _invalid_argument(
            "ensure_in_range",
            f"{name} must be between {min_value} and {max_value}, inclusive (was given `{value}`).",
            name,
            value,
        )


def ensure_negative_or_zero(value: Any, name: str) -> None:
    """Ensure that a (Decimal) value is negative or zero."""
    if value > 0:
        raise _invalid_argument(
            "ensure_negative_or_zero",
            f"{name} cannot be positive (was given `{value}`).",
            name,
            value,
        )


def ensure_positive_or_zero(value: Any, name: str) -> None:
    """Ensure that a (Decimal) value is positive or zero."""
    if value < 0:
        raise _invalid_argument(
            "ensure_positive_or_zero",
            f"{name} cannot be negative (was given `{value}`).",
            name,
            value,
        )


def ensure_not_null(value: Any, name: str) -> None:
    """
    Ensure that an argument is not None.

    Raises:
        InvalidArgumentError: If value is None.
    """
    if value is None:
        raise _invalid_argument("ensure_not_null", f"{name} cannot be None.", name, value)


def ensure_all_or_none_null(error_message: str, *values: Any) -> None:
    """
    Ensure that the values are either all None or all set.

    Useful for a group of optional arguments that only take effect when
    every one of them is given.

    Args:
        error_message: Message for the raised error when the group is mixed.
        values: The values to check.

    Raises:
        InvalidArgumentError: If at least one value is None and at least one
            is not. The message reports the 1-based position of the first None.
    """
    first_null: int | None = None
    first_set: int | None = None

    for position, value in enumerate(values):
        if value is None:
            if first_null is None:
                first_null = position
        elif first_set is None:
            first_set = position

    if first_null is not None and first_set is not None:
        raise _invalid_argument(
            "ensure_all_or_none_null",
            f"{error_message} (argument {first_null + 1} is `None`).",
            None,
            values,
        )


# ==============================================================================
# WRITE-ONCE CHECKS
# ==============================================================================

def _already_set_message(name: str, current_value: Any, new_value: Any) -> str:
    return (
        f"The {name} can only be set once "
        f"(already set to `{current_value}`; was trying to set to `{new_value}`)."
    )


def ensure_unset_when(
    current_value: T,
    new_value: T,
    is_empty: Callable[[T], bool],
    name: str,
) -> None:
    """
    Ensure that either the current value is empty, as defined by `is_empty`,
    or that it matches the new value.

    Args:
        current_value: The current value of the field.
        new_value: The proposed new value for the field.
        is_empty: Returns True when the field counts as not yet set.
        name: The human-friendly name for the field (for error messages).

    Raises:
        InvalidStateError: If the field is already set to a different value.
    """
    if not is_empty(current_value) and current_value != new_value:
        raise _invalid_state(
            _already_set_message(name, current_value, new_value),
            name,
            current_value,
            new_value,
        )


@singledispatch
def ensure_unset(current_value: Any, new_value: Any, name: str) -> None:
    """
    Ensure that either the current value is not yet set, or that it matches
    the new value.

    Dispatches on the type of `current_value` to pick what "not yet set"
    means (see module docstring). The fallback treats only None as unset.

    Raises:
        InvalidStateError: If the field is already set to a different value.
    """
    ensure_unset_when(current_value, new_value, lambda v: v is None, name)


@ensure_unset.register(numbers.Number)
def _ensure_unset_number(current_value: Any, new_value: Any, name: str) -> None:
    # zero is the "never assigned" sentinel for numeric fields
    ensure_unset_when(current_value, new_value, lambda v: v == 0, name)


@ensure_unset.register(Decimal)
def _ensure_unset_decimal(current_value: Decimal, new_value: Any, name: str) -> None:
    if current_value.is_zero():
        return
    # NaN never matches, and comparing a signaling NaN traps
    if current_value.is_nan() or (isinstance(new_value, Decimal) and new_value.is_nan()):
        raise _invalid_state(
            _already_set_message(name, current_value, new_value),
            name,
            current_value,
            new_value,
        )
    ensure_unset_when(current_value, new_value, Decimal.is_zero, name)


@ensure_unset.register(Collection)
def _ensure_unset_collection(current_value: Any, new_value: Any, name: str) -> None:
    if len(current_value) > 0 and current_value != new_value:
        raise _invalid_state(
            f"The {name} can only be set when empty (it currently contains "
            f"`{len(current_value)}` elements: `{current_value}`; "
            f"was trying to set to `{new_value}`).",
            name,
            current_value,
            new_value,
        )


# Text, bytes and bools are not numbers or containers here
ensure_unset.register(str, ensure_unset.dispatch(object))
ensure_unset.register(bytes, ensure_unset.dispatch(object))
ensure_unset.register(bytearray, ensure_unset.dispatch(object))
ensure_unset.register(bool, ensure_unset.dispatch(object))
