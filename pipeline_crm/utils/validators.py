"""Deterministic validators and sanitizers for request payload values."""

from __future__ import annotations

import math
import re
from decimal import Decimal, InvalidOperation
from typing import Any

_PLAIN_NUMBER = re.compile(r"^(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")

# Upper bound of the Numeric(14, 2) estimated_value column.
MAX_ESTIMATED_VALUE = Decimal("999999999999.99")
CENT = Decimal("0.01")


def sanitize_text(value: str | None, max_len: int = 20000) -> str:
    """Sanitize free-form content before persistence."""
    if value is None:
        return ""
    cleaned = str(value).replace("\x00", "").strip()
    cleaned = cleaned[:max_len]
    return cleaned


def to_non_empty_string(value: Any) -> str | None:
    """Return the trimmed string, or None for non-strings and blank input."""
    if not isinstance(value, str):
        return None
    trimmed = sanitize_text(value)
    return trimmed or None


def _normalize_separators(text: str) -> str:
    if "," not in text:
        return text
    if "." in text:
        if text.rfind(",") > text.rfind("."):
            # "1.500,50": dots group thousands, comma is the decimal mark
            return text.replace(".", "").replace(",", ".")
        # "1,500.50"
        return text.replace(",", "")
    if text.count(",") == 1:
        return text.replace(",", ".")
    # "1,500,000"
    return text.replace(",", "")


def normalize_estimated_value(value: Any) -> str | None:
    """Normalize a monetary amount to a plain decimal string.

    Numbers must be finite, non-negative and have at most two decimal places.
    Strings may use either a dot or a comma as the decimal mark. Returns None when the value is not a valid
    non-negative amount.

    >>> normalize_estimated_value("1200")
    '1200'
    >>> normalize_estimated_value(1200.5)
    '1200.5'
    >>> normalize_estimated_value("-1") is None
    True
    >>> normalize_estimated_value("12.345") is None
    True
    """
    if isinstance(value, bool):
        return None

    if isinstance(value, int):
        normalized = str(value)
    elif isinstance(value, float):
        if not math.isfinite(value):
            return None
        normalized = str(int(value)) if value.is_integer() else repr(value)
    elif isinstance(value, str):
        normalized = _normalize_separators(value.strip())
        if not _PLAIN_NUMBER.match(normalized):
            return None
    else:
        return None

    try:
        amount = Decimal(normalized)
    except InvalidOperation:
        return None
    if not amount.is_finite() or amount < 0 or amount > MAX_ESTIMATED_VALUE:
        return None
    # Numeric(14, 2) would round anything finer than cents.
    if amount != amount.quantize(CENT):
        return None
    return normalized


def format_amount(value: Decimal | int | float | str | None) -> str | None:
    """Render a stored amount without insignificant trailing zeros."""
    if value is None:
        return None
    amount = Decimal(str(value))
    if amount == amount.to_integral_value():
        return format(amount.quantize(Decimal(1)), "f")
    return format(amount.normalize(), "f")
