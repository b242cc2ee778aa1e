"""Coercion of loosely-typed stored values into typed profile fields"""

import math
from typing import Any

TRUE_STRINGS = {"true", "yes", "1", "on"}


def to_amount(value: Any) -> float:
    """
    Coerce a monetary value to a non-negative float.

    None, empty strings, non-numeric values, NaN, infinities and negative
    amounts all become 0.0.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return 0.0
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(amount) or amount < 0:
        return 0.0
    return amount


def to_text(value: Any) -> str:
    """Coerce to a stripped string; empty string means "absent"."""
    if value is None:
        return ""
    return str(value).strip()


def to_flag(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in TRUE_STRINGS
    return False
