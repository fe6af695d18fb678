"""Coercion for loosely typed numeric columns (text radii, nullable caps)."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
import math
from typing import Any, Optional


def coerce_optional_float(value: Any) -> Optional[float]:
    """
    Convert a stored numeric value to a float, or None when it is unusable.

    Storage hands back radii and distances as text, Decimals or numbers.
    None, blank or non-numeric strings, booleans and non-finite values all
    mean "unset" so the caller can fall through to the next default.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        cleaned = value.strip()
        if not cleaned:
            return None
        try:
            numeric = float(cleaned)
        except ValueError:
            return None
    elif isinstance(value, (int, float, Decimal)):
        try:
            numeric = float(value)
        except (InvalidOperation, OverflowError):
            return None
    else:
        return None
    return numeric if math.isfinite(numeric) else None


def coerce_optional_int(value: Any) -> Optional[int]:
    """Like coerce_optional_float, truncating to whole minutes/counts."""
    numeric = coerce_optional_float(value)
    if numeric is None:
        return None
    return int(numeric)


def first_defined(*values: Optional[float]) -> Optional[float]:
    """Return the first value that is not None (0 counts as defined)."""
    for value in values:
        if value is not None:
            return value
    return None
