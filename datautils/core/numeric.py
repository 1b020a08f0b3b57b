"""
Number helpers.

Percentages are expressed in basis points of a percent, i.e. 5000 means 50%.
"""
from __future__ import annotations

import math
from typing import Any, Optional


def to_number(value: Any, default: float = 0.0) -> float:
    """
    Explicit numeric coercion.

    int/float pass through (bool -> 0/1), numeric strings are parsed,
    empty strings, None, NaN and anything unparsable give default.
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return default if isinstance(value, float) and math.isnan(value) else value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return default
        try:
            parsed = float(text)
        except ValueError:
            return default
        if math.isnan(parsed):
            return default
        return int(parsed) if parsed.is_integer() and "." not in text and "e" not in text.lower() else parsed
    return default


def always_number(value: Any) -> float:
    return to_number(value, 0)


def calculate_percentage(percent: float, percent_of: float) -> float:
    return (percent / 10000) * percent_of


def calculate_percentage_change(percent: float, percent_of: float, increase: bool) -> float:
    change = calculate_percentage(percent, percent_of)
    return percent_of + change if increase else percent_of - change


def reverse_number(value: float) -> float:
    return -1 * value


def number_to_money_format(
    value: Any,
    symbol: str = "",
    decimal_digits: int = 2,
    separator: str = ",",
    decimal_separator: str = ".",
) -> str:
    """1234.5 -> "1,234.50" (with optional symbol prefix and separators)."""
    amount = to_number(value)
    decimal_digits = decimal_digits if decimal_digits is not None else 2
    text = f"{abs(amount):,.{decimal_digits}f}"
    text = text.replace(",", "\0").replace(".", decimal_separator).replace("\0", separator)
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol or ''}{text}"


def calculate_percentage_difference(base_value: float, new_value: float) -> Optional[float]:
    """(new - base) / base in basis points; None when base is 0."""
    if not base_value:
        return None
    return ((new_value - base_value) / base_value) * 10000
