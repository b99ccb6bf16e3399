"""
Numeric display helpers.
"""

import math


def _format_number(value: float) -> str:
    # 50.0 → "50", 33.33 → "33.33"
    if value.is_integer():
        return str(int(value))
    return repr(value)


def get_ratio_percent(value, total) -> str:
    """
    Percentage of value over total with two decimals, as display text.
    Returns "?" when the ratio is not a finite number.
    """
    try:
        perc = math.floor(value / total * 10000 + 0.5) / 100
    except (ZeroDivisionError, OverflowError, TypeError, ValueError):
        return "?"
    if not math.isfinite(perc):
        return "?"
    return _format_number(perc)


def tons_per_hour_to_grams_per_minute(value: float) -> float:
    return value / 1e6 / 60.0
