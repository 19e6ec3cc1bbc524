"""Numeric helpers shared by scoring and tier reporting."""

from __future__ import annotations

import math


def round_half_up(value: float, digits: int = 0) -> float:
    """Round halves up, unlike the banker's rounding of the built-in ``round``."""
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def format_number(value: float) -> str:
    """Render a number for reason text: integers without a decimal point, others trimmed."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.2f}".rstrip("0").rstrip(".")
