"""Numeric hygiene and rounding helpers.

Upstream collectors are not trusted to deliver clean numbers, so
every engine reads counts through :func:`safe_number`.  All
score-shaped values are rounded with :func:`round_half_up` so
outputs match the extension bit-for-bit (JavaScript
``Math.round`` semantics, not Python's banker's rounding).
"""

from __future__ import annotations

import math
import sys

# Bias that pushes exact ``.xx5`` values upwards before rounding.
_EPSILON = sys.float_info.epsilon


def safe_number(value: object) -> float:
    """Coerce *value* to a finite, non-negative float.

    ``None``, booleans, non-numeric values, NaN, infinities and
    negative numbers all become ``0.0``.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0.0
    number = float(value)
    if not math.isfinite(number) or number < 0:
        return 0.0
    return number


def round_half_up(value: float, digits: int = 2) -> float:
    """Round half up to *digits* decimal places.

    Computed as ``floor((value + ε) × 10ⁿ + 0.5) / 10ⁿ``.

    Args:
        value: The number to round.  Non-finite input yields ``0.0``.
        digits: Decimal places to keep.

    Returns:
        The rounded float.
    """
    if not math.isfinite(value):
        return 0.0
    factor = 10**digits
    return math.floor((value + _EPSILON) * factor + 0.5) / factor


def clamp(value: float, lower: float, upper: float) -> float:
    """Clamp *value* into ``[lower, upper]``; non-finite maps to *lower*."""
    if not math.isfinite(value) or value < lower:
        return lower
    if value > upper:
        return upper
    return value
