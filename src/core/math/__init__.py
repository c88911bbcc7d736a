"""
Core math modules

Целочисленная арифметика цен (центы) и скидок.
"""

from src.core.math.pricing import (
    MAX_DISCOUNT_PERCENT,
    MIN_DISCOUNT_PERCENT,
    apply_discount,
    clamp,
    clamp_discount,
    discount_amount,
    format_cents,
    line_total,
)

__all__ = [
    # Constants
    "MIN_DISCOUNT_PERCENT",
    "MAX_DISCOUNT_PERCENT",
    # Functions
    "clamp",
    "clamp_discount",
    "line_total",
    "discount_amount",
    "apply_discount",
    "format_cents",
]
