"""
Core math modules

Целочисленные fixed-point примитивы с явной политикой округления.
"""

from src.core.math.fixed_point import (
    BPS_DENOMINATOR,
    MAX_BPS,
    MIN_BPS,
    AmountInput,
    RoundingMode,
    abs_int,
    apply_bps,
    bps_of,
    clamp_bps,
    mul_div,
    pow10,
    to_canonical_string,
    to_scaled_amount,
)

__all__ = [
    # Constants
    "BPS_DENOMINATOR",
    "MAX_BPS",
    "MIN_BPS",
    # Types
    "AmountInput",
    "RoundingMode",
    # Functions
    "abs_int",
    "apply_bps",
    "bps_of",
    "clamp_bps",
    "mul_div",
    "pow10",
    "to_canonical_string",
    "to_scaled_amount",
]
