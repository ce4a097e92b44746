"""Integer helpers for minor-unit amounts"""

from typing import Any


def is_whole_amount(amount: Any) -> bool:
    """True for int amounts; bool, float and Decimal are not whole minor units"""
    return isinstance(amount, int) and not isinstance(amount, bool)


def divide_round_half_up(numerator: int, divisor: int) -> int:
    """
    Divide non-negative integers, rounding halves up.

    Integer arithmetic only, so the result is exact for any size of amount.

    Example:
        100 / 3 = 33.33 → 33
        5 / 2 = 2.5 → 3
    """
    if divisor <= 0:
        raise ValueError("divisor must be positive")
    if numerator < 0:
        raise ValueError("numerator must be non-negative")
    return (2 * numerator + divisor) // (2 * divisor)
