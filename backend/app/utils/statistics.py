"""Numeric helpers shared by the reward and stats calculations."""

import math


def safe_divide(numerator: float, denominator: float, default: float = 0.0) -> float:
    """
    Safely divide two numbers, returning default if denominator is zero.

    Args:
        numerator: The numerator
        denominator: The denominator
        default: Value to return if denominator is zero

    Returns:
        Result of division or default value
    """
    return numerator / denominator if denominator > 0 else default


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer with halves rounded away from zero.

    Python's ``round`` uses banker's rounding (``round(2.5) == 2``); reward
    amounts must round ``x.5`` up instead.

    Args:
        value: Value to round

    Returns:
        Rounded integer
    """
    if value < 0:
        return -math.floor(-value + 0.5)
    return math.floor(value + 0.5)
