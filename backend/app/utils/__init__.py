"""Utility functions and helpers."""

from .geo import format_distance, haversine_km
from .statistics import round_half_up, safe_divide

__all__ = [
    "format_distance",
    "haversine_km",
    "round_half_up",
    "safe_divide",
]
