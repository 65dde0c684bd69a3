"""Flat-earth distance and heading between two latitude/longitude points."""

from __future__ import annotations

import math

__all__ = ["METRES_PER_DEGREE", "calculate_distance", "calculate_heading"]

METRES_PER_DEGREE = 111000.0


def calculate_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Distance in metres, treating one degree on either axis as 111 km."""
    return math.hypot(lat2 - lat1, lon2 - lon1) * METRES_PER_DEGREE


def calculate_heading(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Heading in degrees from point 1 to point 2: 0 is north, 90 is east."""
    return math.degrees(math.atan2(lon2 - lon1, lat2 - lat1))