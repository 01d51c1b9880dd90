"""
Geographic utility functions.

This is the SINGLE SOURCE OF TRUTH for geographic calculations.
DO NOT duplicate these functions elsewhere.
"""
import math
from typing import Protocol, Sequence

# Earth radius in meters (spherical approximation)
EARTH_RADIUS_M = 6_371_000.0


class Coordinate(Protocol):
    """Anything with latitude/longitude in degrees."""
    latitude: float
    longitude: float


def haversine_m(
    lat1: float, lon1: float,
    lat2: float, lon2: float
) -> float:
    """
    Calculate great-circle distance between two points.

    Args:
        lat1, lon1: First point coordinates (degrees)
        lat2, lon2: Second point coordinates (degrees)

    Returns:
        Distance in meters
    """
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    delta_lat = math.radians(lat2 - lat1)
    delta_lon = math.radians(lon2 - lon1)

    a = (
        math.sin(delta_lat / 2) ** 2 +
        math.cos(lat1_rad) * math.cos(lat2_rad) *
        math.sin(delta_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_M * c


def distance(a: Coordinate, b: Coordinate) -> float:
    """Distance in meters between two samples."""
    return haversine_m(a.latitude, a.longitude, b.latitude, b.longitude)


def path_length(points: Sequence[Coordinate]) -> float:
    """
    Calculate total distance along a sequence of samples.

    Args:
        points: Samples in route order

    Returns:
        Total distance in meters (0 for fewer than 2 points)
    """
    total = 0.0

    for i in range(1, len(points)):
        total += distance(points[i - 1], points[i])

    return total
