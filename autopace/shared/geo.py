"""
Geographic utility functions.

This is the SINGLE SOURCE OF TRUTH for geographic calculations.
DO NOT duplicate these functions elsewhere.
"""
import math

from autopace.shared.units import METERS_PER_MILE

# Earth radius in miles
EARTH_RADIUS_MILES = 3959.0


def haversine_miles(
    lat1: float, lon1: float,
    lat2: float, lon2: float
) -> float:
    """
    Calculate great-circle distance between two points.

    Args:
        lat1, lon1: First point coordinates (degrees)
        lat2, lon2: Second point coordinates (degrees)

    Returns:
        Distance in miles
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

    return EARTH_RADIUS_MILES * c


def gradient_percent(distance_miles: float, elevation_diff_m: float) -> float:
    """
    Calculate gradient as percentage.

    Args:
        distance_miles: Horizontal distance in miles
        elevation_diff_m: Elevation difference in meters

    Returns:
        Gradient in percent (10.0 = 10%), 0.0 for a non-positive distance
    """
    if not distance_miles > 0:
        return 0.0
    return elevation_diff_m / (distance_miles * METERS_PER_MILE) * 100


def cumulative_distances(points: list[tuple[float, float, float]]) -> list[float]:
    """
    Cumulative distance at each point of a route.

    Args:
        points: List of (lat, lon, elevation) tuples

    Returns:
        Cumulative distance in miles, one value per point (first is 0.0)
    """
    distances = []
    total = 0.0

    for i, (lat, lon, _) in enumerate(points):
        if i > 0:
            prev_lat, prev_lon, _ = points[i - 1]
            total += haversine_miles(prev_lat, prev_lon, lat, lon)
        distances.append(total)

    return distances
