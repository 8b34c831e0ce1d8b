"""
Shared utilities (NOT business logic).

Usage:
    from autopace.shared import haversine_miles, format_pace
    from autopace.shared.units import METERS_PER_MILE
"""
from .units import (
    METERS_PER_MILE,
    FEET_PER_METER,
    meters_to_feet,
    miles_to_meters,
    round_half_up,
    is_valid_number,
    is_valid_pace,
)
from .geo import (
    haversine_miles,
    gradient_percent,
    cumulative_distances,
    EARTH_RADIUS_MILES,
)
from .elevation import (
    ElevationStats,
    calculate_elevation_changes,
)
from .formatters import (
    format_pace,
    format_seconds_delta,
)
from .gradients import (
    FLAT_TOLERANCE_PERCENT,
    UPHILL_THRESHOLD_PERCENT,
    DOWNHILL_THRESHOLD_PERCENT,
    ZONE_GRADIENT_BANDS,
    classify_window,
    classify_zone_band,
    classify_climb,
)
from .calculator_types import (
    WindowType,
    Confidence,
    PaceTier,
    ClimbType,
)

__all__ = [
    # units
    "METERS_PER_MILE",
    "FEET_PER_METER",
    "meters_to_feet",
    "miles_to_meters",
    "round_half_up",
    "is_valid_number",
    "is_valid_pace",
    # geo
    "haversine_miles",
    "gradient_percent",
    "cumulative_distances",
    "EARTH_RADIUS_MILES",
    # elevation
    "ElevationStats",
    "calculate_elevation_changes",
    # formatters
    "format_pace",
    "format_seconds_delta",
    # gradients
    "FLAT_TOLERANCE_PERCENT",
    "UPHILL_THRESHOLD_PERCENT",
    "DOWNHILL_THRESHOLD_PERCENT",
    "ZONE_GRADIENT_BANDS",
    "classify_window",
    "classify_zone_band",
    "classify_climb",
    # types
    "WindowType",
    "Confidence",
    "PaceTier",
    "ClimbType",
]
