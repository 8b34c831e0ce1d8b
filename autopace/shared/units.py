"""
Unit conversions and rounding helpers.

Distances inside the engine are miles, elevations coming from telemetry
and route profiles are meters, elevation adjustments are expressed in feet.
"""

import math

METERS_PER_MILE = 1609.34
FEET_PER_METER = 3.28084


def meters_to_feet(meters: float) -> float:
    return meters * FEET_PER_METER


def miles_to_meters(miles: float) -> float:
    return miles * METERS_PER_MILE


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, halves going up (2.5 -> 3, -2.5 -> -2).

    Zone boundaries and reasoning seconds use this instead of the builtin
    round(), which rounds halves to even.
    """
    return int(math.floor(value + 0.5))


def is_valid_number(value) -> bool:
    """True for a finite int/float (None, NaN and infinities are invalid)."""
    if value is None or isinstance(value, bool):
        return False
    if not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def is_valid_pace(value) -> bool:
    """True for a finite, strictly positive pace."""
    return is_valid_number(value) and value > 0
