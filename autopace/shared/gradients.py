"""
Gradient classification for telemetry windows, climbs and effort zones.

Single source of truth for gradient thresholds.

Naming convention for zone bands: {direction}_{lower}_{upper} or
{direction}_{bound}_over, numbers are absolute gradient boundaries in percent.
Examples: up_5_10 = uphill 5% to 10%, down_5_over = downhill steeper than -5%
"""

from autopace.shared.calculator_types import ClimbType, WindowType

# Window classification (percent)
FLAT_TOLERANCE_PERCENT = 2.0      # |gradient| <= 2% is flat
UPHILL_THRESHOLD_PERCENT = 3.0    # > +3% (with positive elevation change)
DOWNHILL_THRESHOLD_PERCENT = -3.0  # < -3%

# 6 bands used for HR / power zone suggestions
ZONE_GRADIENT_BANDS = {
    'down_5_over': (-100.0, -5.0),    # < -5%
    'down_5_2':    (-5.0, -2.0),      # -5% to -2%
    'flat_2_2':    (-2.0, 2.0),       # -2% to +2%
    'up_2_5':      (2.0, 5.0),        # +2% to +5%
    'up_5_10':     (5.0, 10.0),       # +5% to +10%
    'up_10_over':  (10.0, 100.0),     # >= +10%
}

# Climb difficulty by |gradient| (checked top-down)
CLIMB_THRESHOLDS = [
    (15.0, ClimbType.VERY_STEEP),
    (10.0, ClimbType.STEEP),
    (6.0, ClimbType.MODERATE_STEEP),
    (3.0, ClimbType.MODERATE),
    (1.0, ClimbType.GRADUAL),
]

# Below this gain a segment is flat whatever its gradient
MIN_CLIMB_GAIN_FEET = 50.0


def classify_window(gradient_percent: float, elevation_change_m: float) -> WindowType:
    """
    Classify a telemetry window by its average gradient.

    Args:
        gradient_percent: Window gradient as percentage
        elevation_change_m: Net elevation change of the window

    Returns:
        WindowType.FLAT, UPHILL, DOWNHILL or OTHER (mild non-flat, ignored
        for factor estimation)
    """
    if abs(gradient_percent) <= FLAT_TOLERANCE_PERCENT:
        return WindowType.FLAT
    if gradient_percent > UPHILL_THRESHOLD_PERCENT and elevation_change_m > 0:
        return WindowType.UPHILL
    if gradient_percent < DOWNHILL_THRESHOLD_PERCENT:
        return WindowType.DOWNHILL
    return WindowType.OTHER


def classify_zone_band(gradient_percent: float) -> str:
    """
    Classify gradient into one of the 6 zone-suggestion bands.

    Args:
        gradient_percent: Segment gradient as percentage

    Returns:
        Band name (e.g., 'up_2_5', 'down_5_over', 'flat_2_2')
    """
    for band, (min_grad, max_grad) in ZONE_GRADIENT_BANDS.items():
        if min_grad <= gradient_percent < max_grad:
            return band
    # Edge cases: values at or beyond extreme boundaries
    if gradient_percent >= 10.0:
        return 'up_10_over'
    if gradient_percent < -5.0:
        return 'down_5_over'
    return 'flat_2_2'


def classify_climb(gradient_percent: float, gain_feet: float) -> ClimbType:
    """Classify climb difficulty of a segment."""
    if gain_feet < MIN_CLIMB_GAIN_FEET:
        return ClimbType.FLAT_ROLLING

    abs_gradient = abs(gradient_percent)
    for threshold, climb_type in CLIMB_THRESHOLDS:
        if abs_gradient >= threshold:
            return climb_type
    return ClimbType.FLAT_ROLLING
