"""
Elevation processing utilities.

This is the SINGLE SOURCE OF TRUTH for elevation calculations.
"""
from dataclasses import dataclass
from typing import List, Tuple


@dataclass(frozen=True)
class ElevationStats:
    """Elevation summary of a mile range (all values in meters)."""
    gain: float
    loss: float
    max_elevation: float
    min_elevation: float
    net_elevation: float


def calculate_elevation_changes(
    elevations: List[float]
) -> Tuple[float, float]:
    """
    Calculate total elevation gain and loss.

    Args:
        elevations: List of elevation values

    Returns:
        Tuple of (gain_m, loss_m)
    """
    gain = 0.0
    loss = 0.0

    for i in range(1, len(elevations)):
        diff = elevations[i] - elevations[i - 1]
        if diff > 0:
            gain += diff
        else:
            loss += abs(diff)

    return gain, loss
