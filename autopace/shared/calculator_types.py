"""
Base types for calculators.

This module contains only enums with NO project imports
to avoid circular dependencies.
"""

from enum import Enum


class WindowType(str, Enum):
    """Gradient class of a 0.25 mile telemetry window."""
    FLAT = "flat"
    UPHILL = "uphill"
    DOWNHILL = "downhill"
    OTHER = "other"


class Confidence(str, Enum):
    """Coarse trust label of a derived pace."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return _CONFIDENCE_ORDER.index(self)

    def step_down(self) -> "Confidence":
        """One level lower (low stays low)."""
        return _CONFIDENCE_ORDER[max(0, self.rank - 1)]

    def step_up(self) -> "Confidence":
        """One level higher (high stays high)."""
        return _CONFIDENCE_ORDER[min(len(_CONFIDENCE_ORDER) - 1, self.rank + 1)]


_CONFIDENCE_ORDER = [Confidence.LOW, Confidence.MEDIUM, Confidence.HIGH]


class PaceTier(str, Enum):
    """User-selectable risk variant of a derived pace."""
    AGGRESSIVE = "aggressive"
    BALANCED = "balanced"
    CONSERVATIVE = "conservative"


class ClimbType(str, Enum):
    """Climb difficulty of a segment."""
    VERY_STEEP = "Very Steep"
    STEEP = "Steep"
    MODERATE_STEEP = "Moderate-Steep"
    MODERATE = "Moderate"
    GRADUAL = "Gradual"
    FLAT_ROLLING = "Flat/Rolling"
