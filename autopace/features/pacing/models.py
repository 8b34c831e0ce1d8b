"""
Pacing domain models.

PacingModel is derived once per telemetry trace and never mutated;
DerivedPaceResult and PaceTierOption are transient per-segment outputs.
"""

from dataclasses import dataclass
from typing import Optional

from autopace.features.pacing.calculators.baseline import DEFAULT_BASELINE_PACE
from autopace.features.pacing.calculators.fatigue import DEFAULT_FATIGUE_FACTOR
from autopace.features.pacing.calculators.gradient_factors import (
    DEFAULT_GAIN_FACTOR,
    DEFAULT_LOSS_FACTOR,
)
from autopace.features.pacing.calculators.zones import (
    DEFAULT_HR_THRESHOLD,
    HRZones,
    HRZoneSuggestion,
    PowerZones,
    PowerZoneSuggestion,
)
from autopace.shared.calculator_types import ClimbType, Confidence, PaceTier


@dataclass(frozen=True)
class PacingModel:
    """Running characteristics extracted from one reference run."""
    baseline_flat_pace: float       # min/mile
    elevation_gain_factor: float    # seconds per 100ft gain per mile
    elevation_loss_factor: float    # seconds per 100ft loss per mile
    fatigue_factor: float           # % pace degradation per 10 miles
    heart_rate_threshold: int       # bpm
    hr_zones: Optional[HRZones] = None
    power_zones: Optional[PowerZones] = None
    has_power_data: bool = False

    @classmethod
    def default(
        cls,
        gain_factor: float = DEFAULT_GAIN_FACTOR,
        loss_factor: float = DEFAULT_LOSS_FACTOR
    ) -> "PacingModel":
        """Conservative model used when there is no usable telemetry."""
        return cls(
            baseline_flat_pace=DEFAULT_BASELINE_PACE,
            elevation_gain_factor=gain_factor,
            elevation_loss_factor=loss_factor,
            fatigue_factor=DEFAULT_FATIGUE_FACTOR,
            heart_rate_threshold=DEFAULT_HR_THRESHOLD,
        )

    def to_dict(self) -> dict:
        return {
            "baseline_flat_pace": round(self.baseline_flat_pace, 3),
            "elevation_gain_factor": round(self.elevation_gain_factor, 1),
            "elevation_loss_factor": round(self.elevation_loss_factor, 1),
            "fatigue_factor": round(self.fatigue_factor, 2),
            "heart_rate_threshold": self.heart_rate_threshold,
            "hr_zones": self.hr_zones.to_dict() if self.hr_zones else None,
            "power_zones": self.power_zones.to_dict() if self.power_zones else None,
            "has_power_data": self.has_power_data,
        }


@dataclass(frozen=True)
class SegmentTerrainData:
    """Geometry of one race segment."""
    distance_miles: float
    cumulative_distance_miles: float
    elevation_gain_feet: float = 0.0
    elevation_loss_feet: float = 0.0
    average_gradient_percent: float = 0.0   # climbing only (gain / distance)
    zone_gradient_percent: float = 0.0      # signed; negative on net descents

    @property
    def start_mile(self) -> float:
        return self.cumulative_distance_miles - self.distance_miles


@dataclass(frozen=True)
class ElevationDetails:
    """Climb analysis shown next to a derived pace."""
    gain_feet: int
    loss_feet: int
    distance_miles: float
    avg_gradient_percent: float
    climb_type: ClimbType
    pace_adjustment_seconds: int

    def to_dict(self) -> dict:
        return {
            "gain_feet": self.gain_feet,
            "loss_feet": self.loss_feet,
            "distance_miles": self.distance_miles,
            "avg_gradient_percent": self.avg_gradient_percent,
            "climb_type": self.climb_type.value,
            "pace_adjustment_seconds": self.pace_adjustment_seconds,
        }


@dataclass(frozen=True)
class PaceFactors:
    """Breakdown of a derived pace (all values in minutes per mile)."""
    base_pace: float
    elevation_adjustment: float
    fatigue_adjustment: float
    total_adjustment: float


@dataclass(frozen=True)
class DerivedPaceResult:
    """Predicted pace for one segment."""
    pace_min_per_mile: float
    confidence: Confidence
    confidence_score: int
    factors: PaceFactors
    reasoning: str
    suggested_hr_zone: Optional[HRZoneSuggestion] = None
    suggested_power_zone: Optional[PowerZoneSuggestion] = None
    elevation_details: Optional[ElevationDetails] = None

    def to_dict(self) -> dict:
        """Convert to dict for consumers (storage, UI)."""
        return {
            "pace_min_per_mile": round(self.pace_min_per_mile, 4),
            "confidence": self.confidence.value,
            "confidence_score": self.confidence_score,
            "factors": {
                "base_pace": round(self.factors.base_pace, 4),
                "elevation_adjustment": round(self.factors.elevation_adjustment, 4),
                "fatigue_adjustment": round(self.factors.fatigue_adjustment, 4),
                "total_adjustment": round(self.factors.total_adjustment, 4),
            },
            "reasoning": self.reasoning,
            "suggested_hr_zone": (
                self.suggested_hr_zone.to_dict() if self.suggested_hr_zone else None
            ),
            "suggested_power_zone": (
                self.suggested_power_zone.to_dict() if self.suggested_power_zone else None
            ),
            "elevation_details": (
                self.elevation_details.to_dict() if self.elevation_details else None
            ),
        }


@dataclass(frozen=True)
class PaceTierOption:
    """One user-selectable variant of a derived pace."""
    tier: PaceTier
    pace_min_per_mile: float
    confidence: Confidence
    adjustment_percent: float
    description: str
    best_for: str
    suggested_hr_zone: Optional[HRZoneSuggestion] = None
    suggested_power_zone: Optional[PowerZoneSuggestion] = None

    def to_dict(self) -> dict:
        return {
            "tier": self.tier.value,
            "pace_min_per_mile": round(self.pace_min_per_mile, 4),
            "confidence": self.confidence.value,
            "adjustment_percent": self.adjustment_percent,
            "description": self.description,
            "best_for": self.best_for,
            "suggested_hr_zone": (
                self.suggested_hr_zone.to_dict() if self.suggested_hr_zone else None
            ),
            "suggested_power_zone": (
                self.suggested_power_zone.to_dict() if self.suggested_power_zone else None
            ),
        }
