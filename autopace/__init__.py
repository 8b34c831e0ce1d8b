"""
autopace - pace prediction from a reference run.

Usage:
    from autopace import AutoPaceService, RaceSegment, TelemetryTrace
"""

from autopace.features.pacing import (
    AutoPaceService,
    AthleteSettings,
    DerivedPaceResult,
    GapProfile,
    PaceTierOption,
    PacingModel,
    RaceSegment,
    RouteProfile,
)
from autopace.features.telemetry import TelemetryRecord, TelemetryTrace
from autopace.shared.calculator_types import Confidence, PaceTier

__version__ = "0.1.0"

__all__ = [
    "AutoPaceService",
    "AthleteSettings",
    "DerivedPaceResult",
    "GapProfile",
    "PaceTierOption",
    "PacingModel",
    "RaceSegment",
    "RouteProfile",
    "TelemetryRecord",
    "TelemetryTrace",
    "Confidence",
    "PaceTier",
]
