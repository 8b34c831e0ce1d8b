"""
Pacing feature: pacing model, segment pace derivation and tiers.
"""

from .builder import PacingModelBuilder
from .deriver import SegmentPaceDeriver
from .history import HistoricalPaceMatcher
from .models import (
    PacingModel,
    SegmentTerrainData,
    ElevationDetails,
    PaceFactors,
    DerivedPaceResult,
    PaceTierOption,
)
from .schemas import AthleteSettings, GapProfile, RaceSegment
from .service import AutoPaceService
from .terrain import ElevationSource, RouteProfile, build_terrain_data
from .tiers import PaceTierGenerator

__all__ = [
    "AutoPaceService",
    "PacingModelBuilder",
    "SegmentPaceDeriver",
    "HistoricalPaceMatcher",
    "PaceTierGenerator",
    "PacingModel",
    "SegmentTerrainData",
    "ElevationDetails",
    "PaceFactors",
    "DerivedPaceResult",
    "PaceTierOption",
    "AthleteSettings",
    "GapProfile",
    "RaceSegment",
    "ElevationSource",
    "RouteProfile",
    "build_terrain_data",
]
