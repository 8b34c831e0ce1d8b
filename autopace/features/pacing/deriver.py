"""
Segment Pace Deriver

Derives the expected pace of one race segment from a PacingModel:

1. Start from the baseline flat pace
2. Add the elevation adjustment (gain and loss factors)
3. Apply the segment's manual terrain multiplier
4. Add the fatigue adjustment for miles already run
5. Blend with the reference run's actual pace when a match exists

Each step that would produce NaN, infinity or a non-positive pace is
skipped, keeping the previous value. The result always carries a finite,
positive pace.
"""

import logging
from typing import List, Optional, Sequence, Union

from autopace.config import settings
from autopace.features.pacing.calculators.baseline import DEFAULT_BASELINE_PACE
from autopace.features.pacing.calculators.confidence import ConfidenceScorer
from autopace.features.pacing.calculators.zones import ZoneCalculator
from autopace.features.pacing.history import HistoricalPaceMatcher
from autopace.features.pacing.models import (
    DerivedPaceResult,
    ElevationDetails,
    PaceFactors,
    PacingModel,
    SegmentTerrainData,
)
from autopace.features.pacing.schemas import RaceSegment
from autopace.features.pacing.terrain import ElevationSource, build_terrain_data
from autopace.features.telemetry.models import TelemetryRecord, TelemetryTrace
from autopace.shared.formatters import format_pace, format_seconds_delta
from autopace.shared.gradients import classify_climb
from autopace.shared.units import is_valid_number, is_valid_pace, round_half_up

logger = logging.getLogger(__name__)

# Reasoning thresholds (minutes per mile)
CLIMB_REASON_THRESHOLD = 0.5
ELEVATION_REASON_THRESHOLD = 0.1
FATIGUE_MILES_REASON_THRESHOLD = 0.25
FATIGUE_REASON_THRESHOLD = 0.08

DEFAULT_REASONING = "Standard terrain"


class SegmentPaceDeriver:
    """
    Per-segment pace prediction.

    Stateless apart from its collaborators: derivations of different
    segments are independent and may run in any order or in parallel.

    Example usage:
        deriver = SegmentPaceDeriver()
        result = deriver.derive(segment, model, route_profile, trace)
    """

    def __init__(
        self,
        zone_calculator: Optional[ZoneCalculator] = None,
        confidence_scorer: Optional[ConfidenceScorer] = None,
        matcher: Optional[HistoricalPaceMatcher] = None,
        historical_weight: Optional[float] = None,
        similar_gradient_weight: Optional[float] = None,
    ):
        """
        Args:
            historical_weight: Share of the same-miles historical pace in the
                               blend (default settings.historical_blend_weight)
            similar_gradient_weight: Share of the similar-gradient pace
                               (default settings.similar_gradient_blend_weight)
        """
        self.zone_calculator = zone_calculator or ZoneCalculator()
        self.confidence_scorer = confidence_scorer or ConfidenceScorer()
        self.matcher = matcher or HistoricalPaceMatcher()
        self.historical_weight = (
            historical_weight if historical_weight is not None
            else settings.historical_blend_weight
        )
        self.similar_gradient_weight = (
            similar_gradient_weight if similar_gradient_weight is not None
            else settings.similar_gradient_blend_weight
        )

    def derive(
        self,
        segment: RaceSegment,
        model: PacingModel,
        elevation_source: Optional[ElevationSource] = None,
        trace: Union[TelemetryTrace, Sequence[TelemetryRecord], None] = None,
        segment_index: int = 0
    ) -> DerivedPaceResult:
        """
        Derive pace for a single segment.

        Args:
            segment: Target segment (distance, cumulative distance, terrain factor)
            model: Pacing model of the reference run
            elevation_source: Route elevation profile, if the race has one
            trace: Reference run telemetry for historical matching
            segment_index: Position of the segment within the race

        Returns:
            DerivedPaceResult with a finite, positive pace
        """
        terrain = build_terrain_data(segment, elevation_source)

        baseline = model.baseline_flat_pace
        if not is_valid_pace(baseline):
            logger.warning(f"Invalid baseline pace {baseline}, using default")
            baseline = DEFAULT_BASELINE_PACE

        reasoning: List[str] = []
        pace = baseline

        # 1. Elevation
        elevation_adjustment = self._elevation_adjustment(terrain, model)
        if is_valid_pace(pace + elevation_adjustment):
            pace += elevation_adjustment
            self._explain_elevation(reasoning, elevation_adjustment, terrain)
        else:
            logger.warning(f"Elevation adjustment {elevation_adjustment} gives invalid pace, skipping")
            elevation_adjustment = 0.0

        # 2. Terrain multiplier
        terrain_adjustment = 0.0
        terrain_factor = segment.terrain_factor if segment.terrain_factor is not None else 1.0
        if terrain_factor != 1.0:
            if is_valid_pace(terrain_factor) and is_valid_pace(pace * terrain_factor):
                terrain_adjustment = pace * (terrain_factor - 1)
                pace *= terrain_factor
                self._explain_terrain(reasoning, terrain_factor, terrain_adjustment)
            else:
                logger.warning(f"Ignoring invalid terrain factor {terrain_factor}")

        # 3. Fatigue
        miles_completed = terrain.start_mile
        fatigue_multiplier = 1 + (miles_completed / 10) * (model.fatigue_factor / 100)
        fatigue_adjustment = baseline * (fatigue_multiplier - 1)
        if is_valid_number(fatigue_adjustment) and is_valid_pace(pace + fatigue_adjustment):
            pace += fatigue_adjustment
            self._explain_fatigue(reasoning, fatigue_adjustment, miles_completed)
        else:
            logger.warning(f"Invalid fatigue adjustment {fatigue_adjustment}, skipping")
            fatigue_adjustment = 0.0

        # 4. Historical blending
        final_pace, match_used = self._blend_with_history(pace, terrain, trace, reasoning)

        if not is_valid_pace(final_pace):
            logger.error(f"Final pace {final_pace} is invalid, using baseline")
            final_pace = baseline

        confidence = self.confidence_scorer.score(
            gradient_percent=terrain.average_gradient_percent,
            distance_miles=terrain.distance_miles,
            has_elevation_profile=elevation_source is not None,
            has_historical_match=match_used,
        )

        logger.debug(
            f"Segment {segment_index}: {final_pace:.2f} min/mile, "
            f"confidence={confidence.level.value} ({confidence.score})"
        )

        return DerivedPaceResult(
            pace_min_per_mile=final_pace,
            confidence=confidence.level,
            confidence_score=confidence.score,
            factors=PaceFactors(
                base_pace=baseline,
                elevation_adjustment=elevation_adjustment,
                fatigue_adjustment=fatigue_adjustment,
                total_adjustment=elevation_adjustment + terrain_adjustment + fatigue_adjustment,
            ),
            reasoning=", ".join(reasoning) if reasoning else DEFAULT_REASONING,
            suggested_hr_zone=self.zone_calculator.suggest_hr_zone(
                terrain.zone_gradient_percent,
                terrain.cumulative_distance_miles,
                model.hr_zones,
            ),
            suggested_power_zone=self.zone_calculator.suggest_power_zone(
                terrain.zone_gradient_percent,
                terrain.cumulative_distance_miles,
                model.power_zones,
            ),
            elevation_details=self._elevation_details(terrain, elevation_adjustment),
        )

    # === Adjustments ===

    @staticmethod
    def _elevation_adjustment(terrain: SegmentTerrainData, model: PacingModel) -> float:
        """Minutes per mile added by the segment's climbing and descending."""
        if not terrain.distance_miles > 0:
            return 0.0

        gain_seconds = (terrain.elevation_gain_feet / 100) * (
            model.elevation_gain_factor / terrain.distance_miles
        )
        loss_seconds = (terrain.elevation_loss_feet / 100) * (
            model.elevation_loss_factor / terrain.distance_miles
        )
        adjustment = (gain_seconds + loss_seconds) / 60

        if not is_valid_number(adjustment):
            logger.warning("Invalid elevation adjustment, resetting to 0")
            return 0.0
        return adjustment

    def _blend_with_history(
        self,
        pace: float,
        terrain: SegmentTerrainData,
        trace: Union[TelemetryTrace, Sequence[TelemetryRecord], None],
        reasoning: List[str]
    ) -> tuple[float, bool]:
        """
        Blend the computed pace with the reference run.

        Returns:
            (pace, whether a historical match was used)
        """
        records = trace.records if isinstance(trace, TelemetryTrace) else trace
        if not records:
            return pace, False

        historical = self.matcher.pace_at_distance(
            terrain.start_mile, terrain.cumulative_distance_miles, records
        )
        if historical is not None:
            blended = self._weighted(historical, pace, self.historical_weight)
            if is_valid_pace(blended):
                start = round_half_up(terrain.start_mile)
                end = round_half_up(terrain.cumulative_distance_miles)
                reasoning.insert(
                    0,
                    f"Based on {format_pace(historical)} pace at miles {start}-{end} "
                    f"in your reference run"
                )
                return blended, True
            return pace, False

        if terrain.average_gradient_percent == 0:
            return pace, False

        similar = self.matcher.similar_gradient_pace(terrain.average_gradient_percent, records)
        if similar is not None:
            blended = self._weighted(similar, pace, self.similar_gradient_weight)
            if is_valid_pace(blended):
                reasoning.insert(
                    0,
                    f"Based on {format_pace(similar)} pace on similar terrain in your reference run"
                )
                return blended, True

        return pace, False

    @staticmethod
    def _weighted(observed: float, computed: float, weight: float) -> float:
        return observed * weight + computed * (1 - weight)

    # === Reasoning ===

    @staticmethod
    def _explain_elevation(
        reasoning: List[str],
        adjustment: float,
        terrain: SegmentTerrainData
    ) -> None:
        seconds = round_half_up(adjustment * 60)
        if adjustment > CLIMB_REASON_THRESHOLD:
            gain_feet = round_half_up(terrain.elevation_gain_feet)
            reasoning.append(f"+{seconds}s for {gain_feet}ft climb")
        elif adjustment > ELEVATION_REASON_THRESHOLD:
            reasoning.append(f"+{seconds}s for elevation")

    @staticmethod
    def _explain_terrain(reasoning: List[str], factor: float, adjustment: float) -> None:
        impact = round_half_up((factor - 1) * 100)
        delta = format_seconds_delta(round_half_up(adjustment * 60))
        if factor > 1.0:
            reasoning.append(f"{delta} terrain ({impact}% slower)")
        else:
            reasoning.append(f"{delta} terrain ({abs(impact)}% faster)")

    @staticmethod
    def _explain_fatigue(reasoning: List[str], adjustment: float, miles_completed: float) -> None:
        seconds = round_half_up(adjustment * 60)
        if adjustment > FATIGUE_MILES_REASON_THRESHOLD:
            reasoning.append(f"+{seconds}s fatigue at {round_half_up(miles_completed)}mi")
        elif adjustment > FATIGUE_REASON_THRESHOLD:
            reasoning.append(f"+{seconds}s fatigue")

    @staticmethod
    def _elevation_details(
        terrain: SegmentTerrainData,
        elevation_adjustment: float
    ) -> Optional[ElevationDetails]:
        if terrain.elevation_gain_feet <= 0 and terrain.elevation_loss_feet <= 0:
            return None

        return ElevationDetails(
            gain_feet=round_half_up(terrain.elevation_gain_feet),
            loss_feet=round_half_up(terrain.elevation_loss_feet),
            distance_miles=round(terrain.distance_miles, 1),
            avg_gradient_percent=round(terrain.average_gradient_percent, 1),
            climb_type=classify_climb(
                terrain.average_gradient_percent, terrain.elevation_gain_feet
            ),
            pace_adjustment_seconds=round_half_up(elevation_adjustment * 60),
        )
