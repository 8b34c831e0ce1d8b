"""
Auto-Pace Service

Main entry point: analyzes a reference run once and derives paces for
every segment of a planned race.

Results are keyed by segment id; segments without an id are skipped.
Nothing is persisted here, consumers store what the user adopts.
"""

import asyncio
import logging
from typing import Dict, List, Optional, Sequence, Union

from autopace.features.pacing.builder import PacingModelBuilder
from autopace.features.pacing.deriver import SegmentPaceDeriver
from autopace.features.pacing.models import DerivedPaceResult, PaceTierOption, PacingModel
from autopace.features.pacing.schemas import AthleteSettings, GapProfile, RaceSegment
from autopace.features.pacing.terrain import ElevationSource
from autopace.features.pacing.tiers import PaceTierGenerator
from autopace.features.telemetry.models import TelemetryRecord, TelemetryTrace

logger = logging.getLogger(__name__)

TraceInput = Union[TelemetryTrace, Sequence[TelemetryRecord], None]


class AutoPaceService:
    """
    Race-level pace derivation.

    Example usage:
        service = AutoPaceService()
        results = service.apply_to_race(segments, trace, route_profile)
        options = service.tier_options(results)
    """

    def __init__(
        self,
        builder: Optional[PacingModelBuilder] = None,
        deriver: Optional[SegmentPaceDeriver] = None,
        tier_generator: Optional[PaceTierGenerator] = None,
    ):
        self.builder = builder or PacingModelBuilder()
        self.deriver = deriver or SegmentPaceDeriver()
        self.tier_generator = tier_generator or PaceTierGenerator()

    def analyze(
        self,
        trace: TraceInput,
        athlete: Optional[AthleteSettings] = None,
        gap_profile: Optional[GapProfile] = None
    ) -> PacingModel:
        """Build the pacing model of a reference run."""
        return self.builder.analyze(trace, athlete, gap_profile)

    def derive_segments(
        self,
        segments: Sequence[RaceSegment],
        model: PacingModel,
        elevation_source: Optional[ElevationSource] = None,
        trace: TraceInput = None
    ) -> Dict[int, DerivedPaceResult]:
        """Derive every segment that has an id with an existing model."""
        results: Dict[int, DerivedPaceResult] = {}

        for index, segment in enumerate(segments):
            if segment.id is None:
                continue
            results[segment.id] = self.deriver.derive(
                segment, model, elevation_source, trace, segment_index=index
            )

        return results

    def apply_to_race(
        self,
        segments: Sequence[RaceSegment],
        trace: TraceInput,
        elevation_source: Optional[ElevationSource] = None,
        athlete: Optional[AthleteSettings] = None,
        gap_profile: Optional[GapProfile] = None
    ) -> Dict[int, DerivedPaceResult]:
        """
        Analyze the reference run and derive all segments.

        Args:
            segments: Ordered race segments
            trace: Reference run telemetry
            elevation_source: Route elevation profile, if any
            athlete: Manual HR / FTP overrides
            gap_profile: Personal climb/descent factors

        Returns:
            {segment_id: DerivedPaceResult}
        """
        model = self.analyze(trace, athlete, gap_profile)
        results = self.derive_segments(segments, model, elevation_source, trace)
        logger.info(f"Derived paces for {len(results)} of {len(segments)} segments")
        return results

    async def apply_to_race_async(
        self,
        segments: Sequence[RaceSegment],
        trace: TraceInput,
        elevation_source: Optional[ElevationSource] = None,
        athlete: Optional[AthleteSettings] = None,
        gap_profile: Optional[GapProfile] = None
    ) -> Dict[int, DerivedPaceResult]:
        """
        apply_to_race() in a worker thread, keeping the event loop free.

        Cancelling the awaiting task just discards the result; the engine
        holds no resources that need cleanup.
        """
        return await asyncio.to_thread(
            self.apply_to_race, segments, trace, elevation_source, athlete, gap_profile
        )

    def tier_options(
        self,
        results: Dict[int, DerivedPaceResult]
    ) -> Dict[int, List[PaceTierOption]]:
        """Aggressive / balanced / conservative options per segment."""
        return {
            segment_id: self.tier_generator.generate(result)
            for segment_id, result in results.items()
        }
