"""
Historical split matching.

Looks up how fast the athlete actually ran in the reference run, either at
the same miles as the target segment or on windows of similar gradient.
"""

from typing import List, Optional, Sequence

from autopace.features.telemetry.models import TelemetryRecord
from autopace.features.telemetry.stats import average_pace
from autopace.features.telemetry.windower import TelemetryWindower

MIN_DISTANCE_MATCH_RECORDS = 5
MIN_RECORDS_FOR_GRADIENT_SEARCH = 20
MIN_GRADIENT_MATCH_SAMPLES = 10
GRADIENT_TOLERANCE_PERCENT = 2.0


class HistoricalPaceMatcher:
    """Finds paces in a reference run that resemble a target segment."""

    def __init__(self, windower: Optional[TelemetryWindower] = None):
        self.windower = windower or TelemetryWindower()

    def pace_at_distance(
        self,
        start_mile: float,
        end_mile: float,
        records: Sequence[TelemetryRecord]
    ) -> Optional[float]:
        """
        Average pace of the reference run over [start_mile, end_mile].

        Returns:
            Pace in min/mile, or None with fewer than 5 records in range
        """
        matching = [r for r in records if start_mile <= r.distance <= end_mile]
        if len(matching) < MIN_DISTANCE_MATCH_RECORDS:
            return None

        pace = average_pace(matching)
        return pace if pace > 0 else None

    def similar_gradient_records(
        self,
        target_gradient: float,
        records: Sequence[TelemetryRecord]
    ) -> List[TelemetryRecord]:
        """
        Records of every window whose gradient is within 2% of the target.

        Overlapping windows contribute their shared records once per window.
        """
        if len(records) < MIN_RECORDS_FOR_GRADIENT_SEARCH:
            return []

        matching: List[TelemetryRecord] = []
        for span in self.windower.iter_spans(records):
            if abs(span.gradient_percent - target_gradient) <= GRADIENT_TOLERANCE_PERCENT:
                matching.extend(span.select(records))
        return matching

    def similar_gradient_pace(
        self,
        target_gradient: float,
        records: Sequence[TelemetryRecord]
    ) -> Optional[float]:
        """Average pace over similar-gradient windows (needs >= 10 samples)."""
        matching = self.similar_gradient_records(target_gradient, records)
        if len(matching) < MIN_GRADIENT_MATCH_SAMPLES:
            return None

        pace = average_pace(matching)
        return pace if pace > 0 else None
