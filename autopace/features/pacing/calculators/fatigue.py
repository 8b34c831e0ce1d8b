"""
Fatigue Estimator

Measures how much the athlete slowed over the reference run, expressed as
percent pace degradation per 10 miles.

The run is cut into contiguous 10-mile chunks; the degradation between the
first and last chunk is spread over the chunk intervals:

    factor = ((last - first) / first * 100) / (chunks - 1)

Example:
    chunks at 10:00, 10:30, 11:00 min/mile -> 10% over 2 intervals -> 5.0
"""

import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Sequence

from autopace.features.telemetry.models import TelemetryRecord
from autopace.features.telemetry.stats import average_pace

logger = logging.getLogger(__name__)

# Fatigue constants
DEFAULT_FATIGUE_FACTOR = 2.0     # % per 10 miles
MIN_FATIGUE_FACTOR = 0.0
MAX_FATIGUE_FACTOR = 8.0
CHUNK_SIZE_MILES = 10.0
MIN_RECORDS_FOR_FATIGUE = 50
MIN_CHUNK_RECORDS = 6            # chunks with <= 5 records are dropped
MIN_CHUNKS = 2


@dataclass
class FatigueEstimatorConfig:
    """Configuration for fatigue estimation."""
    chunk_size_miles: float = CHUNK_SIZE_MILES
    default_factor: float = DEFAULT_FATIGUE_FACTOR
    min_factor: float = MIN_FATIGUE_FACTOR
    max_factor: float = MAX_FATIGUE_FACTOR


class FatigueEstimator:
    """Percent pace degradation per 10 miles from a full record stream."""

    def __init__(self, config: Optional[FatigueEstimatorConfig] = None):
        self.config = config or FatigueEstimatorConfig()

    def split_chunks(self, records: Sequence[TelemetryRecord]) -> List[List[TelemetryRecord]]:
        """
        Split records into contiguous distance chunks.

        A chunk closes at the first record reaching chunk start + chunk size;
        that record opens the next chunk. Sparse chunks are dropped.
        """
        chunks = []
        current: List[TelemetryRecord] = []
        chunk_start = 0.0

        for record in records:
            if record.distance >= chunk_start + self.config.chunk_size_miles:
                if len(current) >= MIN_CHUNK_RECORDS:
                    chunks.append(current)
                current = []
                chunk_start = record.distance
            current.append(record)

        if len(current) >= MIN_CHUNK_RECORDS:
            chunks.append(current)

        return chunks

    def estimate(self, records: Sequence[TelemetryRecord]) -> float:
        """
        Estimate fatigue factor.

        Returns:
            % degradation per 10 miles in [0, 8]; default 2.0 when the run is
            too short or too sparse
        """
        if len(records) < MIN_RECORDS_FOR_FATIGUE:
            return self.config.default_factor

        chunks = self.split_chunks(records)
        if len(chunks) < MIN_CHUNKS:
            return self.config.default_factor

        first_pace = average_pace(chunks[0])
        last_pace = average_pace(chunks[-1])

        if not (first_pace > 0 and math.isfinite(first_pace) and math.isfinite(last_pace)):
            logger.warning("Unusable first-chunk pace, using default fatigue factor")
            return self.config.default_factor

        percent_change = (last_pace - first_pace) / first_pace * 100
        per_chunk = percent_change / (len(chunks) - 1)

        factor = max(self.config.min_factor, min(self.config.max_factor, per_chunk))
        logger.debug(
            f"Fatigue over {len(chunks)} chunks: {first_pace:.2f} -> {last_pace:.2f} "
            f"min/mile, factor={factor:.2f}%"
        )
        return factor
