"""
Aggregate statistics over slices of telemetry records.
"""

import math
from typing import Optional, Sequence

from autopace.features.telemetry.models import TelemetryRecord
from autopace.shared.units import round_half_up

# Paces at or above this are stops/pauses, not running
MAX_PLAUSIBLE_PACE = 30.0


def average_pace(records: Sequence[TelemetryRecord]) -> float:
    """
    Average pace (min/mile) of a record slice.

    Uses recorded paces in (0, 30). When none are usable, falls back to
    elapsed time over covered distance between the first and last record.

    Returns:
        Pace in min/mile, or 0.0 when nothing usable exists
    """
    paces = [
        p for p in (r.effective_pace for r in records)
        if p is not None and 0 < p < MAX_PLAUSIBLE_PACE
    ]

    if not paces:
        return _elapsed_pace(records)

    avg = sum(paces) / len(paces)
    if not math.isfinite(avg):
        return 0.0
    return avg


def _elapsed_pace(records: Sequence[TelemetryRecord]) -> float:
    if len(records) < 2:
        return 0.0

    first, last = records[0], records[-1]
    distance = last.distance - first.distance
    minutes = (last.timestamp - first.timestamp).total_seconds() / 60

    if not (distance > 0 and math.isfinite(distance) and math.isfinite(minutes)):
        return 0.0

    pace = minutes / distance
    if math.isfinite(pace) and 0 < pace < MAX_PLAUSIBLE_PACE:
        return pace
    return 0.0


def average_heart_rate(records: Sequence[TelemetryRecord]) -> Optional[int]:
    """Rounded mean heart rate of samples with HR > 0, None without HR."""
    values = [r.heart_rate for r in records if r.has_heart_rate]
    if not values:
        return None
    return round_half_up(sum(values) / len(values))
