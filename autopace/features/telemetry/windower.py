"""
Telemetry Windower

Slides a fixed-distance window (0.25 mile) across the ordered record
stream and classifies each window by average gradient.

The forward scan for a window's end uses a binary search over the
cumulative distance column, so a trace of n records costs O(n log n)
lookups instead of O(n^2) linear scans. Records are expected to be
ordered with non-decreasing distance (upstream parser guarantee).
"""

import logging
from bisect import bisect_left
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple

from autopace.features.telemetry.models import TelemetryRecord
from autopace.features.telemetry.stats import average_heart_rate, average_pace
from autopace.shared.calculator_types import WindowType
from autopace.shared.geo import gradient_percent
from autopace.shared.gradients import classify_window
from autopace.shared.units import FEET_PER_METER

logger = logging.getLogger(__name__)

WINDOW_SIZE_MILES = 0.25
MIN_RECORDS_FOR_WINDOWS = 10     # fewer records -> no windows at all
MIN_WINDOW_SAMPLES = 5           # sparser windows are not trusted

# Plausible running paces per window class (min/mile)
FLAT_PACE_RANGE = (5.0, 20.0)
GRADIENT_PACE_RANGE = (5.0, 25.0)


@dataclass(frozen=True)
class WindowSpan:
    """Index range of one window and its geometry."""
    start_index: int
    end_index: int               # inclusive
    distance_miles: float
    elevation_change_m: float
    gradient_percent: float

    def select(self, records: Sequence[TelemetryRecord]) -> Sequence[TelemetryRecord]:
        return records[self.start_index:self.end_index + 1]


@dataclass(frozen=True)
class TelemetryWindow:
    """A classified window with its average pace."""
    window_type: WindowType
    distance_miles: float
    elevation_change_m: float
    gradient_percent: float
    avg_pace: float
    avg_heart_rate: Optional[int] = None
    start_index: int = 0
    end_index: int = 0

    @property
    def gain_feet_per_mile(self) -> float:
        """Elevation change in feet per mile (negative on descents)."""
        if not self.distance_miles > 0:
            return 0.0
        return self.elevation_change_m * FEET_PER_METER / self.distance_miles


@dataclass(frozen=True)
class WindowSet:
    """Independent flat / uphill / downhill window collections."""
    flat: Tuple[TelemetryWindow, ...] = ()
    uphill: Tuple[TelemetryWindow, ...] = ()
    downhill: Tuple[TelemetryWindow, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not (self.flat or self.uphill or self.downhill)


class TelemetryWindower:
    """
    Splits a record stream into fixed-distance windows.

    Example:
        windows = TelemetryWindower().split(trace.records)
        baseline = BaselineEstimator().estimate(windows.flat)
    """

    def __init__(self, window_size_miles: float = WINDOW_SIZE_MILES):
        self.window_size_miles = window_size_miles

    def iter_spans(self, records: Sequence[TelemetryRecord]) -> Iterator[WindowSpan]:
        """
        Yield every window of at least MIN_WINDOW_SAMPLES records.

        One window per start index; its end is the first later record whose
        cumulative distance reaches start + window size.
        """
        count = len(records)
        if count < MIN_RECORDS_FOR_WINDOWS:
            return

        distances = [r.distance for r in records]

        for i in range(count - MIN_RECORDS_FOR_WINDOWS):
            start = records[i]
            end_index = bisect_left(distances, start.distance + self.window_size_miles, lo=i + 1)

            if end_index >= count or end_index - i < MIN_WINDOW_SAMPLES:
                continue

            end = records[end_index]
            distance = end.distance - start.distance
            elevation_change = end.elevation - start.elevation

            yield WindowSpan(
                start_index=i,
                end_index=end_index,
                distance_miles=distance,
                elevation_change_m=elevation_change,
                gradient_percent=gradient_percent(distance, elevation_change),
            )

    def split(self, records: Sequence[TelemetryRecord]) -> WindowSet:
        """
        Classify windows into flat, uphill and downhill collections.

        Windows with implausible pace or a mild non-flat gradient are dropped.
        """
        flat: List[TelemetryWindow] = []
        uphill: List[TelemetryWindow] = []
        downhill: List[TelemetryWindow] = []

        for span in self.iter_spans(records):
            window_type = classify_window(span.gradient_percent, span.elevation_change_m)
            if window_type == WindowType.OTHER:
                continue

            window_records = span.select(records)
            pace = average_pace(window_records)

            if window_type == WindowType.FLAT:
                if not _in_range(pace, FLAT_PACE_RANGE):
                    continue
                flat.append(self._build(span, window_type, pace, average_heart_rate(window_records)))
            elif _in_range(pace, GRADIENT_PACE_RANGE):
                target = uphill if window_type == WindowType.UPHILL else downhill
                target.append(self._build(span, window_type, pace))

        logger.debug(
            f"Windowed {len(records)} records: {len(flat)} flat, "
            f"{len(uphill)} uphill, {len(downhill)} downhill"
        )

        return WindowSet(flat=tuple(flat), uphill=tuple(uphill), downhill=tuple(downhill))

    @staticmethod
    def _build(
        span: WindowSpan,
        window_type: WindowType,
        pace: float,
        heart_rate: Optional[int] = None
    ) -> TelemetryWindow:
        return TelemetryWindow(
            window_type=window_type,
            distance_miles=span.distance_miles,
            elevation_change_m=span.elevation_change_m,
            gradient_percent=span.gradient_percent,
            avg_pace=pace,
            avg_heart_rate=heart_rate,
            start_index=span.start_index,
            end_index=span.end_index,
        )


def _in_range(value: float, bounds: Tuple[float, float]) -> bool:
    low, high = bounds
    return value > 0 and low <= value <= high
