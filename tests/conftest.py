"""
Shared fixtures: synthetic telemetry traces.
"""

from datetime import datetime, timedelta
from typing import Callable, Optional

import pytest

from autopace.features.telemetry.models import TelemetryRecord, TelemetryTrace

START_TIME = datetime(2024, 6, 1, 6, 0, 0)


def build_records(
    miles: float,
    pace: float | Callable[[float], float] = 10.0,
    samples_per_mile: int = 40,
    elevation: Callable[[float], float] = lambda d: 100.0,
    heart_rate: Optional[float] = 140.0,
    power: Optional[float] = None,
) -> list[TelemetryRecord]:
    """
    Evenly spaced records over `miles`.

    `pace` and `elevation` may be functions of the cumulative distance.
    """
    count = int(round(miles * samples_per_mile))
    records = []
    elapsed = 0.0

    for i in range(count + 1):
        distance = i / samples_per_mile
        record_pace = pace(distance) if callable(pace) else pace
        if i > 0:
            elapsed += record_pace * 60 / samples_per_mile
        records.append(TelemetryRecord(
            timestamp=START_TIME + timedelta(seconds=elapsed),
            distance=distance,
            elevation=elevation(distance),
            heart_rate=heart_rate,
            pace=record_pace,
            power=power,
        ))

    return records


@pytest.fixture
def make_records():
    """Factory fixture for synthetic record lists."""
    return build_records


@pytest.fixture
def flat_trace():
    """10 flat miles at 10:00/mile, 140 bpm."""
    return TelemetryTrace(records=build_records(10), file_name="flat.fit")


def build_window(
    avg_pace: float,
    gradient_percent: float = 0.0,
    distance_miles: float = 0.25,
    avg_heart_rate: Optional[int] = None,
):
    """Window with elevation change consistent with its gradient."""
    from autopace.features.telemetry.windower import TelemetryWindow
    from autopace.shared.gradients import classify_window
    from autopace.shared.units import METERS_PER_MILE

    elevation_change = distance_miles * METERS_PER_MILE * gradient_percent / 100
    return TelemetryWindow(
        window_type=classify_window(gradient_percent, elevation_change),
        distance_miles=distance_miles,
        elevation_change_m=elevation_change,
        gradient_percent=gradient_percent,
        avg_pace=avg_pace,
        avg_heart_rate=avg_heart_rate,
    )


@pytest.fixture
def make_window():
    """Factory fixture for synthetic telemetry windows."""
    return build_window
