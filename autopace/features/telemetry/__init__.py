"""
Telemetry feature: recorded-run samples, slice statistics and windowing.
"""

from .models import TelemetryRecord, TelemetryTrace
from .stats import average_pace, average_heart_rate
from .windower import (
    TelemetryWindower,
    TelemetryWindow,
    WindowSet,
    WindowSpan,
    WINDOW_SIZE_MILES,
)

__all__ = [
    "TelemetryRecord",
    "TelemetryTrace",
    "average_pace",
    "average_heart_rate",
    "TelemetryWindower",
    "TelemetryWindow",
    "WindowSet",
    "WindowSpan",
    "WINDOW_SIZE_MILES",
]
