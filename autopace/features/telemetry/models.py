"""
Telemetry domain models.

Records come from an upstream parser (FIT, Strava streams, ...) and are
treated as read-only by the engine.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional


@dataclass(frozen=True)
class TelemetryRecord:
    """One timestamped sample of a recorded run."""
    timestamp: datetime
    distance: float                     # cumulative miles
    elevation: float                    # meters
    heart_rate: Optional[float] = None  # bpm
    speed: Optional[float] = None       # mph
    pace: Optional[float] = None        # min/mile
    power: Optional[float] = None       # watts
    cadence: Optional[float] = None     # steps/min
    lat: Optional[float] = None
    lon: Optional[float] = None

    @property
    def effective_pace(self) -> Optional[float]:
        """Recorded pace, or pace derived from speed when only speed is known."""
        if self.pace is not None:
            return self.pace
        if self.speed is not None and self.speed > 0:
            return 60.0 / self.speed
        return None

    @property
    def has_heart_rate(self) -> bool:
        return self.heart_rate is not None and self.heart_rate > 0

    @property
    def has_power(self) -> bool:
        return self.power is not None and self.power > 0


@dataclass
class TelemetryTrace:
    """Parsed telemetry file: ordered records plus file-level metadata."""
    records: List[TelemetryRecord] = field(default_factory=list)
    file_name: Optional[str] = None
    race_name: Optional[str] = None
    race_date: Optional[str] = None
    source: Optional[str] = None

    def __len__(self) -> int:
        return len(self.records)

    @property
    def total_distance_miles(self) -> float:
        if not self.records:
            return 0.0
        return self.records[-1].distance
