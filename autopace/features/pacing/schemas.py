"""
Pacing input schemas.

Pydantic models for data handed to the engine by its collaborators
(athlete settings form, race planner, personal GAP profile).
"""

from typing import Optional

from pydantic import BaseModel, Field


class AthleteSettings(BaseModel):
    """Manual athlete overrides. Zero or missing values mean 'detect from data'."""
    max_hr: Optional[float] = Field(default=None, description="Override detected max HR (bpm)")
    resting_hr: Optional[float] = Field(default=None, description="Override detected min HR (bpm)")
    lt_hr: Optional[float] = Field(
        default=None,
        description="Lactate threshold HR (bpm); carried for consumers, zones use max/resting HR"
    )
    ftp: Optional[float] = Field(default=None, description="Functional threshold power (watts)")
    body_weight_kg: Optional[float] = None
    gear_weight_kg: Optional[float] = None


class GapProfile(BaseModel):
    """Personal grade-adjusted-pace factors (seconds per 100ft per mile)."""
    uphill_factor: float = Field(ge=0, description="Seconds per 100ft of gain per mile")
    downhill_factor: float = Field(ge=0, description="Seconds per 100ft of loss per mile")


class RaceSegment(BaseModel):
    """One checkpoint-to-checkpoint leg of the planned race."""
    id: Optional[int] = None
    name: Optional[str] = None
    segment_distance_miles: float
    cumulative_distance_miles: float
    terrain_factor: Optional[float] = Field(
        default=None,
        description="Manual difficulty multiplier (1.1 = 10% slower)"
    )

    @property
    def start_mile(self) -> float:
        return self.cumulative_distance_miles - self.segment_distance_miles
