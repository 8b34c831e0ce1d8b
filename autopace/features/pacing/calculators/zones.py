"""
Zone Calculator

Heart-rate zones (Karvonen / heart-rate-reserve method) and power zones
(percent of FTP), plus per-segment zone suggestions.

Karvonen:
    target = resting + (max - resting) * intensity

References:
- Karvonen et al. (1957) - The effects of training on heart rate
- Coggan power levels (percent of FTP)
"""

import logging
import math
from dataclasses import dataclass, asdict
from typing import Dict, List, Optional, Sequence, Tuple

from autopace.config import settings
from autopace.features.pacing.schemas import AthleteSettings
from autopace.features.telemetry.models import TelemetryRecord
from autopace.shared.gradients import classify_zone_band
from autopace.shared.units import round_half_up

logger = logging.getLogger(__name__)

MIN_HR_SAMPLES = 50
MIN_POWER_SAMPLES = 100
DEFAULT_HR_THRESHOLD = 165
HR_THRESHOLD_OFFSET = 10   # bpm above average sustained HR

# Zone boundaries as fraction of heart-rate reserve (zone1|zone2|...|zone5)
HRR_BOUNDARIES = (0.6, 0.7, 0.8, 0.9)

# (key, display name, min %FTP, max %FTP)
POWER_BANDS = (
    ("easy", "Easy", 0, 55),
    ("moderate", "Moderate", 56, 75),
    ("tempo", "Tempo", 76, 90),
    ("threshold", "Threshold", 91, 105),
    ("vo2max", "VO2max", 106, 120),
)

# Fatigue-aware target shift
HR_BOOST_MILES = 20.0        # +1 bpm per 20 miles already run
MAX_HR_BOOST = 5
POWER_REDUCTION_MILES = 200.0  # -1% power per 2 miles ...
MAX_POWER_REDUCTION = 0.15     # ... up to 15%

# Gradient band -> (HR zone number, power zone key, HR reasoning, power reasoning)
ZONE_BY_BAND: Dict[str, Tuple[int, str, str, str]] = {
    'down_5_over': (1, "easy",
                    "Downhill recovery - keep HR low",
                    "Downhill - easy recovery watts"),
    'down_5_2': (2, "easy",
                 "Gentle downhill - easy aerobic effort",
                 "Gentle downhill - maintain easy watts"),
    'flat_2_2': (2, "moderate",
                 "Flat terrain - steady aerobic pace",
                 "Flat terrain - steady moderate power"),
    'up_2_5': (3, "tempo",
               "Moderate climb - tempo effort",
               "Moderate climb - tempo power"),
    'up_5_10': (4, "tempo",
                "Steep climb - threshold effort, hiking OK",
                "Steep climb - sustained tempo, hiking OK"),
    'up_10_over': (4, "tempo",
                   "Very steep climb - power hike recommended",
                   "Very steep - power hike at tempo"),
}


@dataclass(frozen=True)
class HRZone:
    min: int
    max: int


@dataclass(frozen=True)
class HRZones:
    """Five contiguous bpm ranges covering [resting, max]."""
    zone1: HRZone
    zone2: HRZone
    zone3: HRZone
    zone4: HRZone
    zone5: HRZone

    def get(self, number: int) -> HRZone:
        return getattr(self, f"zone{number}")

    def as_list(self) -> List[HRZone]:
        return [self.get(n) for n in range(1, 6)]

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class PowerZone:
    min: int
    max: int
    min_percent: int
    max_percent: int

    @property
    def percent_ftp(self) -> str:
        return f"{self.min_percent}-{self.max_percent}%"


@dataclass(frozen=True)
class PowerZones:
    """Five contiguous wattage bands by percent of FTP."""
    ftp: int
    easy: PowerZone
    moderate: PowerZone
    tempo: PowerZone
    threshold: PowerZone
    vo2max: PowerZone

    def get(self, key: str) -> PowerZone:
        return getattr(self, key)

    def to_dict(self) -> dict:
        result = asdict(self)
        for key, _, _, _ in POWER_BANDS:
            result[key]["percent_ftp"] = self.get(key).percent_ftp
        return result


@dataclass(frozen=True)
class HRZoneSuggestion:
    min_bpm: int
    max_bpm: int
    zone_name: str
    reasoning: str

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class PowerZoneSuggestion:
    min_watts: int
    max_watts: int
    zone_name: str
    percentage_of_ftp: Tuple[int, int]
    reasoning: str

    def to_dict(self) -> dict:
        return {
            "min_watts": self.min_watts,
            "max_watts": self.max_watts,
            "zone_name": self.zone_name,
            "percentage_of_ftp": {
                "min": self.percentage_of_ftp[0],
                "max": self.percentage_of_ftp[1],
            },
            "reasoning": self.reasoning,
        }


class ZoneCalculator:
    """
    Service for physiological training zones.

    Example:
        calculator = ZoneCalculator()
        zones = calculator.hr_zones(trace.records, AthleteSettings(max_hr=185))
        suggestion = calculator.suggest_hr_zone(6.5, 24.0, zones)
    """

    def __init__(self, ftp_multiplier: Optional[float] = None):
        """
        Args:
            ftp_multiplier: Average race power -> FTP multiplier
                            (defaults to settings.ftp_estimation_multiplier)
        """
        self.ftp_multiplier = (
            ftp_multiplier if ftp_multiplier is not None
            else settings.ftp_estimation_multiplier
        )

    # === Heart rate ===

    def hr_zones(
        self,
        records: Sequence[TelemetryRecord],
        athlete: Optional[AthleteSettings] = None
    ) -> Optional[HRZones]:
        """
        Calculate HR zones via heart-rate reserve.

        Returns:
            HRZones, or None with fewer than 50 HR samples or a
            non-positive reserve
        """
        heart_rates = [r.heart_rate for r in records if r.has_heart_rate]
        if len(heart_rates) < MIN_HR_SAMPLES:
            logger.info("Insufficient HR data to calculate zones")
            return None

        max_hr = (athlete.max_hr if athlete else None) or max(heart_rates)
        resting_hr = (athlete.resting_hr if athlete else None) or min(heart_rates)
        reserve = max_hr - resting_hr

        if not reserve > 0:
            logger.warning(f"Invalid HR reserve (max={max_hr}, resting={resting_hr}), no zones")
            return None

        bounds = [resting_hr] + [resting_hr + reserve * pct for pct in HRR_BOUNDARIES] + [max_hr]
        rounded = [round_half_up(b) for b in bounds]

        return HRZones(*[
            HRZone(min=rounded[i], max=rounded[i + 1]) for i in range(5)
        ])

    def hr_threshold(self, records: Sequence[TelemetryRecord]) -> int:
        """HR above which pace degrades: average sustained HR + 10 bpm."""
        heart_rates = [r.heart_rate for r in records if r.has_heart_rate]
        if len(heart_rates) < MIN_HR_SAMPLES:
            return DEFAULT_HR_THRESHOLD
        return round_half_up(sum(heart_rates) / len(heart_rates) + HR_THRESHOLD_OFFSET)

    # === Power ===

    @staticmethod
    def has_power_data(records: Sequence[TelemetryRecord]) -> bool:
        """True when the trace holds more than 100 power samples."""
        return sum(1 for r in records if r.has_power) > MIN_POWER_SAMPLES

    def estimate_ftp(
        self,
        records: Sequence[TelemetryRecord],
        athlete: Optional[AthleteSettings] = None
    ) -> Optional[int]:
        """Athlete FTP, else average power x multiplier (race run at ~69% FTP)."""
        if athlete and athlete.ftp:
            return round_half_up(athlete.ftp)

        powers = [r.power for r in records if r.has_power]
        if not powers:
            return None
        return round_half_up(sum(powers) / len(powers) * self.ftp_multiplier)

    def power_zones(
        self,
        records: Sequence[TelemetryRecord],
        athlete: Optional[AthleteSettings] = None
    ) -> Optional[PowerZones]:
        """
        Calculate power zones from FTP.

        Returns:
            PowerZones, or None with fewer than 100 power samples or an
            invalid FTP
        """
        if sum(1 for r in records if r.has_power) < MIN_POWER_SAMPLES:
            logger.info("Insufficient power data to calculate zones")
            return None

        ftp = self.estimate_ftp(records, athlete)
        if ftp is None or ftp <= 0:
            logger.warning(f"Invalid FTP ({ftp}), cannot calculate power zones")
            return None

        bands = {
            key: PowerZone(
                min=round_half_up(ftp * (low / 100)),
                max=round_half_up(ftp * (high / 100)),
                min_percent=low,
                max_percent=high,
            )
            for key, _, low, high in POWER_BANDS
        }
        return PowerZones(ftp=ftp, **bands)

    # === Segment suggestions ===

    @staticmethod
    def suggest_hr_zone(
        gradient_percent: float,
        cumulative_distance_miles: float,
        zones: Optional[HRZones]
    ) -> Optional[HRZoneSuggestion]:
        """
        Target HR range for a segment.

        Targets drift up by 1 bpm per 20 miles run (max +5) to allow for
        cardiac drift late in the race.
        """
        if zones is None:
            return None

        zone_number, _, reasoning, _ = ZONE_BY_BAND[classify_zone_band(gradient_percent)]
        target = zones.get(zone_number)
        boost = _hr_boost(cumulative_distance_miles)

        return HRZoneSuggestion(
            min_bpm=target.min + boost,
            max_bpm=target.max + boost,
            zone_name=f"Zone {zone_number}",
            reasoning=reasoning,
        )

    @staticmethod
    def suggest_power_zone(
        gradient_percent: float,
        cumulative_distance_miles: float,
        zones: Optional[PowerZones]
    ) -> Optional[PowerZoneSuggestion]:
        """
        Target power range for a segment.

        Watts (and their percent of FTP) are scaled down with distance run,
        up to 15%.
        """
        if zones is None:
            return None

        _, key, _, reasoning = ZONE_BY_BAND[classify_zone_band(gradient_percent)]
        target = zones.get(key)
        scale = 1 - _power_reduction(cumulative_distance_miles)
        zone_name = next(name for band_key, name, _, _ in POWER_BANDS if band_key == key)

        return PowerZoneSuggestion(
            min_watts=round_half_up(target.min * scale),
            max_watts=round_half_up(target.max * scale),
            zone_name=zone_name,
            percentage_of_ftp=(
                round_half_up(target.min_percent * scale),
                round_half_up(target.max_percent * scale),
            ),
            reasoning=reasoning,
        )


def _hr_boost(cumulative_distance_miles: float) -> int:
    if not math.isfinite(cumulative_distance_miles) or cumulative_distance_miles <= 0:
        return 0
    return min(MAX_HR_BOOST, math.floor(cumulative_distance_miles / HR_BOOST_MILES))


def _power_reduction(cumulative_distance_miles: float) -> float:
    if not math.isfinite(cumulative_distance_miles) or cumulative_distance_miles <= 0:
        return 0.0
    return min(MAX_POWER_REDUCTION, cumulative_distance_miles / POWER_REDUCTION_MILES)
