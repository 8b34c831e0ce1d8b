"""
Pace Tier Generator

Expands one derived pace into three user-selectable variants:

    aggressive    pace x 0.96, confidence one level down, targets pushed up
    balanced      unchanged
    conservative  pace x 1.04, confidence one level up, targets eased down
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

from autopace.features.pacing.calculators.zones import HRZoneSuggestion, PowerZoneSuggestion
from autopace.features.pacing.models import DerivedPaceResult, PaceTierOption
from autopace.shared.calculator_types import Confidence, PaceTier
from autopace.shared.units import round_half_up

AGGRESSIVE_ADJUSTMENT = -0.04
CONSERVATIVE_ADJUSTMENT = 0.04

MIN_TARGET_BPM = 50
MAX_TARGET_BPM = 220


@dataclass(frozen=True)
class TierProfile:
    """How a tier shifts pace and effort targets."""
    adjustment: float
    hr_shift_bpm: int
    power_multiplier: float
    hr_note: str
    power_note: str
    description: str
    best_for: str


TIER_PROFILES: Dict[PaceTier, TierProfile] = {
    PaceTier.AGGRESSIVE: TierProfile(
        adjustment=AGGRESSIVE_ADJUSTMENT,
        hr_shift_bpm=4,
        power_multiplier=1.05,
        hr_note="(pushed effort)",
        power_note="(pushed watts)",
        description="Push 4% faster than your reference performance",
        best_for="Optimal conditions, strong training block",
    ),
    PaceTier.BALANCED: TierProfile(
        adjustment=0.0,
        hr_shift_bpm=0,
        power_multiplier=1.0,
        hr_note="",
        power_note="",
        description="Match your proven reference performance",
        best_for="Similar conditions to your reference race",
    ),
    PaceTier.CONSERVATIVE: TierProfile(
        adjustment=CONSERVATIVE_ADJUSTMENT,
        hr_shift_bpm=-4,
        power_multiplier=0.95,
        hr_note="(conservative effort)",
        power_note="(conservative watts)",
        description="4% slower buffer for safety margin",
        best_for="Tough weather, unknown terrain, first attempt",
    ),
}


class PaceTierGenerator:
    """Builds aggressive / balanced / conservative options."""

    def generate(self, result: DerivedPaceResult) -> List[PaceTierOption]:
        """Tier options for a derived pace, in aggressive -> conservative order."""
        return self.generate_options(
            result.pace_min_per_mile,
            result.confidence,
            result.suggested_hr_zone,
            result.suggested_power_zone,
        )

    def generate_options(
        self,
        pace_min_per_mile: float,
        confidence: Confidence,
        hr_zone: Optional[HRZoneSuggestion] = None,
        power_zone: Optional[PowerZoneSuggestion] = None
    ) -> List[PaceTierOption]:
        options = []
        for tier in (PaceTier.AGGRESSIVE, PaceTier.BALANCED, PaceTier.CONSERVATIVE):
            profile = TIER_PROFILES[tier]
            options.append(PaceTierOption(
                tier=tier,
                pace_min_per_mile=pace_min_per_mile * (1 + profile.adjustment),
                confidence=self.adjust_confidence(confidence, tier),
                adjustment_percent=round(profile.adjustment * 100, 1),
                description=profile.description,
                best_for=profile.best_for,
                suggested_hr_zone=self._adjust_hr_zone(hr_zone, profile),
                suggested_power_zone=self._adjust_power_zone(power_zone, profile),
            ))
        return options

    @staticmethod
    def adjust_confidence(confidence: Confidence, tier: PaceTier) -> Confidence:
        """Single-step shift: aggressive down, conservative up."""
        if tier == PaceTier.AGGRESSIVE:
            return confidence.step_down()
        if tier == PaceTier.CONSERVATIVE:
            return confidence.step_up()
        return confidence

    @staticmethod
    def _adjust_hr_zone(
        zone: Optional[HRZoneSuggestion],
        profile: TierProfile
    ) -> Optional[HRZoneSuggestion]:
        if zone is None:
            return None
        if profile.hr_shift_bpm == 0:
            return zone

        return HRZoneSuggestion(
            min_bpm=max(MIN_TARGET_BPM, zone.min_bpm + profile.hr_shift_bpm),
            max_bpm=min(MAX_TARGET_BPM, zone.max_bpm + profile.hr_shift_bpm),
            zone_name=zone.zone_name,
            reasoning=f"{zone.reasoning} {profile.hr_note}",
        )

    @staticmethod
    def _adjust_power_zone(
        zone: Optional[PowerZoneSuggestion],
        profile: TierProfile
    ) -> Optional[PowerZoneSuggestion]:
        if zone is None:
            return None
        if profile.power_multiplier == 1.0:
            return zone

        multiplier = profile.power_multiplier
        return PowerZoneSuggestion(
            min_watts=round_half_up(zone.min_watts * multiplier),
            max_watts=round_half_up(zone.max_watts * multiplier),
            zone_name=zone.zone_name,
            percentage_of_ftp=(
                round_half_up(zone.percentage_of_ftp[0] * multiplier),
                round_half_up(zone.percentage_of_ftp[1] * multiplier),
            ),
            reasoning=f"{zone.reasoning} {profile.power_note}",
        )
