"""
Tests for PaceTierGenerator.
"""

import pytest

from autopace.features.pacing.calculators.zones import HRZoneSuggestion, PowerZoneSuggestion
from autopace.features.pacing.models import DerivedPaceResult, PaceFactors
from autopace.features.pacing.tiers import PaceTierGenerator
from autopace.shared.calculator_types import Confidence, PaceTier


@pytest.fixture
def generator():
    return PaceTierGenerator()


@pytest.fixture
def hr_zone():
    return HRZoneSuggestion(144, 156, "Zone 3", "Moderate climb - tempo effort")


@pytest.fixture
def power_zone():
    return PowerZoneSuggestion(168, 225, "Moderate", (56, 75), "Flat terrain - steady moderate power")


@pytest.fixture
def options(generator, hr_zone, power_zone):
    aggressive, balanced, conservative = generator.generate_options(
        10.0, Confidence.MEDIUM, hr_zone, power_zone
    )
    return {"aggressive": aggressive, "balanced": balanced, "conservative": conservative}


class TestPaces:
    """Pace and confidence shifts."""

    def test_order(self, options):
        assert [o.tier for o in options.values()] == [
            PaceTier.AGGRESSIVE, PaceTier.BALANCED, PaceTier.CONSERVATIVE
        ]

    def test_pace_multipliers(self, options):
        assert options["aggressive"].pace_min_per_mile == pytest.approx(9.6)
        assert options["balanced"].pace_min_per_mile == 10.0
        assert options["conservative"].pace_min_per_mile == pytest.approx(10.4)

    def test_adjustment_percent(self, options):
        assert options["aggressive"].adjustment_percent == -4.0
        assert options["balanced"].adjustment_percent == 0.0
        assert options["conservative"].adjustment_percent == 4.0

    def test_confidence_shift(self, options):
        assert options["aggressive"].confidence == Confidence.LOW
        assert options["balanced"].confidence == Confidence.MEDIUM
        assert options["conservative"].confidence == Confidence.HIGH

    @pytest.mark.parametrize("confidence, tier, expected", [
        (Confidence.LOW, PaceTier.AGGRESSIVE, Confidence.LOW),
        (Confidence.HIGH, PaceTier.AGGRESSIVE, Confidence.MEDIUM),
        (Confidence.HIGH, PaceTier.CONSERVATIVE, Confidence.HIGH),
        (Confidence.LOW, PaceTier.CONSERVATIVE, Confidence.MEDIUM),
        (Confidence.LOW, PaceTier.BALANCED, Confidence.LOW),
    ])
    def test_single_step(self, confidence, tier, expected):
        assert PaceTierGenerator.adjust_confidence(confidence, tier) == expected

    def test_texts(self, options):
        assert options["aggressive"].description == "Push 4% faster than your reference performance"
        assert options["balanced"].description == "Match your proven reference performance"
        assert options["conservative"].description == "4% slower buffer for safety margin"


class TestZones:
    """Effort targets follow the tier."""

    def test_balanced_unchanged(self, options, hr_zone, power_zone):
        assert options["balanced"].suggested_hr_zone is hr_zone
        assert options["balanced"].suggested_power_zone is power_zone

    def test_hr_shift(self, options):
        aggressive = options["aggressive"].suggested_hr_zone
        conservative = options["conservative"].suggested_hr_zone

        assert (aggressive.min_bpm, aggressive.max_bpm) == (148, 160)
        assert aggressive.reasoning.endswith("(pushed effort)")
        assert (conservative.min_bpm, conservative.max_bpm) == (140, 152)
        assert conservative.reasoning.endswith("(conservative effort)")
        assert conservative.zone_name == "Zone 3"

    def test_hr_caps(self, generator):
        zone = HRZoneSuggestion(48, 218, "Zone 5", "Max")

        aggressive, _, conservative = generator.generate_options(10.0, Confidence.LOW, hr_zone=zone)

        assert aggressive.suggested_hr_zone.max_bpm == 220
        assert conservative.suggested_hr_zone.min_bpm == 50

    def test_power_shift(self, options):
        aggressive = options["aggressive"].suggested_power_zone
        conservative = options["conservative"].suggested_power_zone

        assert (aggressive.min_watts, aggressive.max_watts) == (176, 236)
        assert aggressive.percentage_of_ftp == (59, 79)
        assert aggressive.reasoning.endswith("(pushed watts)")
        assert (conservative.min_watts, conservative.max_watts) == (160, 214)
        assert conservative.percentage_of_ftp == (53, 71)

    def test_no_zones(self, generator):
        for option in generator.generate_options(10.0, Confidence.HIGH):
            assert option.suggested_hr_zone is None
            assert option.suggested_power_zone is None


def test_generate_from_result(generator):
    result = DerivedPaceResult(
        pace_min_per_mile=12.5,
        confidence=Confidence.HIGH,
        confidence_score=80,
        factors=PaceFactors(12.5, 0.0, 0.0, 0.0),
        reasoning="Standard terrain",
    )

    options = generator.generate(result)

    assert options[2].pace_min_per_mile == pytest.approx(13.0)
    assert options[0].to_dict()["tier"] == "aggressive"
    assert options[0].to_dict()["confidence"] == "medium"
