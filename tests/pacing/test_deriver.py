"""
Tests for SegmentPaceDeriver.

Reference model: baseline 10:00/mile, gain 40s, loss 10s, fatigue 2%/10mi.
"""

import math
from dataclasses import replace

import pytest

from autopace.features.pacing.builder import PacingModelBuilder
from autopace.features.pacing.deriver import SegmentPaceDeriver
from autopace.features.pacing.models import PacingModel
from autopace.features.pacing.schemas import RaceSegment
from autopace.features.telemetry.models import TelemetryTrace
from autopace.shared.calculator_types import ClimbType, Confidence
from autopace.shared.elevation import ElevationStats
from autopace.shared.units import METERS_PER_MILE

from conftest import build_records

FEET_600_IN_METERS = 182.88


class FixedSource:
    """Elevation source returning the same stats for any range."""

    def __init__(self, gain=0.0, loss=0.0):
        self.stats = ElevationStats(
            gain=gain, loss=loss, max_elevation=0.0, min_elevation=0.0, net_elevation=gain - loss
        )

    def segment_elevation(self, start_mile, end_mile):
        return self.stats


class EmptySource:
    def segment_elevation(self, start_mile, end_mile):
        return None


@pytest.fixture
def deriver():
    return SegmentPaceDeriver(historical_weight=0.7, similar_gradient_weight=0.6)


@pytest.fixture
def model():
    return PacingModel(
        baseline_flat_pace=10.0,
        elevation_gain_factor=40.0,
        elevation_loss_factor=10.0,
        fatigue_factor=2.0,
        heart_rate_threshold=165,
    )


def segment(distance, cumulative, terrain_factor=None):
    return RaceSegment(
        id=1,
        segment_distance_miles=distance,
        cumulative_distance_miles=cumulative,
        terrain_factor=terrain_factor,
    )


# =============================================================================
# Test Adjustments
# =============================================================================

class TestElevation:
    """Gain/loss adjustment."""

    def test_climb(self, deriver, model):
        """600ft over 2 miles at 40s per 100ft -> +120s per mile."""
        result = deriver.derive(segment(2.0, 2.0), model, FixedSource(gain=FEET_600_IN_METERS))

        assert result.pace_min_per_mile == pytest.approx(12.0, rel=1e-4)
        assert result.factors.elevation_adjustment == pytest.approx(2.0, rel=1e-4)
        assert result.reasoning == "+120s for 600ft climb"

    def test_climb_details(self, deriver, model):
        result = deriver.derive(segment(2.0, 2.0), model, FixedSource(gain=FEET_600_IN_METERS))
        details = result.elevation_details

        assert details.gain_feet == 600
        assert details.loss_feet == 0
        assert details.distance_miles == 2.0
        assert details.avg_gradient_percent == 5.7
        assert details.climb_type == ClimbType.MODERATE
        assert details.pace_adjustment_seconds == 120

    def test_descent_costs_loss_factor(self, deriver, model):
        """492ft of descent over 2 miles at 10s per 100ft -> +25s."""
        result = deriver.derive(segment(2.0, 2.0), model, FixedSource(loss=150.0))

        assert result.pace_min_per_mile == pytest.approx(10.41, rel=1e-3)
        assert result.reasoning == "+25s for elevation"
        assert result.elevation_details.avg_gradient_percent == 0.0
        assert result.elevation_details.climb_type == ClimbType.FLAT_ROLLING
        assert result.elevation_details.gain_feet == 0

    def test_rolling_segment(self, deriver, model):
        """600ft up and 600ft down: classified by its climbing."""
        source = FixedSource(gain=FEET_600_IN_METERS, loss=FEET_600_IN_METERS)

        result = deriver.derive(segment(2.0, 2.0), model, source)
        details = result.elevation_details

        assert result.pace_min_per_mile == pytest.approx(12.5, rel=1e-4)
        assert details.avg_gradient_percent == 5.7
        assert details.climb_type == ClimbType.MODERATE
        assert (details.gain_feet, details.loss_feet) == (600, 600)

    def test_flat_segment_exact(self, deriver, model):
        result = deriver.derive(segment(2.0, 22.0), model, FixedSource())

        assert result.pace_min_per_mile == pytest.approx(10.4)
        assert result.pace_min_per_mile == (
            result.factors.base_pace + result.factors.fatigue_adjustment
        )
        assert result.factors.elevation_adjustment == 0.0
        assert result.elevation_details is None


class TestFatigue:
    """Slowdown with miles already run."""

    def test_fatigue_at_start(self, deriver, model):
        result = deriver.derive(segment(2.0, 2.0), model)

        assert result.factors.fatigue_adjustment == 0.0
        assert result.reasoning == "Standard terrain"

    def test_fatigue_later(self, deriver, model):
        result = deriver.derive(segment(2.0, 22.0), model)

        assert result.factors.fatigue_adjustment == pytest.approx(0.4)
        assert result.reasoning == "+24s fatigue at 20mi"

    def test_small_fatigue(self, deriver, model):
        """0.1 min/mile: reported without the mile marker."""
        result = deriver.derive(segment(1.0, 6.0), model)

        assert result.factors.fatigue_adjustment == pytest.approx(0.1)
        assert result.reasoning == "+6s fatigue"


class TestTerrainFactor:
    """Manual difficulty multiplier."""

    def test_slower(self, deriver, model):
        result = deriver.derive(segment(2.0, 2.0, terrain_factor=1.1), model)

        assert result.pace_min_per_mile == pytest.approx(11.0)
        assert result.reasoning == "+60s terrain (10% slower)"
        assert result.factors.total_adjustment == pytest.approx(1.0)

    def test_faster(self, deriver, model):
        result = deriver.derive(segment(2.0, 2.0, terrain_factor=0.9), model)

        assert result.pace_min_per_mile == pytest.approx(9.0)
        assert result.reasoning == "-60s terrain (10% faster)"

    @pytest.mark.parametrize("factor", [0.0, -1.0, math.nan, math.inf])
    def test_invalid_factor_ignored(self, deriver, model, factor):
        result = deriver.derive(segment(2.0, 2.0, terrain_factor=factor), model)

        assert result.pace_min_per_mile == 10.0


# =============================================================================
# Test Historical Blending
# =============================================================================

class TestHistoricalBlend:
    """Blending with the reference run."""

    def test_same_miles(self, deriver, model):
        trace = TelemetryTrace(records=build_records(10, pace=9.0))

        result = deriver.derive(segment(2.0, 4.0), model, trace=trace)

        # 9.0 * 0.7 + 10.04 * 0.3
        assert result.pace_min_per_mile == pytest.approx(9.312)
        assert result.reasoning.startswith("Based on 9:00 pace at miles 2-4 in your reference run")
        assert result.confidence_score == 75
        assert result.confidence == Confidence.HIGH

    def test_similar_gradient(self, deriver, model):
        """Segment beyond the reference run; its ~4.7% climb matches 5% windows."""
        records = build_records(
            3, pace=12.0, elevation=lambda d: 100.0 + d * METERS_PER_MILE * 0.05
        )

        result = deriver.derive(segment(2.0, 22.0), model, FixedSource(gain=150.0), records)

        computed = 10.0 + 150.0 * 3.28084 / 100 * 40 / 2 / 60 + 0.4
        assert result.pace_min_per_mile == pytest.approx(12.0 * 0.6 + computed * 0.4, rel=1e-4)
        assert result.reasoning.startswith("Based on 12:00 pace on similar terrain")
        assert result.confidence_score == 100

    def test_flat_segment_skips_gradient_search(self, deriver, model):
        records = build_records(3, pace=8.0)

        result = deriver.derive(segment(2.0, 22.0), model, trace=records)

        assert result.pace_min_per_mile == pytest.approx(10.4)
        assert result.confidence_score == 35

    def test_custom_weight(self, model):
        deriver = SegmentPaceDeriver(historical_weight=1.0)
        trace = build_records(10, pace=9.0)

        result = deriver.derive(segment(2.0, 4.0), model, trace=trace)

        assert result.pace_min_per_mile == pytest.approx(9.0)


# =============================================================================
# Test Confidence
# =============================================================================

class TestConfidence:
    """Confidence depends on what data was available."""

    def test_source_without_coverage(self, deriver, model):
        result = deriver.derive(segment(2.0, 2.0), model, EmptySource())

        assert result.confidence_score == 60
        assert result.confidence == Confidence.MEDIUM

    def test_no_source(self, deriver, model):
        result = deriver.derive(segment(2.0, 2.0), model)

        assert result.confidence_score == 35
        assert result.confidence == Confidence.LOW


# =============================================================================
# Test Robustness
# =============================================================================

class TestRobustness:
    """Any input yields a finite, positive pace."""

    @pytest.mark.parametrize("baseline", [math.nan, math.inf, 0.0, -5.0])
    def test_invalid_baseline(self, deriver, baseline):
        model = PacingModel(
            baseline_flat_pace=baseline,
            elevation_gain_factor=40.0,
            elevation_loss_factor=10.0,
            fatigue_factor=2.0,
            heart_rate_threshold=165,
        )

        result = deriver.derive(segment(2.0, 2.0), model)

        assert result.pace_min_per_mile == 12.0

    def test_hostile_model(self, deriver):
        model = PacingModel(
            baseline_flat_pace=10.0,
            elevation_gain_factor=math.inf,
            elevation_loss_factor=math.nan,
            fatigue_factor=-5000.0,
            heart_rate_threshold=165,
        )

        result = deriver.derive(
            segment(2.0, 40.0, terrain_factor=math.nan), model, FixedSource(gain=100.0, loss=50.0)
        )

        assert math.isfinite(result.pace_min_per_mile)
        assert result.pace_min_per_mile > 0
        assert result.factors.elevation_adjustment == 0.0
        assert result.factors.fatigue_adjustment == 0.0

    def test_zero_distance_segment(self, deriver, model):
        result = deriver.derive(segment(0.0, 5.0), model, FixedSource(gain=100.0))

        assert result.pace_min_per_mile > 0
        assert result.factors.elevation_adjustment == 0.0

    def test_negative_elevation_step_skipped(self, deriver):
        """A step that would make the pace non-positive is dropped; later steps still apply."""
        model = PacingModel(
            baseline_flat_pace=10.0,
            elevation_gain_factor=-1000.0,
            elevation_loss_factor=10.0,
            fatigue_factor=2.0,
            heart_rate_threshold=165,
        )
        trace = build_records(10, pace=9.0)

        result = deriver.derive(
            segment(2.0, 4.0), model, FixedSource(gain=FEET_600_IN_METERS), trace
        )

        assert result.factors.elevation_adjustment == 0.0
        assert result.elevation_details.pace_adjustment_seconds == 0
        # 9.0 * 0.7 + 10.04 * 0.3
        assert result.pace_min_per_mile == pytest.approx(9.312)
        assert result.reasoning.startswith("Based on 9:00 pace at miles 2-4")

    @pytest.mark.parametrize("records", [
        [],
        build_records(1)[:1],
        [replace(r, distance=0.0) for r in build_records(2)[:60]],
    ], ids=["empty", "single", "zero-distance"])
    def test_degenerate_reference_trace(self, deriver, records):
        model = PacingModelBuilder().analyze(records)

        for seg in (segment(2.0, 2.0), segment(2.0, 12.0)):
            result = deriver.derive(seg, model, FixedSource(gain=50.0), records)

            assert math.isfinite(result.pace_min_per_mile)
            assert result.pace_min_per_mile > 0

    def test_zero_distance_trace_uses_default_baseline(self, deriver):
        records = [replace(r, distance=0.0) for r in build_records(2)[:60]]
        model = PacingModelBuilder().analyze(records)

        result = deriver.derive(segment(2.0, 6.0), model, trace=records)

        assert result.factors.base_pace == 12.0
        assert result.pace_min_per_mile == pytest.approx(12.096)


def test_zone_suggestions(deriver, flat_trace):
    from autopace.features.pacing.builder import PacingModelBuilder
    from autopace.features.pacing.schemas import AthleteSettings

    model = PacingModelBuilder().analyze(flat_trace, AthleteSettings(max_hr=180, resting_hr=60))

    result = deriver.derive(segment(2.0, 42.0), model, FixedSource(gain=FEET_600_IN_METERS))

    assert result.suggested_hr_zone.zone_name == "Zone 4"
    assert result.suggested_hr_zone.min_bpm == 158
    assert result.suggested_power_zone is None
    assert result.to_dict()["suggested_hr_zone"]["max_bpm"] == 170


def test_descending_segment_uses_downhill_zone(deriver, flat_trace):
    from autopace.features.pacing.schemas import AthleteSettings

    model = PacingModelBuilder().analyze(flat_trace, AthleteSettings(max_hr=180, resting_hr=60))

    result = deriver.derive(segment(2.0, 2.0), model, FixedSource(loss=300.0))

    assert result.suggested_hr_zone.zone_name == "Zone 1"
    assert result.elevation_details.climb_type == ClimbType.FLAT_ROLLING
