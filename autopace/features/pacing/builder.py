"""
Pacing Model Builder

Runs the estimation pipeline on one reference run:

    windower -> baseline -> gradient factors -> fatigue -> zones

and freezes the result into a PacingModel.
"""

import logging
from typing import Optional, Sequence, Union

from autopace.features.pacing.calculators.baseline import BaselineEstimator
from autopace.features.pacing.calculators.fatigue import FatigueEstimator
from autopace.features.pacing.calculators.gradient_factors import (
    GradientFactorEstimator,
    GradientFactors,
)
from autopace.features.pacing.calculators.zones import ZoneCalculator
from autopace.features.pacing.models import PacingModel
from autopace.features.pacing.schemas import AthleteSettings, GapProfile
from autopace.features.telemetry.models import TelemetryRecord, TelemetryTrace
from autopace.features.telemetry.windower import TelemetryWindower

logger = logging.getLogger(__name__)


class PacingModelBuilder:
    """
    Builds a PacingModel from telemetry.

    Example usage:
        builder = PacingModelBuilder()
        model = builder.analyze(trace, athlete=AthleteSettings(max_hr=185))
    """

    def __init__(
        self,
        windower: Optional[TelemetryWindower] = None,
        baseline_estimator: Optional[BaselineEstimator] = None,
        gradient_estimator: Optional[GradientFactorEstimator] = None,
        fatigue_estimator: Optional[FatigueEstimator] = None,
        zone_calculator: Optional[ZoneCalculator] = None,
    ):
        self.windower = windower or TelemetryWindower()
        self.baseline_estimator = baseline_estimator or BaselineEstimator()
        self.gradient_estimator = gradient_estimator or GradientFactorEstimator()
        self.fatigue_estimator = fatigue_estimator or FatigueEstimator()
        self.zone_calculator = zone_calculator or ZoneCalculator()

    def analyze(
        self,
        trace: Union[TelemetryTrace, Sequence[TelemetryRecord], None],
        athlete: Optional[AthleteSettings] = None,
        gap_profile: Optional[GapProfile] = None
    ) -> PacingModel:
        """
        Extract running characteristics from a recorded run.

        Args:
            trace: Parsed telemetry (or its bare record list)
            athlete: Manual HR / FTP overrides
            gap_profile: Personal climb/descent factors; replaces the
                         factors estimated from the trace

        Returns:
            PacingModel (documented defaults when the trace is empty)
        """
        records = _records_of(trace)

        if not records:
            logger.info("No telemetry records, using default pacing model")
            if gap_profile:
                return PacingModel.default(gap_profile.uphill_factor, gap_profile.downhill_factor)
            return PacingModel.default()

        windows = self.windower.split(records)
        baseline = self.baseline_estimator.estimate(windows.flat)

        if gap_profile:
            factors = GradientFactors(
                gain_factor=gap_profile.uphill_factor,
                loss_factor=gap_profile.downhill_factor,
            )
            logger.info(
                f"Using personal GAP profile factors: uphill={factors.gain_factor}, "
                f"downhill={factors.loss_factor}"
            )
        else:
            factors = self.gradient_estimator.estimate(baseline, windows.uphill, windows.downhill)

        fatigue = self.fatigue_estimator.estimate(records)
        hr_threshold = self.zone_calculator.hr_threshold(records)
        hr_zones = self.zone_calculator.hr_zones(records, athlete)

        has_power = self.zone_calculator.has_power_data(records)
        power_zones = self.zone_calculator.power_zones(records, athlete) if has_power else None

        model = PacingModel(
            baseline_flat_pace=baseline,
            elevation_gain_factor=factors.gain_factor,
            elevation_loss_factor=factors.loss_factor,
            fatigue_factor=fatigue,
            heart_rate_threshold=hr_threshold,
            hr_zones=hr_zones,
            power_zones=power_zones,
            has_power_data=has_power,
        )

        logger.info(
            f"Pacing model from {len(records)} records: baseline={baseline:.2f} min/mile, "
            f"gain={factors.gain_factor:.1f}s, loss={factors.loss_factor:.1f}s, "
            f"fatigue={fatigue:.2f}%/10mi"
        )
        return model


def _records_of(
    trace: Union[TelemetryTrace, Sequence[TelemetryRecord], None]
) -> Sequence[TelemetryRecord]:
    if trace is None:
        return []
    if isinstance(trace, TelemetryTrace):
        return trace.records or []
    return trace
