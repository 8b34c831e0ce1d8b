"""
Gradient Factor Estimator

Derives how many seconds per mile each 100ft of climbing (and of steep
descending) costs the athlete, by comparing uphill/downhill window paces
with the flat baseline.

Factors are in seconds per 100ft per mile:
    factor = (window_pace - baseline) / (feet_per_mile / 100) * 60
"""

import logging
from dataclasses import dataclass
from typing import Sequence

from autopace.features.telemetry.windower import TelemetryWindow

logger = logging.getLogger(__name__)

# Gain factor (seconds per 100ft gain per mile)
DEFAULT_GAIN_FACTOR = 40.0
MIN_GAIN_FACTOR = 20.0
MAX_GAIN_FACTOR = 80.0
MIN_UPHILL_WINDOWS = 3

# Loss factor (seconds per 100ft loss per mile)
DEFAULT_LOSS_FACTOR = 10.0
NO_SLOWDOWN_LOSS_FACTOR = 5.0   # descents seen, none slower than flat
MIN_LOSS_FACTOR = 0.0
MAX_LOSS_FACTOR = 30.0
MIN_DOWNHILL_WINDOWS = 2

# Shallow descents are faster than flat; only steeper ones brake the runner
STEEP_DESCENT_GRADIENT = -10.0


@dataclass(frozen=True)
class GradientFactors:
    """Estimated climb and descent costs."""
    gain_factor: float
    loss_factor: float


class GradientFactorEstimator:
    """
    Estimates elevation gain/loss factors from classified windows.

    Example:
        >>> estimator = GradientFactorEstimator()
        >>> estimator.estimate(10.0, [], [])
        GradientFactors(gain_factor=40.0, loss_factor=10.0)
    """

    def estimate(
        self,
        baseline_pace: float,
        uphill_windows: Sequence[TelemetryWindow],
        downhill_windows: Sequence[TelemetryWindow]
    ) -> GradientFactors:
        return GradientFactors(
            gain_factor=self.estimate_gain_factor(baseline_pace, uphill_windows),
            loss_factor=self.estimate_loss_factor(baseline_pace, downhill_windows),
        )

    def estimate_gain_factor(
        self,
        baseline_pace: float,
        uphill_windows: Sequence[TelemetryWindow]
    ) -> float:
        """
        Average slowdown per 100ft of gain, clamped to [20, 80].

        Fewer than 3 uphill windows -> default 40.
        """
        if len(uphill_windows) < MIN_UPHILL_WINDOWS:
            return DEFAULT_GAIN_FACTOR

        factors = []
        for window in uphill_windows:
            gain_per_100ft = window.gain_feet_per_mile / 100
            if gain_per_100ft > 0:
                slowdown = window.avg_pace - baseline_pace
                factors.append(slowdown / gain_per_100ft * 60)

        if not factors:
            return DEFAULT_GAIN_FACTOR

        avg_factor = sum(factors) / len(factors)
        clamped = _clamp(avg_factor, MIN_GAIN_FACTOR, MAX_GAIN_FACTOR, DEFAULT_GAIN_FACTOR)

        logger.debug(
            f"Gain factor from {len(factors)} windows: raw={avg_factor:.1f}, used={clamped:.1f}"
        )
        return clamped

    def estimate_loss_factor(
        self,
        baseline_pace: float,
        downhill_windows: Sequence[TelemetryWindow]
    ) -> float:
        """
        Average slowdown per 100ft of loss on steep descents, clamped to [0, 30].

        Fewer than 2 downhill windows -> default 10; windows present but no
        steep descent slower than baseline -> 5.
        """
        if len(downhill_windows) < MIN_DOWNHILL_WINDOWS:
            return DEFAULT_LOSS_FACTOR

        factors = []
        for window in downhill_windows:
            if window.gradient_percent >= STEEP_DESCENT_GRADIENT:
                continue
            slowdown = window.avg_pace - baseline_pace
            loss_per_100ft = abs(window.gain_feet_per_mile) / 100
            if slowdown > 0 and loss_per_100ft > 0:
                factors.append(slowdown / loss_per_100ft * 60)

        if not factors:
            return NO_SLOWDOWN_LOSS_FACTOR

        avg_factor = sum(factors) / len(factors)
        return _clamp(avg_factor, MIN_LOSS_FACTOR, MAX_LOSS_FACTOR, DEFAULT_LOSS_FACTOR)


def _clamp(value: float, low: float, high: float, fallback: float) -> float:
    if value != value:  # NaN
        return fallback
    return max(low, min(high, value))
