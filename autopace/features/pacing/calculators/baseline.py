"""
Baseline Estimator

Flat-terrain pace of the reference run: the median pace of flat windows.
The median ignores a handful of stopped or paused windows that would drag
a mean far off.
"""

import logging
import math
from statistics import median
from typing import Sequence

from autopace.features.telemetry.windower import TelemetryWindow

logger = logging.getLogger(__name__)

# Conservative fallback when no flat window is usable (min/mile)
DEFAULT_BASELINE_PACE = 12.0

# Plausible running range for a flat window (min/mile)
MIN_FLAT_PACE = 5.0
MAX_FLAT_PACE = 20.0


class BaselineEstimator:
    """Median flat pace from flat telemetry windows."""

    def __init__(
        self,
        min_pace: float = MIN_FLAT_PACE,
        max_pace: float = MAX_FLAT_PACE,
        default_pace: float = DEFAULT_BASELINE_PACE
    ):
        self.min_pace = min_pace
        self.max_pace = max_pace
        self.default_pace = default_pace

    def estimate(self, flat_windows: Sequence[TelemetryWindow]) -> float:
        """
        Estimate baseline flat pace.

        Args:
            flat_windows: Windows classified as flat

        Returns:
            Median pace in min/mile, or the default when no window is valid
        """
        paces = [
            w.avg_pace for w in flat_windows
            if math.isfinite(w.avg_pace) and self.min_pace <= w.avg_pace <= self.max_pace
        ]

        if not paces:
            logger.info(
                f"No valid flat windows, using default baseline {self.default_pace} min/mile"
            )
            return self.default_pace

        return float(median(paces))
