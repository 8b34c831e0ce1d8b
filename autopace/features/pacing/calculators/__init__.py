"""
Pacing calculators.

Components:
- BaselineEstimator: median flat pace
- GradientFactorEstimator: climb / steep-descent cost per 100ft
- FatigueEstimator: % slowdown per 10 miles
- ZoneCalculator: HR (Karvonen) and power (%FTP) zones
- ConfidenceScorer: additive confidence rubric
"""

from .baseline import BaselineEstimator, DEFAULT_BASELINE_PACE
from .gradient_factors import (
    GradientFactorEstimator,
    GradientFactors,
    DEFAULT_GAIN_FACTOR,
    DEFAULT_LOSS_FACTOR,
)
from .fatigue import (
    FatigueEstimator,
    FatigueEstimatorConfig,
    DEFAULT_FATIGUE_FACTOR,
)
from .zones import (
    ZoneCalculator,
    HRZone,
    HRZones,
    PowerZone,
    PowerZones,
    HRZoneSuggestion,
    PowerZoneSuggestion,
    DEFAULT_HR_THRESHOLD,
)
from .confidence import ConfidenceScorer, ConfidenceScore

__all__ = [
    # Baseline
    "BaselineEstimator",
    "DEFAULT_BASELINE_PACE",
    # Gradient factors
    "GradientFactorEstimator",
    "GradientFactors",
    "DEFAULT_GAIN_FACTOR",
    "DEFAULT_LOSS_FACTOR",
    # Fatigue
    "FatigueEstimator",
    "FatigueEstimatorConfig",
    "DEFAULT_FATIGUE_FACTOR",
    # Zones
    "ZoneCalculator",
    "HRZone",
    "HRZones",
    "PowerZone",
    "PowerZones",
    "HRZoneSuggestion",
    "PowerZoneSuggestion",
    "DEFAULT_HR_THRESHOLD",
    # Confidence
    "ConfidenceScorer",
    "ConfidenceScore",
]
