"""
Confidence scoring for derived paces.

A fixed additive rubric (0-100) bucketed into high / medium / low:

    +40  pace blended with a historical or similar-gradient match
    +25  route elevation profile available
    +20 / +12 / +5   |gradient| <= 5% / <= 10% / steeper
    +15 / +8 / +10   distance in [0.5, 15] / shorter / longer
"""

from dataclasses import dataclass

from autopace.shared.calculator_types import Confidence

HISTORICAL_MATCH_POINTS = 40
ELEVATION_PROFILE_POINTS = 25

MODERATE_GRADIENT_PERCENT = 5.0
STEEP_GRADIENT_PERCENT = 10.0
GRADIENT_POINTS = (20, 12, 5)       # moderate, steep, very steep

MIN_NORMAL_DISTANCE = 0.5
MAX_NORMAL_DISTANCE = 15.0
DISTANCE_POINTS = (15, 8, 10)       # normal, short, long

HIGH_CONFIDENCE_SCORE = 75
MEDIUM_CONFIDENCE_SCORE = 50
MAX_SCORE = 100


@dataclass(frozen=True)
class ConfidenceScore:
    score: int
    level: Confidence


class ConfidenceScorer:
    """Deterministic confidence rubric."""

    def score(
        self,
        gradient_percent: float,
        distance_miles: float,
        has_elevation_profile: bool,
        has_historical_match: bool
    ) -> ConfidenceScore:
        points = 0

        if has_historical_match:
            points += HISTORICAL_MATCH_POINTS

        if has_elevation_profile:
            points += ELEVATION_PROFILE_POINTS

        abs_gradient = abs(gradient_percent)
        if abs_gradient <= MODERATE_GRADIENT_PERCENT:
            points += GRADIENT_POINTS[0]
        elif abs_gradient <= STEEP_GRADIENT_PERCENT:
            points += GRADIENT_POINTS[1]
        else:
            points += GRADIENT_POINTS[2]

        if MIN_NORMAL_DISTANCE <= distance_miles <= MAX_NORMAL_DISTANCE:
            points += DISTANCE_POINTS[0]
        elif distance_miles < MIN_NORMAL_DISTANCE:
            points += DISTANCE_POINTS[1]
        else:
            points += DISTANCE_POINTS[2]

        points = min(MAX_SCORE, points)
        return ConfidenceScore(score=points, level=self.bucket(points))

    @staticmethod
    def bucket(score: int) -> Confidence:
        if score >= HIGH_CONFIDENCE_SCORE:
            return Confidence.HIGH
        if score >= MEDIUM_CONFIDENCE_SCORE:
            return Confidence.MEDIUM
        return Confidence.LOW
