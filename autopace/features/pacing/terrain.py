"""
Segment terrain data.

Elevation for a race segment comes from an external ElevationSource
(a route profile, an elevation service, ...). A missing source, an
uncovered mile range or a failing source all produce a zero-elevation
segment instead of an error.
"""

import logging
from bisect import bisect_left, bisect_right
from typing import List, Optional, Protocol, Sequence, Tuple

from autopace.features.pacing.models import SegmentTerrainData
from autopace.features.pacing.schemas import RaceSegment
from autopace.shared.elevation import ElevationStats, calculate_elevation_changes
from autopace.shared.geo import cumulative_distances, gradient_percent
from autopace.shared.units import is_valid_number, meters_to_feet, round_half_up

logger = logging.getLogger(__name__)


class ElevationSource(Protocol):
    """Anything that can summarize elevation over a mile range."""

    def segment_elevation(
        self,
        start_mile: float,
        end_mile: float
    ) -> Optional[ElevationStats]:
        ...


class RouteProfile:
    """
    Elevation profile of the planned route.

    Points are (cumulative distance in miles, elevation in meters),
    ordered by distance.
    """

    def __init__(self, points: Sequence[Tuple[float, float]]):
        self.points: List[Tuple[float, float]] = list(points)
        self._distances = [d for d, _ in self.points]

    @classmethod
    def from_coordinates(cls, coordinates: Sequence[Tuple[float, float, float]]) -> "RouteProfile":
        """
        Build a profile from track coordinates.

        Args:
            coordinates: List of (lat, lon, elevation_m) tuples
        """
        distances = cumulative_distances(list(coordinates))
        return cls([(d, ele) for d, (_, _, ele) in zip(distances, coordinates)])

    @property
    def total_distance_miles(self) -> float:
        return self._distances[-1] if self._distances else 0.0

    def segment_elevation(
        self,
        start_mile: float,
        end_mile: float
    ) -> Optional[ElevationStats]:
        """
        Elevation statistics of points within [start_mile, end_mile].

        Returns:
            ElevationStats rounded to whole meters, or None when fewer than
            2 points fall inside the range
        """
        lo = bisect_left(self._distances, start_mile)
        hi = bisect_right(self._distances, end_mile)
        elevations = [ele for _, ele in self.points[lo:hi]]

        if len(elevations) < 2:
            return None

        gain, loss = calculate_elevation_changes(elevations)
        return ElevationStats(
            gain=round_half_up(gain),
            loss=round_half_up(loss),
            max_elevation=round_half_up(max(elevations)),
            min_elevation=round_half_up(min(elevations)),
            net_elevation=round_half_up(gain - loss),
        )


def build_terrain_data(
    segment: RaceSegment,
    elevation_source: Optional[ElevationSource] = None
) -> SegmentTerrainData:
    """
    Compute terrain data for a segment.

    average_gradient_percent is climbing only (gain over distance), so a
    rolling segment keeps the steepness of its climbs. zone_gradient_percent
    follows it, except on segments that lose more than they gain, where it is
    the signed net gradient used to pick the downhill zone bands.
    """
    distance = segment.segment_distance_miles
    cumulative = segment.cumulative_distance_miles

    stats = _query_source(elevation_source, cumulative - distance, cumulative)
    if stats is None:
        return SegmentTerrainData(
            distance_miles=distance,
            cumulative_distance_miles=cumulative,
        )

    climb_gradient = _finite_or_zero(gradient_percent(distance, stats.gain))
    zone_gradient = climb_gradient
    if stats.loss > stats.gain:
        zone_gradient = _finite_or_zero(gradient_percent(distance, stats.gain - stats.loss))

    return SegmentTerrainData(
        distance_miles=distance,
        cumulative_distance_miles=cumulative,
        elevation_gain_feet=_finite_or_zero(meters_to_feet(stats.gain)),
        elevation_loss_feet=_finite_or_zero(meters_to_feet(stats.loss)),
        average_gradient_percent=climb_gradient,
        zone_gradient_percent=zone_gradient,
    )


def _finite_or_zero(value: float) -> float:
    return value if is_valid_number(value) else 0.0


def _query_source(
    source: Optional[ElevationSource],
    start_mile: float,
    end_mile: float
) -> Optional[ElevationStats]:
    if source is None:
        return None
    try:
        return source.segment_elevation(start_mile, end_mile)
    except Exception as e:
        logger.warning(
            f"Elevation lookup failed for miles {start_mile:.2f}-{end_mile:.2f}: {e}"
        )
        return None
