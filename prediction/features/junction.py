"""
prediction/features/junction.py
===============================
Per-direction junction exit descriptors.

The circle around the obstacle is split into 12 sectors of 30°, sector 0
starting straight ahead and increasing counter-clockwise.  Each sector
carries one :class:`SectorFeature`; a sector containing an exit describes
its relative position, heading change and the curvature cost of a smooth
trajectory reaching it.
"""

from __future__ import annotations

import logging
import math
from dataclasses import astuple, dataclass
from typing import List, Optional, Tuple

from prediction.common.geometry import (
    NUM_SECTORS,
    angle_diff,
    compute_cubic_polynomial,
    evaluate_cubic_polynomial,
    relative_sector,
)
from prediction.entities.obstacle import Obstacle

log = logging.getLogger(__name__)

SECTOR_FEATURE_SIZE = 6
JUNCTION_FEATURE_SIZE = NUM_SECTORS * SECTOR_FEATURE_SIZE

# Lower bound on speed so that exit time stays finite for a stopped obstacle.
MIN_SPEED = 0.1


@dataclass(frozen=True)
class SectorFeature:
    """The six values describing one sector.

    Defaults describe an empty sector.
    """

    present: float = 0.0
    norm_dx: float = 1.0
    norm_dy: float = 1.0
    norm_dist: float = 1.0
    heading_diff: float = 0.0
    cost: float = 0.0


@dataclass(frozen=True)
class JunctionExitFeatures:
    """Fixed array of :data:`NUM_SECTORS` sector records."""

    sectors: Tuple[SectorFeature, ...]

    def __post_init__(self) -> None:
        if len(self.sectors) != NUM_SECTORS:
            raise ValueError(
                f"expected {NUM_SECTORS} sectors, got {len(self.sectors)}"
            )

    def as_values(self) -> List[float]:
        """Flatten to 72 floats, sector by sector, fields in declaration order."""
        values: List[float] = []
        for sector in self.sectors:
            values.extend(astuple(sector))
        return values

    def norm_distances(self) -> List[float]:
        return [sector.norm_dist for sector in self.sectors]


def trajectory_cost(
    dx: float,
    dy: float,
    heading_diff: float,
    speed: float,
    time_resolution: float,
    max_samples: int = 2000,
) -> float:
    """Peak ``|x′y″ − y′x″| / |v|`` along a cubic path to the exit.

    The path starts at the origin moving along +x at *speed* and ends at
    *(dx, dy)* moving at *speed* along *heading_diff*, reaching it after
    ``hypot(dx, dy) / speed`` seconds.  The step is *time_resolution*
    unless that would exceed *max_samples* samples.  An exit time that is
    zero or not finite yields a cost of 0.
    """
    exit_time = math.hypot(dx, dy) / speed
    if not math.isfinite(exit_time) or exit_time <= 0.0:
        return 0.0
    x_coefs = compute_cubic_polynomial(
        (0.0, speed), (dx, math.cos(heading_diff) * speed), exit_time
    )
    y_coefs = compute_cubic_polynomial(
        (0.0, 0.0), (dy, math.sin(heading_diff) * speed), exit_time
    )
    step = max(time_resolution, exit_time / max_samples)
    num_steps = int(exit_time // step)

    cost = 0.0
    for i in range(num_steps + 1):
        t = i * step
        x_1 = evaluate_cubic_polynomial(x_coefs, t, 1)
        x_2 = evaluate_cubic_polynomial(x_coefs, t, 2)
        y_1 = evaluate_cubic_polynomial(y_coefs, t, 1)
        y_2 = evaluate_cubic_polynomial(y_coefs, t, 2)
        velocity = math.hypot(x_1, y_1)
        if velocity > 0.0:
            # curvature * v^2
            cost = max(cost, abs(x_1 * y_2 - y_1 * x_2) / velocity)
    return cost


class JunctionExitFeatureExtractor:
    """Build :class:`JunctionExitFeatures` for an obstacle's latest feature.

    Parameters
    ----------
    time_resolution : float
        Trajectory sampling step in seconds.
    max_samples : int
        Cap on trajectory samples per exit.
    """

    def __init__(self, time_resolution: float = 0.1, max_samples: int = 2000) -> None:
        self.time_resolution = time_resolution
        self.max_samples = max_samples

    def extract(self, obstacle: Obstacle) -> Optional[JunctionExitFeatures]:
        """Return the sector array, or ``None`` when data is insufficient."""
        feature = obstacle.latest_feature
        if feature is None or not feature.has_position():
            log.debug("Obstacle [%s] has no position.", obstacle.id)
            return None
        if not feature.has_junction_feature():
            log.error("Obstacle [%s] has no junction_feature.", obstacle.id)
            return None

        junction = feature.junction_feature
        junction_range = junction.junction_range
        if junction_range <= 0.0:
            log.error(
                "Obstacle [%s] junction [%s] has non-positive range %s.",
                obstacle.id, junction.junction_id, junction_range,
            )
            return None

        heading = math.atan2(feature.raw_velocity.y, feature.raw_velocity.x)
        speed = max(MIN_SPEED, feature.speed)
        sectors = [SectorFeature() for _ in range(NUM_SECTORS)]

        for junction_exit in junction.junction_exits:
            idx, diff_x, diff_y = relative_sector(
                junction_exit.exit_position.x - feature.position.x,
                junction_exit.exit_position.y - feature.position.y,
                heading,
            )
            diff_heading = angle_diff(heading, junction_exit.exit_heading)
            cost = trajectory_cost(
                diff_x, diff_y, diff_heading, speed,
                self.time_resolution, self.max_samples,
            )
            # A later exit in the same sector replaces the earlier one.
            sectors[idx] = SectorFeature(
                present=1.0,
                norm_dx=diff_x / junction_range,
                norm_dy=diff_y / junction_range,
                norm_dist=math.hypot(diff_x, diff_y) / junction_range,
                heading_diff=diff_heading,
                cost=cost,
            )

        return JunctionExitFeatures(tuple(sectors))
