"""
prediction/features/obstacle.py
===============================
Kinematic summary of the obstacle itself.
"""

import logging
from typing import List

from prediction.entities.obstacle import Obstacle

log = logging.getLogger(__name__)

OBSTACLE_FEATURE_SIZE = 3


def obstacle_feature_values(obstacle: Obstacle) -> List[float]:
    """Return ``[speed, acceleration, junction_range]`` for the latest feature.

    An empty list signals that the obstacle has no position; the caller
    must abort the evaluation.
    """
    feature = obstacle.latest_feature
    if feature is None or not feature.has_position():
        log.debug("Obstacle [%s] has no position.", obstacle.id)
        return []
    junction_range = (
        feature.junction_feature.junction_range
        if feature.junction_feature is not None else 0.0
    )
    return [feature.speed, feature.acc, junction_range]
