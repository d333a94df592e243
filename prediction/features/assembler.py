"""
prediction/features/assembler.py
================================
Concatenate obstacle, ego-vehicle and junction features into the
fixed-length vector consumed by the junction MLP.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from prediction.entities.obstacle import Obstacle
from prediction.features.ego_vehicle import (
    EGO_VEHICLE_FEATURE_SIZE,
    EgoRelativeFeatureExtractor,
)
from prediction.features.junction import (
    JUNCTION_FEATURE_SIZE,
    JunctionExitFeatureExtractor,
    JunctionExitFeatures,
)
from prediction.features.obstacle import OBSTACLE_FEATURE_SIZE, obstacle_feature_values

log = logging.getLogger(__name__)

TOTAL_FEATURE_SIZE = (
    OBSTACLE_FEATURE_SIZE + EGO_VEHICLE_FEATURE_SIZE + JUNCTION_FEATURE_SIZE
)


@dataclass(frozen=True)
class FeatureVector:
    """Assembled features of one evaluation.

    ``values`` is the flat network input; ``junction`` keeps the structured
    sector records so that callers need no offset arithmetic.
    """

    values: List[float]
    junction: JunctionExitFeatures

    def __len__(self) -> int:
        return len(self.values)


class FeatureAssembler:
    """Run the three extractors and validate their sizes.

    Parameters
    ----------
    ego_extractor : EgoRelativeFeatureExtractor
    junction_extractor : JunctionExitFeatureExtractor
    """

    def __init__(
        self,
        ego_extractor: EgoRelativeFeatureExtractor,
        junction_extractor: JunctionExitFeatureExtractor,
    ) -> None:
        self.ego_extractor = ego_extractor
        self.junction_extractor = junction_extractor

    def get_feature_vector(self, obstacle: Obstacle) -> Optional[FeatureVector]:
        """Return the 79-value feature vector, or ``None`` if any part is missing.

        Layout (79 floats total):
            [0..2]   obstacle — speed, acceleration, junction range
            [3..6]   ego      — relative x, y, longitudinal / lateral velocity
            [7..78]  junction — 12 sectors × (present, dx, dy, dist,
                                heading diff, cost)
        """
        obstacle_values = obstacle_feature_values(obstacle)
        if len(obstacle_values) != OBSTACLE_FEATURE_SIZE:
            log.error(
                "Obstacle [%s] has fewer than expected obstacle feature_values %d.",
                obstacle.id, len(obstacle_values),
            )
            return None

        ego_values = self.ego_extractor.extract(obstacle)
        if len(ego_values) != EGO_VEHICLE_FEATURE_SIZE:
            log.error(
                "Obstacle [%s] has fewer than expected ego vehicle feature_values %d.",
                obstacle.id, len(ego_values),
            )
            return None

        junction = self.junction_extractor.extract(obstacle)
        if junction is None:
            log.error("Obstacle [%s] has no junction feature_values.", obstacle.id)
            return None

        values: List[float] = []
        values.extend(obstacle_values)
        values.extend(ego_values)
        values.extend(junction.as_values())
        return FeatureVector(values=values, junction=junction)
