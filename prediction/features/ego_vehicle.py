"""
prediction/features/ego_vehicle.py
==================================
Ego-vehicle state expressed relative to an obstacle.
"""

import logging
from typing import List

from prediction.common.errors import ObstacleContractError
from prediction.common.geometry import rotate
from prediction.entities.ego import EgoPoseProvider
from prediction.entities.obstacle import Obstacle

log = logging.getLogger(__name__)

EGO_VEHICLE_FEATURE_SIZE = 4

# "Far away / unknown" values used when localization is unavailable.
EGO_UNAVAILABLE_FEATURES = (100.0, 100.0, 0.0, 0.0)


class EgoRelativeFeatureExtractor:
    """Ego position and velocity as seen from the obstacle.

    Parameters
    ----------
    pose_provider : EgoPoseProvider
        Source of the current ego pose.
    """

    def __init__(self, pose_provider: EgoPoseProvider) -> None:
        self.pose_provider = pose_provider

    def extract(self, obstacle: Obstacle) -> List[float]:
        """Return ``[rel_x, rel_y, vel_lon, vel_lat]``.

        The relative position stays in world axes; the ego velocity is
        rotated into the obstacle's heading-aligned frame.

        Raises
        ------
        ObstacleContractError
            If the obstacle has no observation history.
        """
        pose = self.pose_provider.get_pose()
        if pose is None:
            return list(EGO_UNAVAILABLE_FEATURES)

        if obstacle.history_size() == 0:
            raise ObstacleContractError(
                f"Obstacle [{obstacle.id}] has no history."
            )
        feature = obstacle.latest_feature
        if feature.position is None:
            raise ObstacleContractError(
                f"Obstacle [{obstacle.id}] has no position."
            )

        rel_x = pose.position.x - feature.position.x
        rel_y = pose.position.y - feature.position.y
        vel_lon, vel_lat = rotate(pose.velocity.x, pose.velocity.y, -feature.heading)

        log.debug(
            "ego relative pos = {%.3f, %.3f} ego relative velocity = {%.3f, %.3f}",
            rel_x, rel_y, vel_lon, vel_lat,
        )
        return [rel_x, rel_y, vel_lon, vel_lat]
