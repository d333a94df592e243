"""
prediction/container.py
=======================
In-memory obstacle store fed by the tracker.

Each obstacle keeps a bounded observation history, newest first, so that
``obstacle.latest_feature`` is always the current snapshot.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

import config
from prediction.entities.obstacle import Feature, Obstacle

log = logging.getLogger(__name__)


class ObstaclesContainer:
    """
    Obstacle lookup by id.

    Attributes:
        max_history_size (int): Observations kept per obstacle.
    """

    def __init__(self, max_history_size: int = config.MAX_HISTORY_SIZE):
        self._obstacles: Dict[int, Obstacle] = {}
        self.max_history_size = max_history_size

    def insert_feature(self, obstacle_id: int, feature: Feature) -> Obstacle:
        """Record a new observation as the obstacle's latest feature."""
        obstacle = self._obstacles.get(obstacle_id)
        if obstacle is None:
            obstacle = Obstacle(id=obstacle_id)
            self._obstacles[obstacle_id] = obstacle
            log.debug("New obstacle [%s].", obstacle_id)
        feature.id = obstacle_id
        obstacle.history.insert(0, feature)
        del obstacle.history[self.max_history_size:]
        return obstacle

    def get_obstacle(self, obstacle_id: int) -> Optional[Obstacle]:
        return self._obstacles.get(obstacle_id)

    def remove_obstacle(self, obstacle_id: int) -> None:
        self._obstacles.pop(obstacle_id, None)

    def obstacle_ids(self) -> List[int]:
        return list(self._obstacles)

    def __len__(self) -> int:
        return len(self._obstacles)
