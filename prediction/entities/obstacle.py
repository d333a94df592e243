"""
prediction/entities/obstacle.py
===============================
Tracked obstacle and its per-cycle :class:`Feature` snapshot.

The tracker owns these objects.  The evaluator only reads them and writes
its result back through :meth:`Obstacle.apply_junction_annotation`.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional

from prediction.entities.junction import JunctionFeature
from prediction.entities.lane import LaneGraph

if TYPE_CHECKING:
    from prediction.evaluator.blender import JunctionAnnotation


@dataclass
class Point:
    """2-D world-space vector (metres or metres / second)."""

    x: float = 0.0
    y: float = 0.0

    def norm(self) -> float:
        return math.hypot(self.x, self.y)


@dataclass
class Feature:
    """One observation of an obstacle.

    Attributes
    ----------
    id : int
        Id of the obstacle this observation belongs to.
    position : Point or None
        World position; ``None`` when perception did not provide one.
    raw_velocity : Point
        Unfiltered velocity vector.
    heading : float
        Velocity heading (radians) used to rotate the ego velocity.
    speed, acc : float
        Scalar speed (m/s) and acceleration (m/s²).
    junction_feature : JunctionFeature or None
        Exits of the junction the obstacle is approaching.
    lane_graph : LaneGraph
        Candidate lane sequences attached by the lane-graph builder.
    """

    id: int = -1
    position: Optional[Point] = None
    raw_velocity: Point = field(default_factory=Point)
    heading: float = 0.0
    speed: float = 0.0
    acc: float = 0.0
    timestamp: float = 0.0
    junction_feature: Optional[JunctionFeature] = None
    lane_graph: LaneGraph = field(default_factory=LaneGraph)

    def has_position(self) -> bool:
        return self.position is not None

    def has_junction_feature(self) -> bool:
        return self.junction_feature is not None


@dataclass
class Obstacle:
    """A tracked obstacle with its observation history (newest first)."""

    id: int
    history: List[Feature] = field(default_factory=list)

    @property
    def latest_feature(self) -> Optional[Feature]:
        return self.history[0] if self.history else None

    def history_size(self) -> int:
        return len(self.history)

    def apply_junction_annotation(self, annotation: "JunctionAnnotation") -> None:
        """Write an evaluator result into the latest feature.

        Sector probabilities are appended to the junction feature; every
        lane sequence listed in ``annotation.lane_sequence_probabilities``
        (keyed by its index in the lane graph) gets its probability
        overwritten.  Other sequences are left untouched.
        """
        feature = self.latest_feature
        if feature is None:
            return
        if feature.junction_feature is not None:
            feature.junction_feature.junction_mlp_probability.extend(
                annotation.sector_probabilities
            )
        sequences = feature.lane_graph.lane_sequences
        for index, probability in annotation.lane_sequence_probabilities.items():
            sequences[index].probability = probability
