"""
prediction/evaluator/blender.py
===============================
Turn per-sector probabilities into per-exit and per-lane-sequence values.

Each exit's probability mixes its own sector with the two neighbouring
sectors (weights 0.25 / 0.5 / 0.25).  Lane sequences passing through an
exit lane take that exit's value; nothing is renormalised.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from prediction.common.geometry import NUM_SECTORS, relative_sector
from prediction.entities.junction import JunctionExit
from prediction.entities.lane import LaneGraph
from prediction.entities.obstacle import Feature
from prediction.features.assembler import FeatureVector
from prediction.model.mlp import MLPInferenceEngine

log = logging.getLogger(__name__)

CENTER_WEIGHT = 0.5
NEIGHBOR_WEIGHT = 0.25


@dataclass(frozen=True)
class JunctionAnnotation:
    """Result of one evaluation, applied with
    :meth:`~prediction.entities.obstacle.Obstacle.apply_junction_annotation`.

    Attributes
    ----------
    sector_probabilities : list[float]
        Values to append to the junction feature (12 entries).
    exit_probabilities : dict[str, float]
        Smoothed probability per exit lane id.
    lane_sequence_probabilities : dict[int, float]
        New probability per lane sequence index; absent indices keep
        their previous probability.
    """

    sector_probabilities: List[float]
    exit_probabilities: Dict[str, float] = field(default_factory=dict)
    lane_sequence_probabilities: Dict[int, float] = field(default_factory=dict)


def smooth_sector_probability(probabilities: Sequence[float], idx: int) -> float:
    """Blend sector *idx* with its circular neighbours."""
    n = len(probabilities)
    prev_idx = (idx - 1) % n
    post_idx = (idx + 1) % n
    return (
        probabilities[idx] * CENTER_WEIGHT
        + probabilities[prev_idx] * NEIGHBOR_WEIGHT
        + probabilities[post_idx] * NEIGHBOR_WEIGHT
    )


def exit_sector(feature: Feature, junction_exit: JunctionExit) -> int:
    """Sector of *junction_exit* relative to the obstacle's velocity direction."""
    heading = math.atan2(feature.raw_velocity.y, feature.raw_velocity.x)
    idx, _, _ = relative_sector(
        junction_exit.exit_position.x - feature.position.x,
        junction_exit.exit_position.y - feature.position.y,
        heading,
    )
    return idx


def assign_lane_sequence_probabilities(
    lane_graph: LaneGraph, exit_probabilities: Dict[str, float],
) -> Dict[int, float]:
    """Map lane sequence indices to the probability of the last matching exit lane."""
    assigned: Dict[int, float] = {}
    for index, lane_sequence in enumerate(lane_graph.lane_sequences):
        for lane_segment in lane_sequence.lane_segments:
            if lane_segment.lane_id in exit_probabilities:
                assigned[index] = exit_probabilities[lane_segment.lane_id]
    return assigned


class ExitProbabilityBlender:
    """Produce a :class:`JunctionAnnotation` from a feature vector.

    Parameters
    ----------
    engine : MLPInferenceEngine
        Network used when the junction has more than one exit.
    """

    def __init__(self, engine: MLPInferenceEngine) -> None:
        self.engine = engine

    def sector_probabilities(
        self, feature_vector: FeatureVector, num_exits: int,
    ) -> List[float]:
        """Network output, or the sector distances when only one exit exists.

        An empty list means the network rejected the feature vector.
        """
        if num_exits == 1:
            return feature_vector.junction.norm_distances()
        return self.engine.forward(feature_vector.values)

    def exit_probabilities(
        self, feature: Feature, probabilities: Sequence[float],
    ) -> Dict[str, float]:
        if len(probabilities) != NUM_SECTORS:
            raise ValueError(
                f"expected {NUM_SECTORS} sector probabilities, got {len(probabilities)}"
            )
        return {
            junction_exit.exit_lane_id: smooth_sector_probability(
                probabilities, exit_sector(feature, junction_exit)
            )
            for junction_exit in feature.junction_feature.junction_exits
        }

    def blend(
        self, obstacle_id: int, feature: Feature, feature_vector: FeatureVector,
    ) -> Optional[JunctionAnnotation]:
        """Return the annotation for *feature*, or ``None`` without a prediction."""
        num_exits = feature.junction_feature.junction_exit_size()
        probabilities = self.sector_probabilities(feature_vector, num_exits)
        if not probabilities:
            return None

        if feature.lane_graph.lane_sequence_size() == 0:
            log.error("Obstacle [%s] has no lane sequences.", obstacle_id)
            return JunctionAnnotation(sector_probabilities=list(probabilities))

        exit_probs = self.exit_probabilities(feature, probabilities)
        return JunctionAnnotation(
            sector_probabilities=list(probabilities),
            exit_probabilities=exit_probs,
            lane_sequence_probabilities=assign_lane_sequence_probabilities(
                feature.lane_graph, exit_probs
            ),
        )
