"""
prediction/features — Feature extraction
========================================

Modules
-------
obstacle
    :func:`obstacle_feature_values` — speed, acceleration, junction range.
ego_vehicle
    :class:`EgoRelativeFeatureExtractor` — ego state in the obstacle frame.
junction
    :class:`JunctionExitFeatureExtractor` — 12 sectors × 6 exit descriptors.
assembler
    :class:`FeatureAssembler` — the 79-value :class:`FeatureVector`.
"""

from .obstacle import OBSTACLE_FEATURE_SIZE, obstacle_feature_values
from .ego_vehicle import (
    EGO_UNAVAILABLE_FEATURES,
    EGO_VEHICLE_FEATURE_SIZE,
    EgoRelativeFeatureExtractor,
)
from .junction import (
    JUNCTION_FEATURE_SIZE,
    JunctionExitFeatureExtractor,
    JunctionExitFeatures,
    SectorFeature,
    trajectory_cost,
)
from .assembler import TOTAL_FEATURE_SIZE, FeatureAssembler, FeatureVector

__all__ = [
    "OBSTACLE_FEATURE_SIZE",
    "obstacle_feature_values",
    "EGO_UNAVAILABLE_FEATURES",
    "EGO_VEHICLE_FEATURE_SIZE",
    "EgoRelativeFeatureExtractor",
    "JUNCTION_FEATURE_SIZE",
    "JunctionExitFeatureExtractor",
    "JunctionExitFeatures",
    "SectorFeature",
    "trajectory_cost",
    "TOTAL_FEATURE_SIZE",
    "FeatureAssembler",
    "FeatureVector",
]
