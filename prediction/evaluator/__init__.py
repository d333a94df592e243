"""
prediction/evaluator — Junction MLP evaluation
==============================================

Modules
-------
junction_mlp_evaluator
    :class:`JunctionMLPEvaluator` — per-obstacle entry point.
blender
    :class:`ExitProbabilityBlender` and :class:`JunctionAnnotation`.
"""

from .blender import (
    ExitProbabilityBlender,
    JunctionAnnotation,
    assign_lane_sequence_probabilities,
    exit_sector,
    smooth_sector_probability,
)
from .junction_mlp_evaluator import FEATURE_CATEGORY, JunctionMLPEvaluator

__all__ = [
    "ExitProbabilityBlender",
    "JunctionAnnotation",
    "assign_lane_sequence_probabilities",
    "exit_sector",
    "smooth_sector_probability",
    "FEATURE_CATEGORY",
    "JunctionMLPEvaluator",
]
