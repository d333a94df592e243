#!/usr/bin/env python3
"""
prediction/settings.py
======================
Tunable parameters of the junction MLP evaluator.  Every value lives in
the frozen :class:`EvaluatorSettings` dataclass so that experiments can
swap settings without touching code.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import config


class PredictionMode(Enum):
    """What the evaluator does with an extracted feature vector."""
    NORMAL = "normal"
    FEATURE_LOGGING = "feature_logging"


@dataclass(frozen=True)
class EvaluatorSettings:
    """Immutable bag of evaluator parameters."""

    # ── Model ─────────────────────────────────────────────────────────────
    model_file: str = "models/junction_mlp_vehicle_model.pkl"
    """Path of the joblib model file loaded once at construction."""

    # ── Mode ──────────────────────────────────────────────────────────────
    mode: PredictionMode = PredictionMode.NORMAL
    """``FEATURE_LOGGING`` forwards feature vectors instead of predicting."""

    # ── Trajectory cost model ─────────────────────────────────────────────
    trajectory_time_resolution: float = 0.1
    """Sampling step (seconds) along the fitted exit trajectory."""

    max_trajectory_samples: int = 2000
    """Upper bound on samples per exit; the step widens beyond it."""

    @classmethod
    def from_config(cls) -> "EvaluatorSettings":
        """Build settings from :mod:`config` (and its environment overrides)."""
        return cls(
            model_file=config.JUNCTION_MLP_MODEL_FILE,
            mode=PredictionMode(config.PREDICTION_MODE),
            trajectory_time_resolution=config.TRAJECTORY_TIME_RESOLUTION,
            max_trajectory_samples=config.MAX_TRAJECTORY_SAMPLES,
        )
