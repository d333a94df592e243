#!/usr/bin/env python3
"""
prediction/evaluator/junction_mlp_evaluator.py
==============================================
Junction exit evaluator for vehicles.

:meth:`JunctionMLPEvaluator.evaluate` extracts the 79-value feature vector
of an obstacle approaching a junction, predicts a probability for each of
the 12 sectors around it and propagates those values onto the obstacle's
lane sequences.  Every missing-data condition is logged and leaves the
obstacle unannotated; only a bad model aborts (at construction).
"""

from __future__ import annotations

import logging
from typing import Optional

from prediction.common.errors import ModelLoadError
from prediction.common.geometry import NUM_SECTORS
from prediction.entities.ego import EgoPoseProvider
from prediction.entities.obstacle import Obstacle
from prediction.evaluator.blender import ExitProbabilityBlender, JunctionAnnotation
from prediction.feature_output import FeatureLogger
from prediction.features.assembler import FeatureAssembler
from prediction.features.ego_vehicle import EgoRelativeFeatureExtractor
from prediction.features.junction import JunctionExitFeatureExtractor
from prediction.metrics import EvaluatorMetrics
from prediction.model.loader import load_model, validate_model
from prediction.model.mlp import MLPInferenceEngine
from prediction.model.network import Model
from prediction.settings import EvaluatorSettings, PredictionMode

log = logging.getLogger("prediction.evaluator")

FEATURE_CATEGORY = "junction"


class JunctionMLPEvaluator:
    """Predict junction exit probabilities with a multi-layer perceptron.

    One instance may serve several threads as long as each evaluates a
    different obstacle: the model is read-only and the metrics are locked.

    Parameters
    ----------
    pose_provider : EgoPoseProvider
        Source of the ego pose for the ego-relative features.
    settings : EvaluatorSettings, optional
        Defaults to :meth:`EvaluatorSettings.from_config`.
    feature_logger : FeatureLogger, optional
        Required in :attr:`PredictionMode.FEATURE_LOGGING`.
    model : Model, optional
        Pre-loaded network; when omitted ``settings.model_file`` is loaded.

    Raises
    ------
    ModelLoadError
        If the model cannot be loaded, has inconsistent layer shapes or
        does not output one value per sector.
    ValueError
        If feature-logging mode is selected without a feature logger.
    """

    def __init__(
        self,
        pose_provider: EgoPoseProvider,
        settings: Optional[EvaluatorSettings] = None,
        feature_logger: Optional[FeatureLogger] = None,
        model: Optional[Model] = None,
    ) -> None:
        self.settings = settings or EvaluatorSettings.from_config()
        if model is None:
            model = load_model(self.settings.model_file)
        validate_model(model)
        if model.dim_output != NUM_SECTORS:
            raise ModelLoadError(
                f"Junction model must output {NUM_SECTORS} values, "
                f"got {model.dim_output}."
            )
        if self.settings.mode is PredictionMode.FEATURE_LOGGING and feature_logger is None:
            raise ValueError("Feature-logging mode requires a feature logger.")

        self.engine = MLPInferenceEngine(model)
        self.assembler = FeatureAssembler(
            EgoRelativeFeatureExtractor(pose_provider),
            JunctionExitFeatureExtractor(
                time_resolution=self.settings.trajectory_time_resolution,
                max_samples=self.settings.max_trajectory_samples,
            ),
        )
        self.blender = ExitProbabilityBlender(self.engine)
        self.feature_logger = feature_logger
        self.metrics = EvaluatorMetrics()

    def evaluate(self, obstacle: Obstacle) -> Optional[JunctionAnnotation]:
        """Annotate *obstacle* in place and return the applied annotation.

        Returns ``None`` when nothing was written: missing data, no exits,
        feature-logging mode or a feature-size mismatch.
        """
        annotation = self.compute(obstacle)
        if annotation is not None:
            obstacle.apply_junction_annotation(annotation)
        return annotation

    def compute(self, obstacle: Obstacle) -> Optional[JunctionAnnotation]:
        """Same as :meth:`evaluate` without touching the obstacle."""
        feature = obstacle.latest_feature
        if feature is None:
            log.error("Obstacle [%s] has no latest feature.", obstacle.id)
            return self._skip()

        # Assume the obstacle is not close to any junction exit.
        if (
            not feature.has_junction_feature()
            or feature.junction_feature.junction_exit_size() < 1
        ):
            log.debug("Obstacle [%s] has no junction_exit.", obstacle.id)
            return self._skip()

        feature_vector = self.assembler.get_feature_vector(obstacle)
        if feature_vector is None:
            return self._skip()

        if self.settings.mode is PredictionMode.FEATURE_LOGGING:
            self.feature_logger.insert(feature, feature_vector.values, FEATURE_CATEGORY)
            self.metrics.increment("logged")
            log.debug("Save extracted features for learning locally.")
            return None

        num_exits = feature.junction_feature.junction_exit_size()
        annotation = self.blender.blend(obstacle.id, feature, feature_vector)
        if num_exits == 1:
            self.metrics.increment("shortcut")
        else:
            self.metrics.increment("inferred")
        if annotation is None:
            self.metrics.increment("mismatched")
            return self._skip()

        self.metrics.increment("evaluated")
        log.debug(
            "Obstacle [%s] sector probabilities %s, exit probabilities %s",
            obstacle.id,
            ["%.3f" % p for p in annotation.sector_probabilities],
            annotation.exit_probabilities,
        )
        return annotation

    def _skip(self) -> None:
        self.metrics.increment("skipped")
        return None
