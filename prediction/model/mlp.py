"""
prediction/model/mlp.py
=======================
Forward pass of a :class:`~prediction.model.network.Model`.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

import numpy as np

from prediction.common.errors import ModelLoadError
from prediction.model.network import Model

log = logging.getLogger(__name__)


class MLPInferenceEngine:
    """Stateless multi-layer perceptron runner.

    The engine keeps no per-call state, so one instance may serve several
    threads evaluating different obstacles.

    Parameters
    ----------
    model : Model
        Loaded network definition.

    Raises
    ------
    ModelLoadError
        If *model* is ``None``.
    """

    def __init__(self, model: Optional[Model]) -> None:
        if model is None:
            raise ModelLoadError("MLP inference engine requires a loaded model.")
        self._model = model

    @property
    def model(self) -> Model:
        return self._model

    def forward(self, values: Sequence[float]) -> List[float]:
        """Run every layer in order and return the last layer's output.

        Returns an empty list when ``len(values)`` differs from the model's
        input dimension; callers treat that as "prediction unavailable".
        """
        if len(values) != self._model.dim_input:
            log.debug(
                "Model feature size not consistent with model definition. "
                "model input dim = %d; feature value size = %d",
                self._model.dim_input, len(values),
            )
            return []

        layer_output = np.asarray(values, dtype=np.float64)
        for layer in self._model.layers:
            raw = layer.bias + layer_output @ layer.weights
            layer_output = layer.activation.apply(raw)
        return [float(v) for v in layer_output]
