"""
prediction/model — Junction MLP
===============================

Modules
-------
network
    :class:`Model`, :class:`Layer` and the :class:`Activation` enum.
mlp
    :class:`MLPInferenceEngine` numpy forward pass.
loader
    joblib model files: :func:`load_model`, :func:`save_model`.
export
    Conversion from scikit-learn and seeded random models.
"""

from .network import Activation, Layer, Model
from .mlp import MLPInferenceEngine
from .loader import (
    clear_model_cache,
    load_model,
    model_from_dict,
    model_to_dict,
    save_model,
    validate_model,
)

__all__ = [
    "Activation",
    "Layer",
    "Model",
    "MLPInferenceEngine",
    "clear_model_cache",
    "load_model",
    "model_from_dict",
    "model_to_dict",
    "save_model",
    "validate_model",
]
