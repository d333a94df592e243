"""
prediction/model/loader.py
==========================
Read and write junction MLP model files.

A model file is a joblib pickle of a plain dictionary::

    {
        "dim_input": 79,
        "layers": [
            {"weights": [[...], ...], "bias": [...], "activation": "RELU"},
            ...
        ],
    }

:func:`load_model` validates the layer shapes with :func:`validate_model`
and caches the parsed :class:`Model` per path for the lifetime of the
process.
"""

import logging
import os
from typing import Any, Dict

import joblib
import numpy as np

from prediction.common.errors import ModelLoadError
from prediction.model.network import Activation, Layer, Model

log = logging.getLogger(__name__)

# ── model cache (loaded once per process) ─────────────────────────────────────
_MODEL_CACHE: Dict[str, Model] = {}


def validate_model(model: Model) -> Model:
    """Check that the layers of *model* chain from ``dim_input`` to the output.

    Returns *model* unchanged so the call can wrap a constructor.

    Raises
    ------
    ModelLoadError
        On a non-positive input dimension, no layers, an unknown activation
        or inconsistent weight / bias shapes.
    """
    if not isinstance(model, Model):
        raise ModelLoadError(f"Expected a Model, got {type(model).__name__}.")
    if model.dim_input <= 0:
        raise ModelLoadError(
            f"Model input dimension must be positive, got {model.dim_input}."
        )
    if not model.layers:
        raise ModelLoadError("Model declares no layers.")

    expected_inputs = model.dim_input
    for i, layer in enumerate(model.layers):
        if not isinstance(layer.activation, Activation):
            raise ModelLoadError(f"Layer {i} has unknown activation {layer.activation!r}.")
        weights = np.asarray(layer.weights)
        bias = np.asarray(layer.bias)
        if weights.ndim != 2 or weights.shape[0] != expected_inputs:
            raise ModelLoadError(
                f"Layer {i} weights have shape {weights.shape}; "
                f"expected {expected_inputs} rows."
            )
        if bias.shape != (weights.shape[1],):
            raise ModelLoadError(
                f"Layer {i} bias has shape {bias.shape}; "
                f"expected ({weights.shape[1]},)."
            )
        expected_inputs = weights.shape[1]
    return model


def model_from_dict(data: Dict[str, Any]) -> Model:
    """Build a :class:`Model` from its dictionary form.

    Raises
    ------
    ModelLoadError
        On missing keys, unknown activations or inconsistent shapes.
    """
    try:
        dim_input = int(data["dim_input"])
        raw_layers = list(data["layers"])
    except (KeyError, TypeError, ValueError) as exc:
        raise ModelLoadError(f"Malformed model definition: {exc}") from exc

    layers = []
    for i, raw in enumerate(raw_layers):
        try:
            weights = np.asarray(raw["weights"], dtype=np.float64)
            bias = np.asarray(raw["bias"], dtype=np.float64)
            activation = Activation(str(raw["activation"]).upper())
        except (KeyError, TypeError, ValueError) as exc:
            raise ModelLoadError(f"Malformed layer {i}: {exc}") from exc
        weights.setflags(write=False)
        bias.setflags(write=False)
        layers.append(Layer(weights=weights, bias=bias, activation=activation))

    return validate_model(Model(dim_input=dim_input, layers=tuple(layers)))


def model_to_dict(model: Model) -> Dict[str, Any]:
    """Inverse of :func:`model_from_dict`."""
    return {
        "dim_input": model.dim_input,
        "layers": [
            {
                "weights": layer.weights.tolist(),
                "bias": layer.bias.tolist(),
                "activation": layer.activation.value,
            }
            for layer in model.layers
        ],
    }


def load_model(model_file: str, use_cache: bool = True) -> Model:
    """Load (and cache) the model stored in *model_file*.

    Raises
    ------
    ModelLoadError
        If the file is missing, cannot be unpickled or is malformed.
    """
    key = os.path.abspath(model_file)
    if use_cache and key in _MODEL_CACHE:
        return _MODEL_CACHE[key]

    try:
        data = joblib.load(model_file)
    except FileNotFoundError as exc:
        raise ModelLoadError(f"Unable to load model file: {model_file}.") from exc
    except Exception as exc:
        raise ModelLoadError(f"Unreadable model file {model_file}: {exc}") from exc

    if isinstance(data, Model):
        model = validate_model(data)
    elif isinstance(data, dict):
        model = model_from_dict(data)
    else:
        raise ModelLoadError(
            f"Model file {model_file} holds {type(data).__name__}, expected dict."
        )

    log.info("Succeeded in loading the model file: %s.", model_file)
    if use_cache:
        _MODEL_CACHE[key] = model
    return model


def save_model(model: Model, model_file: str) -> None:
    """Serialise *model* to *model_file* in dictionary form."""
    directory = os.path.dirname(model_file)
    if directory:
        os.makedirs(directory, exist_ok=True)
    joblib.dump(model_to_dict(model), model_file)
    _MODEL_CACHE.pop(os.path.abspath(model_file), None)
    log.info("Model saved to '%s'.", model_file)


def clear_model_cache() -> None:
    _MODEL_CACHE.clear()
