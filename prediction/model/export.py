"""
prediction/model/export.py
==========================
Produce junction MLP models in the loader's format.

* :func:`from_sklearn_mlp` converts a fitted scikit-learn
  ``MLPClassifier`` (training itself happens elsewhere).
* :func:`random_model` builds a seeded network for demos and tests.

Usage::

    python -m prediction.model.export models/junction_mlp_vehicle_model.pkl
"""

import sys
from typing import Optional, Sequence

import numpy as np

from prediction.features.assembler import TOTAL_FEATURE_SIZE
from prediction.common.geometry import NUM_SECTORS
from prediction.model.loader import save_model
from prediction.model.network import Activation, Layer, Model

# scikit-learn activation names → layer activations
_SKLEARN_ACTIVATIONS = {
    "relu": Activation.RELU,
    "logistic": Activation.SIGMOID,
    "tanh": Activation.TANH,
    "softmax": Activation.SOFTMAX,
}


def _to_activation(name: str) -> Activation:
    try:
        return _SKLEARN_ACTIVATIONS[name]
    except KeyError:
        raise ValueError(f"Activation '{name}' has no junction MLP equivalent.") from None


def from_sklearn_mlp(classifier) -> Model:
    """Convert a fitted ``sklearn.neural_network.MLPClassifier``.

    Hidden layers use ``classifier.activation``; the output layer uses
    ``classifier.out_activation_``.  Identity activations are rejected.
    """
    coefs = classifier.coefs_
    intercepts = classifier.intercepts_
    hidden = _to_activation(classifier.activation)
    output = _to_activation(classifier.out_activation_)

    layers = []
    for i, (weights, bias) in enumerate(zip(coefs, intercepts)):
        activation = output if i == len(coefs) - 1 else hidden
        layers.append(Layer(
            weights=np.array(weights, dtype=np.float64),
            bias=np.array(bias, dtype=np.float64),
            activation=activation,
        ))
    return Model(dim_input=int(coefs[0].shape[0]), layers=tuple(layers))


def random_model(
    layer_sizes: Sequence[int] = (TOTAL_FEATURE_SIZE, 30, NUM_SECTORS),
    hidden_activation: Activation = Activation.RELU,
    output_activation: Activation = Activation.SOFTMAX,
    seed: Optional[int] = 42,
) -> Model:
    """Seeded network with Glorot-scaled normal weights and zero bias."""
    if len(layer_sizes) < 2:
        raise ValueError("layer_sizes needs an input and at least one output size.")
    rng = np.random.default_rng(seed)
    layers = []
    for i in range(len(layer_sizes) - 1):
        n_in, n_out = layer_sizes[i], layer_sizes[i + 1]
        scale = np.sqrt(2.0 / (n_in + n_out))
        activation = output_activation if i == len(layer_sizes) - 2 else hidden_activation
        layers.append(Layer(
            weights=rng.normal(0.0, scale, size=(n_in, n_out)),
            bias=np.zeros(n_out),
            activation=activation,
        ))
    return Model(dim_input=int(layer_sizes[0]), layers=tuple(layers))


if __name__ == "__main__":
    _path = sys.argv[1] if len(sys.argv) > 1 else "models/junction_mlp_vehicle_model.pkl"
    save_model(random_model(), _path)
    print(f"[Export] Random junction model written to '{_path}'.")
