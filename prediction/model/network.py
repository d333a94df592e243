"""
prediction/model/network.py
===========================
Immutable definition of a fully connected feed-forward network.

A :class:`Model` is a declared input dimension plus an ordered tuple of
:class:`Layer` objects.  Each layer stores its weights with one row per
input and one column per output neuron.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

import numpy as np


class Activation(Enum):
    """Activation function declared by a layer."""
    RELU = "RELU"
    SIGMOID = "SIGMOID"
    TANH = "TANH"
    SOFTMAX = "SOFTMAX"

    def apply(self, raw: np.ndarray) -> np.ndarray:
        """Apply the activation to a layer's raw neuron outputs.

        RELU, SIGMOID and TANH act per neuron; SOFTMAX replaces the whole
        layer output with its normalised exponentials.
        """
        if self is Activation.RELU:
            return np.maximum(raw, 0.0)
        if self is Activation.SIGMOID:
            with np.errstate(over="ignore"):
                return 1.0 / (1.0 + np.exp(-raw))
        if self is Activation.TANH:
            return np.tanh(raw)
        if self is Activation.SOFTMAX:
            # Shifting by the maximum leaves the result unchanged and keeps exp finite.
            exp_values = np.exp(raw - np.max(raw))
            return exp_values / np.sum(exp_values)
        raise ValueError(f"Unsupported activation: {self!r}")


@dataclass(frozen=True)
class Layer:
    """One dense layer.

    Parameters
    ----------
    weights : numpy.ndarray
        ``[num_inputs, num_outputs]`` float64 matrix.
    bias : numpy.ndarray
        ``[num_outputs]`` float64 vector.
    activation : Activation
    """

    weights: np.ndarray
    bias: np.ndarray
    activation: Activation

    @property
    def num_inputs(self) -> int:
        return int(self.weights.shape[0])

    @property
    def num_outputs(self) -> int:
        return int(self.weights.shape[1])


@dataclass(frozen=True)
class Model:
    """Network definition shared read-only by every evaluation."""

    dim_input: int
    layers: Tuple[Layer, ...]

    @property
    def num_layer(self) -> int:
        return len(self.layers)

    @property
    def dim_output(self) -> int:
        return self.layers[-1].num_outputs if self.layers else self.dim_input
