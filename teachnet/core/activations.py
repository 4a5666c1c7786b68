"""Activation functions and their derivatives.

Derivatives receive the *activated* value ``a = f(x)`` rather than the
pre-activation sum, matching how the backward pass reads neuron state.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable

import numpy as np

Scalar = float
ActivationFn = Callable[[Scalar], Scalar]

DEFAULT_ACTIVATION = "sigmoid"


@dataclass(frozen=True)
class Activation:
    """A named activation paired with its derivative."""

    name: str
    fn: ActivationFn
    derivative: ActivationFn

    def __call__(self, x):
        return self.fn(x)


def sigmoid(x):
    """Return the logistic sigmoid."""

    return 1.0 / (1.0 + np.exp(-x))


def sigmoid_deriv(a):
    return a * (1.0 - a)


def relu(x):
    """Return the ReLU activation."""

    return np.maximum(x, 0.0)


def relu_deriv(a):
    # a > 0 exactly when the pre-activation sum was positive
    return np.where(np.asarray(a) > 0.0, 1.0, 0.0)


def tanh(x):
    return np.tanh(x)


def tanh_deriv(a):
    return 1.0 - np.square(a)


_REGISTRY: Dict[str, Activation] = {
    "sigmoid": Activation("sigmoid", sigmoid, sigmoid_deriv),
    "relu": Activation("relu", relu, relu_deriv),
    "tanh": Activation("tanh", tanh, tanh_deriv),
}


def get(name: str) -> Activation:
    """Return the activation registered under ``name``.

    Lookup is case-sensitive; unknown selectors fall back to sigmoid.
    """

    return _REGISTRY.get(name, _REGISTRY[DEFAULT_ACTIVATION])


def names() -> Iterable[str]:
    return sorted(_REGISTRY)


__all__ = [
    "Activation",
    "DEFAULT_ACTIVATION",
    "get",
    "names",
    "relu",
    "relu_deriv",
    "sigmoid",
    "sigmoid_deriv",
    "tanh",
    "tanh_deriv",
]
