"""Neuron-level feed-forward network with forward and backward passes."""

from __future__ import annotations

import warnings
from typing import Dict, List, Mapping, Sequence

import numpy as np

from ..training.losses import mean_squared_error
from . import activations
from .errors import TruncatedInputWarning
from .topology import build_topology
from .types import Connection, NetworkConfig, Neuron, NeuronKind


class NeuralNetwork:
    """Fully-connected layered network built from a :class:`NetworkConfig`.

    The instance owns its neuron and connection lists and mutates them in
    place on every :meth:`forward`/:meth:`backward` call.  It is not
    thread-safe; callers serialise forward/backward pairs per instance.
    """

    def __init__(self, config: NetworkConfig, rng: np.random.Generator | None = None) -> None:
        self.config = config
        self._rng = rng if rng is not None else np.random.default_rng(config.seed)
        self.activation = activations.get(config.activation)
        self.neurons: List[Neuron] = []
        self.connections: List[Connection] = []
        self.layers: List[List[Neuron]] = []
        self._build()

    # ------------------------------------------------------------------
    # Construction

    def _build(self) -> None:
        neurons, connections = build_topology(
            self.config.input_size,
            self.config.hidden_layers,
            self.config.output_size,
            rng=self._rng,
        )
        self.neurons = neurons
        self.connections = connections
        self.layers = [[] for _ in self.config.layer_sizes()]
        for neuron in neurons:
            self.layers[neuron.layer].append(neuron)
        self._by_id: Dict[str, Neuron] = {n.id: n for n in neurons}
        self._incoming: Dict[str, List[Connection]] = {n.id: [] for n in neurons}
        self._outgoing: Dict[str, List[Connection]] = {n.id: [] for n in neurons}
        for conn in connections:
            self._incoming[conn.target].append(conn)
            self._outgoing[conn.source].append(conn)

    def reset(self) -> None:
        """Rebuild from the current config into brand-new neuron/connection objects."""

        self._build()

    def reconfigure(self, **changes) -> "NeuralNetwork":
        """Return a freshly built network for ``config`` with ``changes`` applied."""

        return NeuralNetwork(self.config.replace(**changes))

    # ------------------------------------------------------------------
    # Read-only views

    @property
    def num_layers(self) -> int:
        return len(self.layers)

    @property
    def input_neurons(self) -> List[Neuron]:
        return self.layers[0]

    @property
    def output_neurons(self) -> List[Neuron]:
        return self.layers[-1]

    def neuron(self, neuron_id: str) -> Neuron:
        return self._by_id[neuron_id]

    def incoming(self, neuron_id: str) -> List[Connection]:
        return list(self._incoming[neuron_id])

    def outgoing(self, neuron_id: str) -> List[Connection]:
        return list(self._outgoing[neuron_id])

    def outputs(self) -> List[float]:
        return [n.activation for n in self.output_neurons]

    # ------------------------------------------------------------------
    # Passes

    def forward(self, inputs: Sequence[float]) -> List[float]:
        """Propagate ``inputs`` through the network and return the output activations.

        Missing inputs default to ``0.0`` and surplus inputs are ignored; both
        emit :class:`TruncatedInputWarning` instead of raising.
        """

        width = len(self.input_neurons)
        if len(inputs) != width:
            warnings.warn(
                f"forward received {len(inputs)} inputs for an input layer of {width}",
                TruncatedInputWarning,
                stacklevel=2,
            )
        for idx, neuron in enumerate(self.input_neurons):
            neuron.activation = float(inputs[idx]) if idx < len(inputs) else 0.0

        fn = self.activation.fn
        for layer in self.layers[1:]:
            for neuron in layer:
                total = neuron.bias
                for conn in self._incoming[neuron.id]:
                    total += self._by_id[conn.source].activation * conn.weight
                neuron.activation = float(fn(total))
        return self.outputs()

    def backward(self, targets: Sequence[float], learning_rate: float | None = None) -> None:
        """Backpropagate ``targets`` against the activations of the last forward pass.

        Must follow a :meth:`forward` call on the same input.  Output neurons
        beyond ``len(targets)`` receive no error signal.
        """

        lr = self.config.learning_rate if learning_rate is None else float(learning_rate)
        outputs = self.output_neurons
        if len(targets) != len(outputs):
            warnings.warn(
                f"backward received {len(targets)} targets for an output layer of {len(outputs)}",
                TruncatedInputWarning,
                stacklevel=2,
            )

        errors = self._compute_errors(targets)

        for conn in self.connections:
            source = self._by_id[conn.source]
            conn.gradient = errors.get(conn.target, 0.0) * source.activation
            conn.weight += lr * conn.gradient

        if self.config.train_biases:
            for neuron_id, error in errors.items():
                self._by_id[neuron_id].bias += lr * error

    def _compute_errors(self, targets: Sequence[float]) -> Mapping[str, float]:
        """Return the per-neuron error signals for ``targets``, keyed by neuron id.

        The map lives only for the duration of one backward pass.
        """

        deriv = self.activation.derivative
        errors: Dict[str, float] = {}
        for target, neuron in zip(targets, self.output_neurons):
            errors[neuron.id] = (float(target) - neuron.activation) * float(
                deriv(neuron.activation)
            )

        for layer in reversed(self.layers[:-1]):
            for neuron in layer:
                if neuron.kind == NeuronKind.INPUT:
                    continue
                downstream = sum(
                    errors.get(conn.target, 0.0) * conn.weight
                    for conn in self._outgoing[neuron.id]
                )
                errors[neuron.id] = downstream * float(deriv(neuron.activation))
        return errors

    @staticmethod
    def loss(predictions: Sequence[float], targets: Sequence[float]) -> float:
        return mean_squared_error(predictions, targets)

    def __repr__(self) -> str:
        return (
            f"NeuralNetwork(layers={self.config.layer_sizes()}, "
            f"activation={self.activation.name!r}, connections={len(self.connections)})"
        )


__all__ = ["NeuralNetwork"]
