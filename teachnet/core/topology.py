"""Layered topology construction."""

from __future__ import annotations

import re
from typing import List, Sequence, Tuple

import numpy as np

from .errors import InvalidTopologyError
from .types import Connection, Neuron, NeuronKind

LAYER_SPACING = 200
NODE_SPACING = 80
MARGIN = 100

_LEADING_INT = re.compile(r"\s*[+-]?\d+")


def _kind_for(layer: int, num_layers: int) -> str:
    if layer == 0:
        return NeuronKind.INPUT
    if layer == num_layers - 1:
        return NeuronKind.OUTPUT
    return NeuronKind.HIDDEN


def connection_id(source: str, target: str) -> str:
    return f"conn-{source}-{target}"


def build_topology(
    input_size: int,
    hidden_layers: Sequence[int],
    output_size: int,
    rng: np.random.Generator | None = None,
) -> Tuple[List[Neuron], List[Connection]]:
    """Allocate neurons layer by layer and fully connect adjacent layers.

    Biases and weights are drawn from ``U[-1, 1)``.  Pass a seeded ``rng``
    for reproducible networks; ``None`` uses an unseeded generator.
    """

    sizes = [int(input_size), *(int(h) for h in hidden_layers), int(output_size)]
    if any(width <= 0 for width in sizes):
        raise InvalidTopologyError(f"Layer widths must be positive, got {sizes}")
    rng = rng if rng is not None else np.random.default_rng()

    neurons: List[Neuron] = []
    layers: List[List[Neuron]] = []
    next_id = 0
    for layer_idx, width in enumerate(sizes):
        kind = _kind_for(layer_idx, len(sizes))
        biases = rng.uniform(-1.0, 1.0, size=width)
        layer: List[Neuron] = []
        for position in range(width):
            neuron = Neuron(
                id=f"node-{next_id}",
                layer=layer_idx,
                kind=kind,
                bias=float(biases[position]),
                x=float(layer_idx * LAYER_SPACING + MARGIN),
                y=float(position * NODE_SPACING + MARGIN),
            )
            next_id += 1
            layer.append(neuron)
        layers.append(layer)
        neurons.extend(layer)

    connections: List[Connection] = []
    for lower, upper in zip(layers[:-1], layers[1:]):
        weights = rng.uniform(-1.0, 1.0, size=(len(lower), len(upper)))
        for i, source in enumerate(lower):
            for j, target in enumerate(upper):
                connections.append(
                    Connection(
                        id=connection_id(source.id, target.id),
                        source=source.id,
                        target=target.id,
                        weight=float(weights[i, j]),
                    )
                )
    return neurons, connections


def parse_layer_sizes(text: str) -> List[int]:
    """Parse ``"4, 3"`` into ``[4, 3]``.

    Each entry contributes its leading integer (``"4.5"`` gives ``4``,
    ``"3 nodes"`` gives ``3``); entries without one are skipped.  Widths are
    not range-checked here: a ``0`` survives parsing and is rejected with
    :class:`InvalidTopologyError` when the network is built.
    """

    sizes: List[int] = []
    for chunk in text.split(","):
        match = _LEADING_INT.match(chunk)
        if match:
            sizes.append(int(match.group(0)))
    return sizes


__all__ = ["build_topology", "connection_id", "parse_layer_sizes"]
