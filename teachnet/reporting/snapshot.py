"""Read-only network state export for visualisation front-ends."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, List

from ..core.network import NeuralNetwork


def network_snapshot(network: NeuralNetwork) -> Dict[str, object]:
    """Return a JSON-serialisable copy of every neuron and connection.

    The copy is detached from the live network, so consumers can keep it
    across training steps without observing later mutations.
    """

    nodes: List[Dict[str, object]] = [
        {
            "id": n.id,
            "x": n.x,
            "y": n.y,
            "layer": n.layer,
            "type": n.kind,
            "activation": n.activation,
            "bias": n.bias,
        }
        for n in network.neurons
    ]
    connections: List[Dict[str, object]] = [
        {
            "id": c.id,
            "from": c.source,
            "to": c.target,
            "weight": c.weight,
            "gradient": c.gradient,
        }
        for c in network.connections
    ]
    return {
        "config": network.config.as_dict(),
        "nodes": nodes,
        "connections": connections,
    }


def write_snapshot(network: NeuralNetwork, path: str | Path) -> str:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(network_snapshot(network), indent=2))
    return str(path)


__all__ = ["network_snapshot", "write_snapshot"]
