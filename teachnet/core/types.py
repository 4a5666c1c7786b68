"""Core typing contracts for teachnet."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, replace
from typing import Dict, List, Optional, Sequence, Tuple

from .errors import InvalidTopologyError


class NeuronKind:
    """Role of a neuron, derived once from its layer index."""

    INPUT = "input"
    HIDDEN = "hidden"
    OUTPUT = "output"


@dataclass(frozen=True)
class NetworkConfig:
    """Immutable description of a network; any change means a full rebuild."""

    input_size: int
    hidden_layers: Tuple[int, ...] = ()
    output_size: int = 1
    learning_rate: float = 0.1
    activation: str = "sigmoid"
    seed: Optional[int] = None
    train_biases: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "hidden_layers", tuple(int(h) for h in self.hidden_layers))
        for width in self.layer_sizes():
            if width <= 0:
                raise InvalidTopologyError(
                    f"Layer widths must be positive, got {self.layer_sizes()}"
                )
        if self.learning_rate <= 0:
            raise ValueError(f"learning_rate must be positive, got {self.learning_rate}")

    def layer_sizes(self) -> List[int]:
        return [int(self.input_size), *self.hidden_layers, int(self.output_size)]

    def replace(self, **changes) -> "NetworkConfig":
        return replace(self, **changes)

    def as_dict(self) -> Dict[str, object]:
        payload = asdict(self)
        payload["hidden_layers"] = list(self.hidden_layers)
        return payload


@dataclass(eq=False)
class Neuron:
    """A single unit of the network.

    ``x``/``y`` are layout coordinates read by the visualisation layer; they
    play no part in the computation.
    """

    id: str
    layer: int
    kind: str
    bias: float
    x: float = 0.0
    y: float = 0.0
    activation: float = 0.0


@dataclass(eq=False)
class Connection:
    """Directed weighted edge between neurons of adjacent layers."""

    id: str
    source: str
    target: str
    weight: float
    gradient: float = 0.0


@dataclass(frozen=True)
class TrainingSample:
    """One input/target pair, owned by the caller and never mutated."""

    inputs: Sequence[float]
    outputs: Sequence[float]
    label: Optional[str] = None

    def as_dict(self) -> Dict[str, object]:
        payload: Dict[str, object] = {
            "inputs": [float(v) for v in self.inputs],
            "outputs": [float(v) for v in self.outputs],
        }
        if self.label is not None:
            payload["label"] = self.label
        return payload


@dataclass(frozen=True)
class TrainingMetric:
    """Summary of one completed sweep over the sample set."""

    epoch: int
    loss: float
    accuracy: float
    timestamp: float

    def as_dict(self) -> Dict[str, float]:
        return {
            "epoch": int(self.epoch),
            "loss": float(self.loss),
            "accuracy": float(self.accuracy),
            "timestamp": float(self.timestamp),
        }


@dataclass(frozen=True)
class RunResult:
    """Summary returned by :func:`teachnet.training.pipelines.run_pipeline`."""

    epochs: int
    final_loss: float
    final_accuracy: float
    metrics_path: str
    manifest_path: str
    snapshot_path: str = ""
    history: List[TrainingMetric] = field(default_factory=list, compare=False, repr=False)


__all__ = [
    "NeuronKind",
    "NetworkConfig",
    "Neuron",
    "Connection",
    "TrainingSample",
    "TrainingMetric",
    "RunResult",
]
