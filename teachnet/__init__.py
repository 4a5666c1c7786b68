"""teachnet public API."""

from .core import activations  # noqa: F401
from .core import types  # noqa: F401
from .core.errors import DimensionMismatchError, InvalidTopologyError, TruncatedInputWarning
from .core.network import NeuralNetwork
from .core.topology import build_topology, parse_layer_sizes
from .core.types import Connection, NetworkConfig, Neuron, TrainingMetric, TrainingSample
from .training.losses import mean_squared_error
from .training.pipelines import load_preset, presets, run_pipeline
from .training.trainer import Trainer

__all__ = [
    "Connection",
    "DimensionMismatchError",
    "InvalidTopologyError",
    "NetworkConfig",
    "NeuralNetwork",
    "Neuron",
    "Trainer",
    "TrainingMetric",
    "TrainingSample",
    "TruncatedInputWarning",
    "activations",
    "build_topology",
    "load_preset",
    "mean_squared_error",
    "parse_layer_sizes",
    "presets",
    "run_pipeline",
    "types",
]
