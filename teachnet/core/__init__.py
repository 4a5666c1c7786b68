"""Core numerical primitives for teachnet."""

from . import activations, errors, topology, types
from .network import NeuralNetwork

__all__ = ["activations", "errors", "topology", "types", "NeuralNetwork"]
