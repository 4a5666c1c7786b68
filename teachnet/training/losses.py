"""Loss registry used by the network engine and the training loop."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Sequence

import numpy as np

from ..core.errors import DimensionMismatchError

LossFn = Callable[[np.ndarray, np.ndarray], float]


@dataclass(frozen=True)
class Loss:
    """Named loss scoring a prediction vector against a target vector."""

    name: str
    fn: LossFn

    def __call__(self, predictions: Sequence[float], targets: Sequence[float]) -> float:
        pred, targ = _as_pair(predictions, targets)
        return self.fn(pred, targ)


class LossRegistry:
    """Central registry for loss functions."""

    def __init__(self) -> None:
        self._registry: Dict[str, Loss] = {}

    def register(self, name: str, fn: LossFn) -> None:
        self._registry[name] = Loss(name, fn)

    def get(self, name: str) -> Loss:
        if name not in self._registry:
            available = ", ".join(sorted(self._registry))
            raise KeyError(f"Unknown loss {name!r}. Available losses: {available}")
        return self._registry[name]

    def names(self) -> Iterable[str]:
        return sorted(self._registry)


def _as_pair(predictions: Sequence[float], targets: Sequence[float]) -> tuple[np.ndarray, np.ndarray]:
    pred = np.asarray(predictions, dtype=np.float64).reshape(-1)
    targ = np.asarray(targets, dtype=np.float64).reshape(-1)
    if pred.shape != targ.shape:
        raise DimensionMismatchError(
            f"predictions have {pred.size} entries but targets have {targ.size}"
        )
    if pred.size == 0:
        raise DimensionMismatchError("cannot score empty vectors")
    return pred, targ


def _mse(pred: np.ndarray, target: np.ndarray) -> float:
    return float(np.mean(np.square(pred - target)))


def _mae(pred: np.ndarray, target: np.ndarray) -> float:
    return float(np.mean(np.abs(pred - target)))


REGISTRY = LossRegistry()
REGISTRY.register("mse", _mse)
REGISTRY.register("mae", _mae)


def mean_squared_error(predictions: Sequence[float], targets: Sequence[float]) -> float:
    """Return ``mean((p - t) ** 2)``; mismatched lengths raise ``DimensionMismatchError``."""

    return REGISTRY.get("mse")(predictions, targets)


__all__ = ["Loss", "LossRegistry", "REGISTRY", "mean_squared_error"]
