"""Per-sample training loop driving the network engine."""

from __future__ import annotations

import time
from typing import Callable, List, Mapping, Sequence

from ..core.network import NeuralNetwork
from ..core.types import TrainingMetric, TrainingSample
from .losses import REGISTRY as LOSS_REGISTRY
from .metrics import is_correct


class Trainer:
    """Run forward, loss and backward once per sample, once per epoch.

    Callbacks may implement ``on_sample(index, sample, predictions)`` and
    ``on_epoch(epoch, metrics)``; plain callables are treated as
    ``on_epoch``.
    """

    def __init__(
        self,
        network: NeuralNetwork,
        callbacks: Sequence[object] | None = None,
        *,
        loss: str = "mse",
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.network = network
        self.callbacks = list(callbacks or [])
        self.loss_fn = LOSS_REGISTRY.get(loss)
        self.clock = clock
        self.history: List[TrainingMetric] = []

    @property
    def epoch(self) -> int:
        return len(self.history)

    def step(self, sample: TrainingSample) -> tuple[List[float], float]:
        predictions = self.network.forward(sample.inputs)
        self.network.backward(sample.outputs)
        return predictions, self.loss_fn(predictions, sample.outputs)

    def train_epoch(self, samples: Sequence[TrainingSample]) -> TrainingMetric | None:
        """Sweep once over ``samples`` and record the epoch metric.

        Returns ``None`` without touching the history when ``samples`` is empty.
        """

        if not samples:
            return None
        total_loss = 0.0
        correct = 0
        for index, sample in enumerate(samples):
            predictions, loss_value = self.step(sample)
            total_loss += loss_value
            correct += int(is_correct(predictions, sample.outputs))
            self._emit_sample(index, sample, predictions)

        metric = TrainingMetric(
            epoch=self.epoch + 1,
            loss=total_loss / len(samples),
            accuracy=100.0 * correct / len(samples),
            timestamp=float(self.clock()),
        )
        self.history.append(metric)
        self._emit_epoch(metric)
        return metric

    def run(
        self,
        samples: Sequence[TrainingSample],
        epochs: int,
        *,
        target_loss: float | None = None,
    ) -> List[TrainingMetric]:
        """Train for up to ``epochs`` sweeps and return the metrics recorded by this call."""

        recorded: List[TrainingMetric] = []
        for _ in range(max(0, int(epochs))):
            metric = self.train_epoch(samples)
            if metric is None:
                break
            recorded.append(metric)
            if target_loss is not None and metric.loss <= target_loss:
                break
        return recorded

    def evaluate(self, samples: Sequence[TrainingSample]) -> Mapping[str, float]:
        """Score ``samples`` with forward passes only."""

        if not samples:
            return {"loss": 0.0, "accuracy": 0.0}
        total_loss = 0.0
        correct = 0
        for sample in samples:
            predictions = self.network.forward(sample.inputs)
            total_loss += self.loss_fn(predictions, sample.outputs)
            correct += int(is_correct(predictions, sample.outputs))
        return {
            "loss": total_loss / len(samples),
            "accuracy": 100.0 * correct / len(samples),
        }

    def reset(self, network: NeuralNetwork | None = None) -> None:
        """Clear the metric history, optionally swapping in a rebuilt network."""

        if network is not None:
            self.network = network
        self.history = []

    # ------------------------------------------------------------------
    # Internal helpers

    def _emit_sample(self, index: int, sample: TrainingSample, predictions: List[float]) -> None:
        for callback in self.callbacks:
            if hasattr(callback, "on_sample"):
                callback.on_sample(index, sample, predictions)  # type: ignore[attr-defined]

    def _emit_epoch(self, metric: TrainingMetric) -> None:
        payload = {"loss": metric.loss, "accuracy": metric.accuracy, "timestamp": metric.timestamp}
        for callback in self.callbacks:
            if hasattr(callback, "on_epoch"):
                callback.on_epoch(metric.epoch, payload)  # type: ignore[attr-defined]
            elif callable(callback):
                callback(metric.epoch, payload)


__all__ = ["Trainer"]
