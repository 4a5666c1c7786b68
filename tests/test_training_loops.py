from __future__ import annotations

from typing import List, Mapping

import pytest

from teachnet.core.network import NeuralNetwork
from teachnet.core.types import NetworkConfig, TrainingSample
from teachnet.data import datasets
from teachnet.training.trainer import Trainer


class _Capture:
    def __init__(self) -> None:
        self.history: list[tuple[int, Mapping[str, float]]] = []
        self.samples: List[int] = []

    def on_sample(self, index, sample, predictions) -> None:
        self.samples.append(index)

    def on_epoch(self, epoch: int, metrics: Mapping[str, float]) -> None:
        self.history.append((epoch, {k: float(v) for k, v in metrics.items()}))


def _xor_network(seed: int = 0) -> NeuralNetwork:
    config = NetworkConfig(
        input_size=2,
        hidden_layers=(4, 3),
        output_size=1,
        learning_rate=0.1,
        activation="sigmoid",
        seed=seed,
    )
    return NeuralNetwork(config)


def test_xor_training_reduces_loss() -> None:
    samples = datasets.get("xor").samples
    trainer = Trainer(_xor_network())
    history = trainer.run(samples, epochs=500)

    assert len(history) == 500
    assert history[-1].loss < history[0].loss
    assert [m.epoch for m in history[:3]] == [1, 2, 3]
    assert all(0.0 <= m.accuracy <= 100.0 for m in history)


def test_epoch_metric_and_callbacks() -> None:
    samples = datasets.get("xor").samples
    capture = _Capture()
    ticks = iter([10.0, 20.0])
    trainer = Trainer(_xor_network(1), callbacks=[capture], clock=lambda: next(ticks))

    first = trainer.train_epoch(samples)
    second = trainer.train_epoch(samples)

    assert (first.epoch, second.epoch) == (1, 2)
    assert (first.timestamp, second.timestamp) == (10.0, 20.0)
    assert trainer.epoch == 2
    assert capture.samples == [0, 1, 2, 3, 0, 1, 2, 3]
    assert [epoch for epoch, _ in capture.history] == [1, 2]
    assert capture.history[0][1]["loss"] == pytest.approx(first.loss)
    assert first.accuracy in {0.0, 25.0, 50.0, 75.0, 100.0}


def test_plain_callable_receives_epoch_metrics() -> None:
    seen = []
    trainer = Trainer(_xor_network(2), callbacks=[lambda epoch, metrics: seen.append(epoch)])
    trainer.run(datasets.get("xor").samples, epochs=3)
    assert seen == [1, 2, 3]


def test_empty_samples_record_nothing() -> None:
    trainer = Trainer(_xor_network())
    assert trainer.train_epoch([]) is None
    assert trainer.run([], epochs=5) == []
    assert trainer.history == []


def test_target_loss_stops_early() -> None:
    trainer = Trainer(_xor_network())
    history = trainer.run(datasets.get("xor").samples, epochs=50, target_loss=10.0)
    assert len(history) == 1


def test_evaluate_does_not_update_weights() -> None:
    net = _xor_network(3)
    weights = [c.weight for c in net.connections]
    scores = Trainer(net).evaluate(datasets.get("xor").samples)
    assert [c.weight for c in net.connections] == weights
    assert scores["loss"] >= 0.0


def test_reset_swaps_network_and_clears_history() -> None:
    samples = [TrainingSample(inputs=(0.5, 0.5), outputs=(1.0,))]
    trainer = Trainer(_xor_network())
    trainer.run(samples, epochs=2)
    rebuilt = trainer.network.reconfigure(learning_rate=0.5)
    trainer.reset(rebuilt)
    assert trainer.history == []
    assert trainer.network is rebuilt
    assert trainer.train_epoch(samples).epoch == 1
