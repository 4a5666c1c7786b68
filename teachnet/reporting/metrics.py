"""Epoch metric sinks writing :class:`TrainingMetric` records to disk."""

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Mapping

from ..core.types import TrainingMetric

FIELDS = ("epoch", "loss", "accuracy", "timestamp")


def to_metric(epoch: int, metrics: Mapping[str, float]) -> TrainingMetric:
    """Rebuild the epoch record from the payload the trainer hands to callbacks."""

    return TrainingMetric(
        epoch=int(epoch),
        loss=float(metrics["loss"]),
        accuracy=float(metrics["accuracy"]),
        timestamp=float(metrics["timestamp"]),
    )


class JsonlSink:
    """One JSON object per completed epoch, tagged with the run seed."""

    def __init__(self, path: str | Path, *, seed: int | None = None) -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text("")
        self.seed = seed

    def write(self, metric: TrainingMetric) -> None:
        record = {"seed": self.seed, **metric.as_dict()}
        with self.path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(record) + "\n")

    def on_epoch(self, epoch: int, metrics: Mapping[str, float]) -> None:
        self.write(to_metric(epoch, metrics))

    __call__ = on_epoch


class CsvSink:
    """Epoch metrics as CSV rows under a fixed ``epoch,loss,accuracy,timestamp`` header."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", encoding="utf-8", newline="") as handle:
            csv.writer(handle).writerow(FIELDS)

    def write(self, metric: TrainingMetric) -> None:
        row = metric.as_dict()
        with self.path.open("a", encoding="utf-8", newline="") as handle:
            csv.writer(handle).writerow([row[name] for name in FIELDS])

    def on_epoch(self, epoch: int, metrics: Mapping[str, float]) -> None:
        self.write(to_metric(epoch, metrics))


__all__ = ["CsvSink", "FIELDS", "JsonlSink", "to_metric"]
