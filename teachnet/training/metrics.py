"""Accuracy helpers for the training loop."""

from __future__ import annotations

from typing import Iterable, Sequence, Tuple

import numpy as np


def is_correct(
    predictions: Sequence[float], targets: Sequence[float], *, threshold: float = 0.5
) -> bool:
    """Return whether a single prediction counts as correct.

    Single-output samples compare the thresholded values; wider outputs
    compare the index of the largest entry.
    """

    pred = np.asarray(predictions, dtype=np.float64).reshape(-1)
    targ = np.asarray(targets, dtype=np.float64).reshape(-1)
    if pred.size == 0 or targ.size == 0:
        return False
    if targ.size == 1:
        return bool((pred[0] > threshold) == (targ[0] > threshold))
    return int(np.argmax(pred)) == int(np.argmax(targ))


def accuracy(
    pairs: Iterable[Tuple[Sequence[float], Sequence[float]]], *, threshold: float = 0.5
) -> float:
    """Return the percentage of ``(predictions, targets)`` pairs that are correct."""

    total = 0
    correct = 0
    for predictions, targets in pairs:
        total += 1
        correct += int(is_correct(predictions, targets, threshold=threshold))
    if total == 0:
        return 0.0
    return 100.0 * correct / total


__all__ = ["accuracy", "is_correct"]
