"""Dataset registry, built-in sample sets and JSON import/export."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, MutableMapping, Sequence

import numpy as np

from ..core.errors import DimensionMismatchError
from ..core.types import TrainingSample


@dataclass(frozen=True)
class DatasetSpec:
    """A named, in-memory list of samples plus how it was produced."""

    name: str
    samples: List[TrainingSample]
    input_size: int
    output_size: int
    provenance: Dict[str, Any]

    def __len__(self) -> int:
        return len(self.samples)


DatasetFactory = Callable[..., DatasetSpec]

_REGISTRY: MutableMapping[str, DatasetFactory] = {}


def register_dataset(name: str) -> Callable[[DatasetFactory], DatasetFactory]:
    """Register a dataset factory under ``name``::

        @register_dataset("xor")
        def make_xor(**kwargs):
            ...
    """

    def decorator(fn: DatasetFactory) -> DatasetFactory:
        if name in _REGISTRY:
            raise ValueError(f"Dataset '{name}' already registered")
        _REGISTRY[name] = fn
        return fn

    return decorator


def get(name: str, **options: Any) -> DatasetSpec:
    try:
        factory = _REGISTRY[name]
    except KeyError as exc:
        available = ", ".join(sorted(_REGISTRY))
        raise KeyError(f"Unknown dataset {name!r}. Available datasets: {available}") from exc
    return factory(**options)


def available_datasets() -> Iterable[str]:
    return sorted(_REGISTRY)


def make_sample(
    inputs: Sequence[float],
    outputs: Sequence[float],
    *,
    input_size: int,
    output_size: int,
    label: str | None = None,
) -> TrainingSample:
    """Build a sample, rejecting vectors that do not fit the network widths."""

    if len(inputs) != input_size or len(outputs) != output_size:
        raise DimensionMismatchError(
            f"sample has {len(inputs)}→{len(outputs)} values, "
            f"network expects {input_size}→{output_size}"
        )
    return TrainingSample(
        inputs=tuple(float(v) for v in inputs),
        outputs=tuple(float(v) for v in outputs),
        label=label,
    )


@register_dataset("xor")
def make_xor(**_: object) -> DatasetSpec:
    samples = []
    for a, b in ((0, 0), (0, 1), (1, 0), (1, 1)):
        y = a ^ b
        samples.append(
            make_sample([a, b], [y], input_size=2, output_size=1, label=f"XOR: {a},{b} → {y}")
        )
    return DatasetSpec(
        name="xor",
        samples=samples,
        input_size=2,
        output_size=1,
        provenance={"type": "xor"},
    )


@register_dataset("random")
def make_random(
    input_size: int = 2,
    output_size: int = 1,
    n_samples: int = 10,
    seed: int | None = None,
    **_: object,
) -> DatasetSpec:
    rng = np.random.default_rng(seed)
    x = rng.random((n_samples, input_size))
    y = rng.random((n_samples, output_size))
    samples = [
        make_sample(
            x[i],
            y[i],
            input_size=input_size,
            output_size=output_size,
            label=f"Random Data {i + 1}",
        )
        for i in range(n_samples)
    ]
    return DatasetSpec(
        name="random",
        samples=samples,
        input_size=input_size,
        output_size=output_size,
        provenance={
            "type": "random",
            "n_samples": n_samples,
            "seed": seed,
        },
    )


def default_dataset(input_size: int, output_size: int, seed: int | None = None) -> DatasetSpec:
    """XOR for 2→1 networks, ten random samples for anything else."""

    if input_size == 2 and output_size == 1:
        return get("xor")
    return get("random", input_size=input_size, output_size=output_size, seed=seed)


def load_samples(path: str | Path) -> List[TrainingSample]:
    """Read ``[{"inputs": [...], "outputs": [...], "label": ...}, ...]`` from JSON."""

    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError(f"{path} must contain a JSON list of samples")
    samples: List[TrainingSample] = []
    for idx, entry in enumerate(data):
        try:
            inputs = [float(v) for v in entry["inputs"]]
            outputs = [float(v) for v in entry["outputs"]]
        except (KeyError, TypeError) as exc:
            raise ValueError(f"Sample {idx} in {path} needs 'inputs' and 'outputs' lists") from exc
        samples.append(TrainingSample(inputs=tuple(inputs), outputs=tuple(outputs), label=entry.get("label")))
    return samples


def save_samples(samples: Iterable[TrainingSample], path: str | Path) -> str:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps([s.as_dict() for s in samples], indent=2, ensure_ascii=False), encoding="utf-8")
    return str(path)


def from_file(path: str | Path) -> DatasetSpec:
    """Wrap an exported sample file as a dataset.

    Widths come from the first sample; every other sample must match them.
    """

    loaded = load_samples(path)
    if not loaded:
        raise ValueError(f"{path} contains no samples")
    input_size = len(loaded[0].inputs)
    output_size = len(loaded[0].outputs)
    samples = [
        make_sample(
            s.inputs,
            s.outputs,
            input_size=input_size,
            output_size=output_size,
            label=s.label,
        )
        for s in loaded
    ]
    return DatasetSpec(
        name=Path(path).stem,
        samples=samples,
        input_size=input_size,
        output_size=output_size,
        provenance={"type": "file", "path": str(path)},
    )


__all__ = [
    "DatasetSpec",
    "available_datasets",
    "default_dataset",
    "from_file",
    "get",
    "load_samples",
    "make_sample",
    "register_dataset",
    "save_samples",
]
