"""Pipeline assembly: dataset + network + trainer + reporting sinks."""

from __future__ import annotations

import json
import time
from copy import deepcopy
from pathlib import Path
from typing import Dict, Mapping, Sequence

from ..core.network import NeuralNetwork
from ..core.types import NetworkConfig, RunResult
from ..data import datasets
from ..reporting.artifacts import write_manifest
from ..reporting.metrics import CsvSink, JsonlSink
from ..reporting.plots import PlotAdapter
from ..reporting.snapshot import write_snapshot
from .trainer import Trainer

_PRESETS: Dict[str, Mapping[str, object]] = {
    "xor": {
        "data": {"name": "xor", "options": {}},
        "model": {
            "input_size": 2,
            "hidden_layers": [4, 3],
            "output_size": 1,
            "activation": "sigmoid",
        },
        "train": {
            "epochs": 500,
            "lr": 0.1,
            "seed": 0,
            "run_dir": "runs/xor",
            "enable_plots": False,
        },
    },
    "random": {
        "data": {"name": "random", "options": {"n_samples": 10, "seed": 0}},
        "model": {
            "input_size": 3,
            "hidden_layers": [5],
            "output_size": 2,
            "activation": "tanh",
        },
        "train": {
            "epochs": 200,
            "lr": 0.05,
            "seed": 0,
            "run_dir": "runs/random",
            "enable_plots": False,
        },
    },
}


def presets() -> Mapping[str, Mapping[str, object]]:
    return {name: deepcopy(cfg) for name, cfg in _PRESETS.items()}


def load_preset(name: str) -> Mapping[str, object]:
    try:
        return deepcopy(_PRESETS[name])
    except KeyError as exc:
        available = ", ".join(sorted(_PRESETS))
        raise KeyError(f"Unknown preset {name!r}. Available presets: {available}") from exc


def build_config(model_cfg: Mapping[str, object], train_cfg: Mapping[str, object]) -> NetworkConfig:
    seed = train_cfg.get("seed")
    return NetworkConfig(
        input_size=int(model_cfg.get("input_size", 2)),
        hidden_layers=tuple(int(h) for h in model_cfg.get("hidden_layers", [])),
        output_size=int(model_cfg.get("output_size", 1)),
        learning_rate=float(train_cfg.get("lr", 0.1)),
        activation=str(model_cfg.get("activation", "sigmoid")),
        seed=int(seed) if seed is not None else None,
        train_biases=bool(model_cfg.get("train_biases", True)),
    )


def _load_dataset(data_cfg: Mapping[str, object], config: NetworkConfig) -> datasets.DatasetSpec:
    options = dict(data_cfg.get("options", {}))
    name = str(data_cfg.get("name", "default"))
    if name == "default":
        return datasets.default_dataset(config.input_size, config.output_size, seed=config.seed)
    if name == "random":
        options.setdefault("input_size", config.input_size)
        options.setdefault("output_size", config.output_size)
    return datasets.get(name, **options)


def run_pipeline(config: Mapping[str, object]) -> RunResult:
    data_cfg = dict(config.get("data", {}))
    model_cfg = dict(config.get("model", {}))
    train_cfg = dict(config.get("train", {}))

    if "path" in data_cfg:
        dataset = datasets.from_file(str(data_cfg["path"]))
        model_cfg["input_size"] = dataset.input_size
        model_cfg["output_size"] = dataset.output_size
        net_config = build_config(model_cfg, train_cfg)
    else:
        net_config = build_config(model_cfg, train_cfg)
        dataset = _load_dataset(data_cfg, net_config)
    if (dataset.input_size, dataset.output_size) != (net_config.input_size, net_config.output_size):
        raise ValueError(
            f"Dataset {dataset.name!r} is {dataset.input_size}→{dataset.output_size} but the "
            f"network is {net_config.input_size}→{net_config.output_size}"
        )

    run_dir = _resolve_run_dir(train_cfg, dataset.name)
    run_dir.mkdir(parents=True, exist_ok=True)

    network = NeuralNetwork(net_config)
    _print_startup_summary(
        dataset_name=dataset.name,
        samples=len(dataset),
        dims=net_config.layer_sizes(),
        activation=network.activation.name,
        learning_rate=net_config.learning_rate,
        param_count=len(network.connections) + sum(len(layer) for layer in network.layers[1:]),
    )

    jsonl = JsonlSink(run_dir / "metrics.jsonl", seed=net_config.seed)
    csv_sink = CsvSink(run_dir / "metrics.csv")
    plots = PlotAdapter(run_dir, enable_plots=bool(train_cfg.get("enable_plots", False)))
    trainer = Trainer(network, callbacks=[jsonl, csv_sink, plots])

    target_loss = train_cfg.get("target_loss")
    history = trainer.run(
        dataset.samples,
        epochs=int(train_cfg.get("epochs", 1)),
        target_loss=float(target_loss) if target_loss is not None else None,
    )
    plots.close()

    safe_config = _safe_config(config, net_config)
    manifest = write_manifest(
        run_dir / "manifest.json",
        config=safe_config,
        dataset_provenance=dataset.provenance,
    )
    (run_dir / "config.json").write_text(json.dumps(safe_config, indent=2))
    snapshot = write_snapshot(network, run_dir / "network.json")

    last = history[-1] if history else None
    return RunResult(
        epochs=len(history),
        final_loss=last.loss if last else 0.0,
        final_accuracy=last.accuracy if last else 0.0,
        metrics_path=str(jsonl.path),
        manifest_path=manifest,
        snapshot_path=snapshot,
        history=list(history),
    )


def _resolve_run_dir(train_cfg: Mapping[str, object], dataset: str) -> Path:
    if "run_dir" in train_cfg:
        return Path(str(train_cfg["run_dir"]))
    timestamp = time.strftime("%Y%m%d-%H%M%S")
    return Path("runs") / timestamp / dataset


def _safe_config(config: Mapping[str, object], net_config: NetworkConfig) -> Mapping[str, object]:
    copied = json.loads(json.dumps(config))
    copied["network"] = net_config.as_dict()
    return copied


def _print_startup_summary(
    *,
    dataset_name: str,
    samples: int,
    dims: Sequence[int],
    activation: str,
    learning_rate: float,
    param_count: int,
) -> None:
    print("=== teachnet run ===")
    print(f"Dataset       : {dataset_name} ({samples} samples)")
    print(f"Layers        : {list(dims)}")
    print(f"Activation    : {activation}")
    print(f"Learning rate : {learning_rate}")
    print(f"Parameters    : {param_count}")
    print("====================")


__all__ = ["build_config", "load_preset", "presets", "run_pipeline"]
