"""Command line entry point for teachnet training runs."""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Iterable

from teachnet.core import activations
from teachnet.core.topology import parse_layer_sizes
from teachnet.training import pipelines


def _format_result(result) -> str:
    payload = {
        "epochs": result.epochs,
        "loss": result.final_loss,
        "accuracy": result.final_accuracy,
        "metrics": result.metrics_path,
        "manifest": result.manifest_path,
        "network": result.snapshot_path,
    }
    return json.dumps(payload, sort_keys=True)


def parse_args(argv: Iterable[str] | None = None) -> argparse.Namespace:
    preset_names = sorted(pipelines.presets().keys())
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--preset",
        choices=preset_names,
        default="xor",
        help="Preset configuration to execute",
    )
    parser.add_argument(
        "--config", type=Path, help="Optional JSON/YAML config override"
    )
    parser.add_argument(
        "--hidden",
        help="Comma-separated hidden layer widths, e.g. '4, 3' (empty for none)",
    )
    parser.add_argument(
        "--activation",
        choices=list(activations.names()),
        help="Activation function for hidden and output neurons",
    )
    parser.add_argument("--learning-rate", type=float, help="Learning rate")
    parser.add_argument("--epochs", type=int, help="Number of sweeps over the samples")
    parser.add_argument("--seed", type=int, help="Seed for weight initialisation")
    parser.add_argument(
        "--target-loss", type=float, help="Stop once the epoch loss reaches this value"
    )
    parser.add_argument(
        "--dataset-file", type=Path, help="JSON sample file to train on instead of the preset data"
    )
    parser.add_argument("--run-dir", type=Path, help="Directory for run artifacts")
    parser.add_argument(
        "--enable-plots", action="store_true", help="Write loss/accuracy curves"
    )
    parser.add_argument(
        "--list-presets", action="store_true", help="List available presets and exit"
    )
    parser.add_argument(
        "--dump-config", type=Path, help="Dump the resolved config to a JSON file"
    )
    return parser.parse_args(argv)


def _load_override(path: Path) -> dict:
    text = path.read_text()
    if path.suffix in {".yml", ".yaml"}:
        import yaml

        return yaml.safe_load(text) or {}
    return json.loads(text)


def _merge(base: dict, override: dict) -> dict:
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            base[key] = _merge(dict(base[key]), value)
        else:
            base[key] = value
    return base


def resolve_config(args: argparse.Namespace) -> dict:
    config = json.loads(json.dumps(pipelines.load_preset(args.preset)))

    if args.config:
        config = _merge(config, _load_override(args.config))

    model = config.setdefault("model", {})
    train = config.setdefault("train", {})
    if args.hidden is not None:
        model["hidden_layers"] = parse_layer_sizes(args.hidden)
    if args.activation:
        model["activation"] = args.activation
    if args.learning_rate is not None:
        train["lr"] = float(args.learning_rate)
    if args.epochs is not None:
        train["epochs"] = int(args.epochs)
    if args.seed is not None:
        train["seed"] = int(args.seed)
    if args.target_loss is not None:
        train["target_loss"] = float(args.target_loss)
    if args.run_dir is not None:
        train["run_dir"] = str(args.run_dir)
    if args.enable_plots:
        train["enable_plots"] = True
    if args.dataset_file is not None:
        config["data"] = {"path": str(args.dataset_file)}
    return config


def main(argv: Iterable[str] | None = None) -> None:
    args = parse_args(argv)

    if args.list_presets:
        for name in sorted(pipelines.presets().keys()):
            print(name)
        raise SystemExit(0)

    config = resolve_config(args)

    if args.dump_config:
        args.dump_config.parent.mkdir(parents=True, exist_ok=True)
        args.dump_config.write_text(json.dumps(config, indent=2))

    result = pipelines.run_pipeline(config)
    print(_format_result(result))


if __name__ == "__main__":  # pragma: no cover - manual invocation
    main()
