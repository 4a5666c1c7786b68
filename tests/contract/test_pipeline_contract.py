import json
from pathlib import Path

import pytest

from teachnet.training import pipelines


def _xor_config(run_dir: Path, epochs: int = 20) -> dict:
    config = json.loads(json.dumps(pipelines.load_preset("xor")))
    config["train"].update({"epochs": epochs, "seed": 11, "run_dir": str(run_dir)})
    return config


def test_pipeline_produces_artifacts(tmp_path, capsys):
    config = _xor_config(tmp_path / "run")
    result = pipelines.run_pipeline(config)

    assert result.epochs == 20
    assert len(result.history) == 20
    assert "=== teachnet run ===" in capsys.readouterr().out

    metrics = [
        json.loads(line)
        for line in Path(result.metrics_path).read_text().splitlines()
        if line
    ]
    assert len(metrics) == 20
    assert set(metrics[0]) == {"seed", "epoch", "loss", "accuracy", "timestamp"}
    assert metrics[0]["seed"] == 11
    assert all("loss" in entry and "accuracy" in entry for entry in metrics)
    assert metrics[-1]["loss"] == pytest.approx(result.final_loss)

    manifest = json.loads(Path(result.manifest_path).read_text())
    assert manifest["config"]["network"]["seed"] == 11
    assert manifest["config"]["network"]["hidden_layers"] == [4, 3]
    assert manifest["dataset"]["type"] == "xor"

    snapshot = json.loads(Path(result.snapshot_path).read_text())
    assert len(snapshot["nodes"]) == 2 + 4 + 3 + 1
    assert (tmp_path / "run" / "metrics.csv").exists()
    assert (tmp_path / "run" / "config.json").exists()


def test_pipeline_is_reproducible_for_fixed_seed(tmp_path):
    first = pipelines.run_pipeline(_xor_config(tmp_path / "a", epochs=5))
    second = pipelines.run_pipeline(_xor_config(tmp_path / "b", epochs=5))
    assert [m.loss for m in first.history] == [m.loss for m in second.history]


def test_pipeline_rejects_mismatched_dataset(tmp_path):
    config = _xor_config(tmp_path / "run")
    config["model"]["input_size"] = 3
    with pytest.raises(ValueError):
        pipelines.run_pipeline(config)


def test_random_preset_matches_network_widths(tmp_path):
    config = json.loads(json.dumps(pipelines.load_preset("random")))
    config["train"].update({"epochs": 3, "run_dir": str(tmp_path / "rand")})
    result = pipelines.run_pipeline(config)
    assert result.epochs == 3
    assert 0.0 <= result.final_accuracy <= 100.0


def test_unknown_preset():
    with pytest.raises(KeyError):
        pipelines.load_preset("mnist")
