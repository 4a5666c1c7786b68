import json

import pytest

from teachnet.core.errors import DimensionMismatchError
from teachnet.core.types import TrainingSample
from teachnet.data import datasets


def test_xor_dataset():
    spec = datasets.get("xor")
    assert (spec.input_size, spec.output_size) == (2, 1)
    assert [(s.inputs, s.outputs) for s in spec.samples] == [
        ((0.0, 0.0), (0.0,)),
        ((0.0, 1.0), (1.0,)),
        ((1.0, 0.0), (1.0,)),
        ((1.0, 1.0), (0.0,)),
    ]
    assert spec.samples[1].label == "XOR: 0,1 → 1"


def test_random_dataset_is_seeded_and_bounded():
    first = datasets.get("random", input_size=3, output_size=2, n_samples=5, seed=9)
    second = datasets.get("random", input_size=3, output_size=2, n_samples=5, seed=9)
    assert len(first) == 5
    assert first.samples == second.samples
    for sample in first.samples:
        assert len(sample.inputs) == 3 and len(sample.outputs) == 2
        assert all(0.0 <= v < 1.0 for v in sample.inputs + sample.outputs)
    assert first.samples[0].label == "Random Data 1"


def test_default_dataset_selection():
    assert datasets.default_dataset(2, 1).name == "xor"
    other = datasets.default_dataset(3, 2, seed=0)
    assert other.name == "random" and len(other) == 10


def test_make_sample_validates_widths():
    sample = datasets.make_sample([1, 2], [0], input_size=2, output_size=1, label="p")
    assert sample == TrainingSample(inputs=(1.0, 2.0), outputs=(0.0,), label="p")
    with pytest.raises(DimensionMismatchError):
        datasets.make_sample([1], [0], input_size=2, output_size=1)


def test_unknown_dataset():
    with pytest.raises(KeyError):
        datasets.get("iris")


def test_save_and_load_samples(tmp_path):
    path = tmp_path / "data" / "xor.json"
    datasets.save_samples(datasets.get("xor").samples, path)
    payload = json.loads(path.read_text(encoding="utf-8"))
    assert payload[3] == {"inputs": [1.0, 1.0], "outputs": [0.0], "label": "XOR: 1,1 → 0"}

    loaded = datasets.load_samples(path)
    assert loaded == datasets.get("xor").samples

    spec = datasets.from_file(path)
    assert spec.name == "xor" and spec.provenance["type"] == "file"


def test_load_samples_rejects_bad_documents(tmp_path):
    not_a_list = tmp_path / "obj.json"
    not_a_list.write_text(json.dumps({"inputs": [1]}))
    with pytest.raises(ValueError):
        datasets.load_samples(not_a_list)

    missing_key = tmp_path / "missing.json"
    missing_key.write_text(json.dumps([{"inputs": [1.0]}]))
    with pytest.raises(ValueError):
        datasets.load_samples(missing_key)


def test_from_file_rejects_samples_with_inconsistent_widths(tmp_path):
    path = tmp_path / "mixed.json"
    path.write_text(
        json.dumps(
            [
                {"inputs": [0.0, 1.0], "outputs": [1.0]},
                {"inputs": [1.0], "outputs": [0.0, 1.0]},
            ]
        )
    )
    with pytest.raises(DimensionMismatchError):
        datasets.from_file(path)


def test_from_file_infers_widths_from_consistent_samples(tmp_path):
    path = tmp_path / "wide.json"
    path.write_text(
        json.dumps([{"inputs": [0.1, 0.2, 0.3], "outputs": [1.0], "label": "a"}] * 3)
    )
    spec = datasets.from_file(path)
    assert (spec.input_size, spec.output_size) == (3, 1)
    assert [s.label for s in spec.samples] == ["a", "a", "a"]
