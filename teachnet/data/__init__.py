"""Training sample sets and import/export helpers."""

from .datasets import (
    DatasetSpec,
    available_datasets,
    default_dataset,
    from_file,
    get,
    load_samples,
    make_sample,
    register_dataset,
    save_samples,
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
