"""Reporting utilities for teachnet."""

from .artifacts import write_manifest
from .metrics import CsvSink, JsonlSink
from .plots import PlotAdapter
from .snapshot import network_snapshot, write_snapshot

__all__ = [
    "write_manifest",
    "CsvSink",
    "JsonlSink",
    "PlotAdapter",
    "network_snapshot",
    "write_snapshot",
]
