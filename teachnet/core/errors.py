"""Exception and warning types raised by the network engine."""

from __future__ import annotations


class InvalidTopologyError(ValueError):
    """Raised when a layer width is not a positive integer."""


class DimensionMismatchError(ValueError):
    """Raised when two vectors that must align have different lengths."""


class TruncatedInputWarning(UserWarning):
    """Emitted when forward/backward silently pads or drops vector entries."""


__all__ = ["InvalidTopologyError", "DimensionMismatchError", "TruncatedInputWarning"]
