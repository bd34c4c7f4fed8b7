from __future__ import annotations


class RampaError(ValueError):
    """Base class for every error raised by rampa."""


class InvalidColorInput(RampaError):
    """Color text (or value) that cannot be parsed."""


class InvalidConfiguration(RampaError):
    """Step counts, anchors or mode names outside what the engines accept."""


class NumericDegenerate(RampaError):
    """NaN/Infinity or an unusable intermediate value inside a computation.

    Never escapes the pipeline: the catch points in ``rampa.ramp`` replace
    it with a deterministic fallback color.
    """


__all__ = [
    "RampaError",
    "InvalidColorInput",
    "InvalidConfiguration",
    "NumericDegenerate",
]
