# sviftstats/core/exceptions.py
from __future__ import annotations


class CoreError(Exception):
    """Base error for all sviftstats exceptions."""


# ---- Structural errors ----
class MalformedDatasetError(CoreError):
    """Raised when a Dataset is missing labels/series or they are not sequences."""


class InvalidSeries(MalformedDatasetError):
    """Raised when a Series is constructed with invalid inputs."""


class ShapeMismatchError(CoreError):
    """Raised when series lengths differ from each other or from the labels."""


# ---- Reduction errors ----
class EmptyReductionError(CoreError, ValueError):
    """Raised when a reduction is attempted over zero values."""


# ---- Lookup errors (also behave like KeyError for dict-like APIs) ----
class SeriesNotFound(CoreError, KeyError):
    """Raised when a requested series identifier is not present."""


# ---- Configuration ----
class ConfigError(CoreError):
    """Raised when the date format catalog cannot be loaded."""
