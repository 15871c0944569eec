# sviftstats/core/__init__.py
"""
Core domain objects for sviftstats.

This module defines the dataset-object data model:
- Series: identifier + 1D numeric values
- Dataset: shared label axis + ordered series aligned to it
- DatasetMeta: provenance attached by loaders

The core layer is independent from I/O and from the analysis functions.
"""

from .series import Label, Series
from .dataset import Dataset
from .metadata import DatasetMeta
from .exceptions import (
    CoreError,
    MalformedDatasetError,
    InvalidSeries,
    ShapeMismatchError,
    EmptyReductionError,
    SeriesNotFound,
    ConfigError,
)


__all__ = [
    # domain objects
    "Label",
    "Series",
    "Dataset",

    # metadata
    "DatasetMeta",

    # exceptions
    "CoreError",
    "MalformedDatasetError",
    "InvalidSeries",
    "ShapeMismatchError",
    "EmptyReductionError",
    "SeriesNotFound",
    "ConfigError",
]
