# sviftstats/analysis/shape.py
from __future__ import annotations

from enum import Enum

from sviftstats.core import Dataset, Label, MalformedDatasetError


class ShapeTag(str, Enum):
    """Structural kind of a dataset."""

    SINGLE = "single"   # one value
    ROW = "row"         # one series, any number of labels
    COLUMN = "column"   # several series, one label each
    MULTI = "multi"     # several series x several labels


def classify(dataset: Dataset) -> ShapeTag:
    """
    Return the ShapeTag of `dataset`.

    The checks run in a fixed order and the first match wins; a one-series
    dataset is a ROW even when it has a single label but several values.
    """
    if not dataset.series:
        raise MalformedDatasetError("Cannot classify a dataset without series.")

    n_labels = dataset.n_labels
    n_series = dataset.n_series
    first_n = dataset.series[0].n

    if n_labels <= 1 and n_series <= 1 and first_n <= 1:
        return ShapeTag.SINGLE
    if n_series <= 1:
        return ShapeTag.ROW
    if first_n <= 1 and n_labels <= 1:
        return ShapeTag.COLUMN
    return ShapeTag.MULTI


def extract_series_labels(dataset: Dataset) -> tuple[Label, ...]:
    """Identifiers of every series, in series order."""
    return tuple(s.identifier for s in dataset.series)
