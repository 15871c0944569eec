# sviftstats/analysis/aggregate.py
"""
Descriptive statistics at three granularities.

Every statistic is computed
- overall: across all values of all series (series order, then value order)
- per series: one result per series
- per label: one result per label position, across series

Named wrappers drop NaN (missing) values by default; a slice left with
no values raises EmptyReductionError.
"""
from __future__ import annotations

from typing import Any, Callable, NamedTuple, Sequence

import numpy as np

from sviftstats.config import OUTLIER_IQR_FACTOR, QUARTILE_PROBABILITIES
from sviftstats.core import Dataset, EmptyReductionError, MalformedDatasetError

Reducer = Callable[..., Any]


class Aggregate(NamedTuple):
    overall: float
    per_series: tuple[float, ...]
    per_label: tuple[float, ...]


class Outliers(NamedTuple):
    overall: tuple[tuple[int, float], ...]
    per_series: tuple[tuple[tuple[int, float], ...], ...]
    per_label: tuple[tuple[tuple[int, float], ...], ...]


def _reduce(values: np.ndarray, reduce: Reducer, params: tuple, skipna: bool) -> float:
    if skipna:
        values = values[~np.isnan(values)]
    if values.size == 0:
        raise EmptyReductionError("Cannot reduce an empty sequence of values.")
    return float(reduce(values, *params))


def _check(dataset: Dataset) -> np.ndarray:
    if not dataset.series:
        raise MalformedDatasetError("Cannot aggregate a dataset without series.")
    dataset.check_alignment()
    return dataset.values_matrix()


def aggregate(
    dataset: Dataset, reduce: Reducer, *params: Any, skipna: bool = False
) -> Aggregate:
    """
    Apply `reduce(values, *params)` overall, per series and per label position.

    With skipna, NaN values are dropped before each reduction, so a slice
    holding only NaN counts as empty.

    Raises MalformedDatasetError for a dataset without series,
    ShapeMismatchError when series and labels are not aligned, and
    EmptyReductionError when there is nothing to reduce.
    """
    matrix = _check(dataset)
    overall = _reduce(matrix.ravel(), reduce, params, skipna)
    per_series = tuple(_reduce(row, reduce, params, skipna) for row in matrix)
    per_label = tuple(
        _reduce(matrix[:, i], reduce, params, skipna) for i in range(matrix.shape[1])
    )
    return Aggregate(overall, per_series, per_label)


# ---- reducers ----
def _sample_variance(values: np.ndarray) -> float:
    if values.size < 2:
        return float("nan")
    return float(np.var(values, ddof=1))


def _sample_deviation(values: np.ndarray) -> float:
    return float(np.sqrt(_sample_variance(values)))


# ---- named wrappers ----
def mean(dataset: Dataset, *, skipna: bool = True) -> Aggregate:
    return aggregate(dataset, np.mean, skipna=skipna)


def median(dataset: Dataset, *, skipna: bool = True) -> Aggregate:
    return aggregate(dataset, np.median, skipna=skipna)


def sum(dataset: Dataset, *, skipna: bool = True) -> Aggregate:  # noqa: A001
    return aggregate(dataset, np.sum, skipna=skipna)


def min(dataset: Dataset, *, skipna: bool = True) -> Aggregate:  # noqa: A001
    return aggregate(dataset, np.min, skipna=skipna)


def max(dataset: Dataset, *, skipna: bool = True) -> Aggregate:  # noqa: A001
    return aggregate(dataset, np.max, skipna=skipna)


def variance(dataset: Dataset, *, skipna: bool = True) -> Aggregate:
    """Sample (Bessel-corrected) variance; NaN where fewer than two values."""
    return aggregate(dataset, _sample_variance, skipna=skipna)


def deviation(dataset: Dataset, *, skipna: bool = True) -> Aggregate:
    """Sample standard deviation; NaN where fewer than two values."""
    return aggregate(dataset, _sample_deviation, skipna=skipna)


def quantile(dataset: Dataset, p: float, *, skipna: bool = True) -> Aggregate:
    """p-quantile with linear interpolation between closest ranks."""
    if not 0.0 <= p <= 1.0:
        raise ValueError(f"quantile p must be within [0, 1], got {p}")
    return aggregate(dataset, np.quantile, p, skipna=skipna)


def quartiles(dataset: Dataset, *, skipna: bool = True) -> tuple[Aggregate, Aggregate, Aggregate]:
    q1, q2, q3 = (quantile(dataset, p, skipna=skipna) for p in QUARTILE_PROBABILITIES)
    return q1, q2, q3


def summary(dataset: Dataset, *, skipna: bool = True) -> dict[str, Aggregate]:
    """min, max, mean, median and deviation in one mapping."""
    return {
        "min": min(dataset, skipna=skipna),
        "max": max(dataset, skipna=skipna),
        "mean": mean(dataset, skipna=skipna),
        "median": median(dataset, skipna=skipna),
        "deviation": deviation(dataset, skipna=skipna),
    }


# ---- outliers ----
def _outside_fences(
    values: Sequence[float], q1: float, q3: float, factor: float
) -> tuple[tuple[int, float], ...]:
    iqr = q3 - q1
    lower = q1 - factor * iqr
    upper = q3 + factor * iqr
    return tuple(
        (i, float(v)) for i, v in enumerate(values) if v < lower or v > upper
    )


def outliers(dataset: Dataset, factor: float = OUTLIER_IQR_FACTOR) -> Outliers:
    """
    IQR-fence outliers at each granularity.

    Each granularity is fenced with its own quartiles: the overall values with
    the overall Q1/Q3, each series with that series' Q1/Q3, each label
    position with that position's Q1/Q3. Indices are positions in the
    concatenated values, within the series, and across series respectively.
    NaN values are never reported.
    """
    q1, _, q3 = quartiles(dataset)
    matrix = dataset.values_matrix()

    overall = _outside_fences(matrix.ravel(), q1.overall, q3.overall, factor)
    per_series = tuple(
        _outside_fences(row, lo, hi, factor)
        for row, lo, hi in zip(matrix, q1.per_series, q3.per_series)
    )
    per_label = tuple(
        _outside_fences(matrix[:, i], lo, hi, factor)
        for i, (lo, hi) in enumerate(zip(q1.per_label, q3.per_label))
    )
    return Outliers(overall, per_series, per_label)
