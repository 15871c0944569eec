# sviftstats/analysis/__init__.py
"""
Stateless analysis functions over a Dataset.

- shape: ShapeTag classification and series-label extraction
- temporal: temporal label detection and regular-interval detection
- aggregate: statistics overall, per series and per label position

The statistics wrappers (mean, min, sum, ...) shadow builtins, so they are
reached through the module: `from sviftstats.analysis import aggregate as stats`.
"""

from . import aggregate
from .aggregate import Aggregate, Outliers
from .shape import ShapeTag, classify, extract_series_labels
from .temporal import (
    Axis,
    Interval,
    TemporalCheckResult,
    detect_intervals,
    detect_temporal,
    parse_label,
)


__all__ = [
    # shape
    "ShapeTag",
    "classify",
    "extract_series_labels",

    # temporal
    "Axis",
    "Interval",
    "TemporalCheckResult",
    "detect_temporal",
    "detect_intervals",
    "parse_label",

    # statistics
    "aggregate",
    "Aggregate",
    "Outliers",
]
