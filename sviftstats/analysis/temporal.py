# sviftstats/analysis/temporal.py
from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Sequence

import numpy as np

from sviftstats.config import INTERVAL_UNITS, get_format_catalog
from sviftstats.core import Dataset, Label

from .calendar import diff
from .shape import extract_series_labels

_DIRECTIVE = re.compile(r"%.")
_FRACTION = re.compile(r"\d{1,6}")
_OFFSET = re.compile(r"Z|(?P<sign>[+-])(?P<hh>\d{2}):?(?P<mm>\d{2})")


class Axis(str, Enum):
    """Which labels to test: the shared label axis (x) or the series identifiers (y)."""

    LABELS = "x"
    SERIES = "y"


@dataclass(frozen=True, slots=True)
class TemporalCheckResult:
    """
    Outcome of detect_temporal.

    is_consistent is None when consistency was not requested or the axis is
    not temporal; parsed_values is None unless the axis is consistent and
    materialization was requested.
    """
    is_temporal: bool
    is_consistent: bool | None = None
    parsed_values: tuple[datetime, ...] | None = None
    format: str | None = None
    candidates: tuple[tuple[int, ...], ...] = ()


@dataclass(frozen=True, slots=True)
class Interval:
    unit: str
    value: float


def _label_text(label: Label) -> str | None:
    if isinstance(label, str):
        return label
    if isinstance(label, (int, np.integer)) and not isinstance(label, (bool, np.bool_)):
        return str(int(label))
    return None


def _split_format(fmt: str) -> list[tuple[str, str]]:
    """Split `fmt` into ("chunk", text) parts and the ("%f" | "%z", "") directives."""
    parts: list[tuple[str, str]] = []
    start = 0
    for m in _DIRECTIVE.finditer(fmt):
        if m.group() in ("%f", "%z"):
            parts.append(("chunk", fmt[start:m.start()]))
            parts.append((m.group(), ""))
            start = m.end()
    parts.append(("chunk", fmt[start:]))
    return parts


def _renders_back(value: datetime, fmt: str, text: str) -> bool:
    # %f accepts 1-6 digits and %z accepts Z, +HHMM or +HH:MM, so those two
    # fields are checked by value; everything else must render identically.
    pos = 0
    for kind, chunk in _split_format(fmt):
        if kind == "%f":
            m = _FRACTION.match(text, pos)
            if m is None or int(m.group().ljust(6, "0")) != value.microsecond:
                return False
            pos = m.end()
        elif kind == "%z":
            m = _OFFSET.match(text, pos)
            if m is None:
                return False
            if m.group() == "Z":
                offset = timedelta(0)
            else:
                sign = -1 if m.group("sign") == "-" else 1
                offset = sign * timedelta(hours=int(m.group("hh")), minutes=int(m.group("mm")))
            if value.utcoffset() != offset:
                return False
            pos = m.end()
        else:
            rendered = value.strftime(chunk)
            if not text.startswith(rendered, pos):
                return False
            pos += len(rendered)
    return pos == len(text)


def parse_label(label: Label, fmt: str, strict: bool = True) -> datetime | None:
    """
    Parse `label` with the strptime pattern `fmt`, or return None.

    strict additionally requires the parsed value to format back to the same
    text, which rejects unpadded fields such as "2020-1-5" for "%Y-%m-%d".
    Fractions (%f) may have 1 to 6 digits and offsets (%z) may be written
    as Z, +HHMM or +HH:MM.
    """
    text = _label_text(label)
    if text is None:
        return None
    try:
        value = datetime.strptime(text, fmt)
    except ValueError:
        return None
    if strict and not _renders_back(value, fmt, text):
        return None
    return value


def _axis_labels(dataset: Dataset, axis: Axis | str) -> tuple[Label, ...]:
    if Axis(axis) is Axis.SERIES:
        return extract_series_labels(dataset)
    return dataset.labels


def _candidate_sets(labels: Sequence[Label], formats: Sequence[str]) -> tuple[tuple[int, ...], ...]:
    return tuple(
        tuple(i for i, fmt in enumerate(formats) if parse_label(label, fmt) is not None)
        for label in labels
    )


def _common_format(candidates: Sequence[tuple[int, ...]]) -> int | None:
    first, rest = candidates[0], candidates[1:]
    for index in first:
        if all(index in other for other in rest):
            return index
    return None


def detect_temporal(
    dataset: Dataset,
    axis: Axis | str = Axis.LABELS,
    check_consistency: bool = False,
    materialize_values: bool = False,
    *,
    formats: Sequence[str] | None = None,
) -> TemporalCheckResult:
    """
    Decide whether the labels on `axis` are temporal.

    Every label is matched against every catalog pattern. The axis is
    temporal when each label matched at least one pattern. It is consistent
    when one pattern matched all labels; the first such pattern in catalog
    order wins and is used to materialize parsed values.
    """
    labels = _axis_labels(dataset, axis)
    if not labels:
        return TemporalCheckResult(is_temporal=False)

    catalog = tuple(formats) if formats is not None else get_format_catalog()
    candidates = _candidate_sets(labels, catalog)
    is_temporal = all(candidates)

    if not (is_temporal and check_consistency):
        return TemporalCheckResult(is_temporal=is_temporal, candidates=candidates)

    winner = _common_format(candidates)
    if winner is None:
        return TemporalCheckResult(
            is_temporal=True, is_consistent=False, candidates=candidates
        )

    fmt = catalog[winner]
    parsed = None
    if materialize_values:
        parsed = tuple(parse_label(label, fmt) for label in labels)

    return TemporalCheckResult(
        is_temporal=True,
        is_consistent=True,
        parsed_values=parsed,
        format=fmt,
        candidates=candidates,
    )


def detect_intervals(values: Sequence[datetime]) -> tuple[Interval, ...]:
    """
    Units on which every consecutive pair of `values` differs by exactly the
    same amount, in INTERVAL_UNITS order. Fewer than two values -> ().
    """
    if len(values) < 2:
        return ()

    steps = [
        [diff(values[i], values[i - 1], unit) for unit in INTERVAL_UNITS]
        for i in range(1, len(values))
    ]

    intervals: list[Interval] = []
    for u, unit in enumerate(INTERVAL_UNITS):
        first = steps[0][u]
        if all(step[u] == first for step in steps):
            intervals.append(Interval(unit=unit, value=first))
    return tuple(intervals)
