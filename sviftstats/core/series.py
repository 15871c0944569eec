# sviftstats/core/series.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

import numpy as np

from .exceptions import InvalidSeries


# A label names a position on an axis: an x-axis category, a timestamp, a year...
Label = Union[str, int, float]


def is_label(obj: object) -> bool:
    # bool is an int subclass but never a meaningful label
    return isinstance(obj, (str, int, float, np.integer, np.floating)) and not isinstance(
        obj, (bool, np.bool_)
    )


@dataclass(frozen=True, slots=True)
class Series:
    """Immutable named sequence of numeric values aligned to a dataset's labels."""

    identifier: Label
    values: np.ndarray = field(repr=False)

    def __post_init__(self) -> None:
        if not is_label(self.identifier):
            raise InvalidSeries(
                f"Series.identifier must be a string or number, got {type(self.identifier).__name__}."
            )
        if isinstance(self.values, (str, bytes)):
            raise InvalidSeries("Series.values must be a sequence of numbers, not a string.")

        try:
            v = np.asarray(self.values, dtype=float)
        except (TypeError, ValueError) as e:
            raise InvalidSeries(
                f"Series '{self.identifier}' contains non-numeric values."
            ) from e

        if v.ndim != 1:
            raise InvalidSeries(f"`values` must be 1D, got shape {v.shape}")

        object.__setattr__(self, "values", v)

    @property
    def n(self) -> int:
        return int(self.values.size)

    def __len__(self) -> int:
        return self.n
