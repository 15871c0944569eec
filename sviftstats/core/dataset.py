# sviftstats/core/dataset.py
from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Iterator

import numpy as np

from .exceptions import MalformedDatasetError, SeriesNotFound, ShapeMismatchError
from .metadata import DatasetMeta
from .series import Label, Series, is_label


def _as_sequence(obj: object, what: str) -> tuple:
    if obj is None:
        raise MalformedDatasetError(f"Dataset.{what} is missing.")
    if isinstance(obj, np.ndarray):
        if obj.ndim != 1:
            raise MalformedDatasetError(f"Dataset.{what} must be 1D, got shape {obj.shape}")
        return tuple(obj.tolist())
    if isinstance(obj, (str, bytes, Mapping)) or not isinstance(obj, Sequence):
        raise MalformedDatasetError(
            f"Dataset.{what} must be a sequence, got {type(obj).__name__}."
        )
    return tuple(obj)


def _plain_label(label: Any) -> Label:
    if isinstance(label, np.generic):
        return label.item()
    return label


@dataclass(frozen=True, slots=True)
class Dataset:
    """
    Dataset = shared axis of labels + one or more series aligned to it.

    Design goals:
    - dict-like access by series identifier: ds["A"]
    - safe + predictable: immutable, structurally validated
    - alignment (equal lengths) is checked by the operations that need it,
      not at construction, so ragged inputs can still be inspected
    """
    labels: tuple[Label, ...] = ()
    series: tuple[Series, ...] = ()
    meta: DatasetMeta = field(default_factory=DatasetMeta, repr=False)

    def __post_init__(self) -> None:
        labels = tuple(_plain_label(lb) for lb in _as_sequence(self.labels, "labels"))
        for lb in labels:
            if not is_label(lb):
                raise MalformedDatasetError(
                    f"Dataset.labels must contain strings or numbers, got {lb!r}."
                )

        series = _as_sequence(self.series, "series")
        for s in series:
            if not isinstance(s, Series):
                raise MalformedDatasetError("Dataset.series values must be Series instances.")

        if not isinstance(self.meta, DatasetMeta):
            raise MalformedDatasetError("Dataset.meta must be a DatasetMeta instance.")

        object.__setattr__(self, "labels", labels)
        object.__setattr__(self, "series", series)

    # ---- dict-like API ----
    def __len__(self) -> int:
        return len(self.series)

    def __iter__(self) -> Iterator[Series]:
        return iter(self.series)

    def __contains__(self, identifier: object) -> bool:
        return any(s.identifier == identifier for s in self.series)

    def __getitem__(self, identifier: Label) -> Series:
        for s in self.series:
            if s.identifier == identifier:
                return s
        raise SeriesNotFound(identifier)

    def get(self, identifier: Label, default: Series | None = None) -> Series | None:
        try:
            return self[identifier]
        except SeriesNotFound:
            return default

    def identifiers(self) -> tuple[Label, ...]:
        return tuple(s.identifier for s in self.series)

    @property
    def n_labels(self) -> int:
        return len(self.labels)

    @property
    def n_series(self) -> int:
        return len(self.series)

    # ---- alignment ----
    def check_alignment(self) -> None:
        """
        Raise ShapeMismatchError unless every series has the same length,
        and that length equals the number of labels.
        """
        lengths = [s.n for s in self.series]
        if len(set(lengths)) > 1:
            raise ShapeMismatchError(
                f"Series lengths differ: {dict(zip(self.identifiers(), lengths))}"
            )
        if lengths and lengths[0] != self.n_labels:
            raise ShapeMismatchError(
                f"Series have {lengths[0]} values but the dataset has {self.n_labels} labels."
            )

    def values_matrix(self) -> np.ndarray:
        """Values as a (n_series, n_values) array; rows follow series order."""
        lengths = {s.n for s in self.series}
        if len(lengths) > 1:
            raise ShapeMismatchError(f"Series lengths differ: {sorted(lengths)}")
        if not self.series:
            return np.empty((0, 0))
        return np.vstack([s.values for s in self.series])

    # ---- serialized dataset-object layout ----
    @classmethod
    def from_dict(cls, obj: Mapping[str, Any], *, meta: DatasetMeta | None = None) -> "Dataset":
        """
        Build a Dataset from the serialized layout:

            {"labels": [...], "data": [{"label": <id>, "data": [numbers]}, ...]}
        """
        if not isinstance(obj, Mapping):
            raise MalformedDatasetError("Dataset object must be a mapping.")
        if "labels" not in obj:
            raise MalformedDatasetError("Dataset object has no 'labels'.")
        if "data" not in obj:
            raise MalformedDatasetError("Dataset object has no 'data'.")

        series: list[Series] = []
        for entry in _as_sequence(obj["data"], "series"):
            if not isinstance(entry, Mapping) or "label" not in entry or "data" not in entry:
                raise MalformedDatasetError(
                    "Each series entry must be a mapping with 'label' and 'data'."
                )
            series.append(Series(identifier=entry["label"], values=entry["data"]))

        return cls(
            labels=obj["labels"],
            series=tuple(series),
            meta=meta if meta is not None else DatasetMeta(),
        )
