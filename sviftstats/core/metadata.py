# sviftstats/core/metadata.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .exceptions import MalformedDatasetError


@dataclass(frozen=True, slots=True)
class DatasetMeta:
    """
    Metadata attached to a Dataset.

    - description: human-friendly description
    - source: origin (file path, MDF measurement, ...)
    - attrs: arbitrary additional fields
    """
    description: str | None = None
    source: str | None = None
    attrs: dict[str, Any] = field(default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        if self.attrs is None:
            object.__setattr__(self, "attrs", {})
        elif not isinstance(self.attrs, dict):
            raise MalformedDatasetError("DatasetMeta.attrs must be a dict.")
