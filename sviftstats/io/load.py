# sviftstats/io/load.py
from __future__ import annotations

import json
import struct
from pathlib import Path

import numpy as np
from asammdf import MDF  # ASAM MDF measurement files
from asammdf.blocks.utils import MdfException

from sviftstats.core import Dataset, DatasetMeta, MalformedDatasetError, Series


def load_json(path: str | Path) -> Dataset:
    """Read one serialized dataset object ({"labels": [...], "data": [...]})."""
    p = Path(path)
    try:
        obj = json.loads(p.read_text(encoding="utf-8"))
    except UnicodeDecodeError as e:
        raise MalformedDatasetError(f"'{p}' is not UTF-8 text: {e}") from e
    except json.JSONDecodeError as e:
        raise MalformedDatasetError(f"'{p}' is not valid JSON: {e}") from e

    return Dataset.from_dict(obj, meta=DatasetMeta(source=str(p)))


def json_dataset_paths(directory: str | Path) -> list[Path]:
    """Every *.json file in `directory`, sorted by name."""
    return sorted(Path(directory).glob("*.json"))


def load_mdf(path: str | Path, *, raster: float | None = None) -> Dataset:
    """
    Read an MDF measurement as a Dataset.

    Master timestamps become the labels and each channel becomes a series.
    Channels recorded on different time bases are merged onto one axis by
    asammdf (optionally resampled to `raster` seconds).
    """
    p = Path(path)
    try:
        mdf = MDF(str(p))
    except (MdfException, ValueError, struct.error) as e:
        raise MalformedDatasetError(f"'{p}' is not a readable MDF file: {e}") from e
    try:
        df = mdf.to_dataframe(raster=raster, time_from_zero=False)
    except (MdfException, ValueError, struct.error) as e:
        raise MalformedDatasetError(f"Cannot read the channels of '{p}': {e}") from e
    finally:
        mdf.close()

    labels = [float(t) for t in df.index]
    series = tuple(
        Series(identifier=str(name), values=df[name].to_numpy(dtype=np.float64))
        for name in df.columns
    )
    return Dataset(
        labels=labels,
        series=series,
        meta=DatasetMeta(source=str(p), attrs={"kind": "mdf_import"}),
    )
