"""
Centralized configuration for sviftstats.

The date format catalog and the analysis constants live here. The catalog
is an ordered priority list: temporal consistency resolution picks the
first pattern (in this order) that parses every label on an axis.
"""
from __future__ import annotations

import json
import os
from functools import lru_cache
from pathlib import Path

from sviftstats.core.exceptions import ConfigError

# ─── DATE FORMAT CATALOG ─────────────────────────────────────────────────
# strftime/strptime directives. ISO 8601 variants first, most specific
# before least specific, then day-first locale formats, then US month-first.
# %f matches 1-6 fraction digits (".000" milliseconds included) and %z
# matches a "Z" suffix or a +HH:MM / +HHMM offset.
DEFAULT_DATE_FORMATS: tuple[str, ...] = (
    "%Y-%m-%dT%H:%M:%S.%f%z",
    "%Y-%m-%dT%H:%M:%S%z",
    "%Y-%m-%dT%H:%M:%S.%f",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%dT%H:%M",
    "%Y-%m-%d %H:%M:%S.%f",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%d",
    "%Y-%m",
    "%Y",
    "%Y%m%d",
    "%d.%m.%Y %H:%M:%S",
    "%d.%m.%Y %H:%M",
    "%d.%m.%Y",
    "%d.%m.%y",
    "%m.%Y",
    "%d/%m/%Y",
    "%m/%d/%Y",
    "%Y/%m/%d",
    "%d/%m/%y",
    "%m/%d/%y",
    "%d %B %Y",
    "%d %b %Y",
    "%B %d, %Y",
    "%b %d, %Y",
    "%B %Y",
    "%b %Y",
    "%H:%M:%S",
    "%H:%M",
)

# Environment variable naming a JSON file with a replacement catalog
FORMATS_ENV_VAR = "SVIFTSTATS_DATE_FORMATS"

# ─── INTERVAL DETECTION ──────────────────────────────────────────────────
# Fixed unit order of reported intervals
INTERVAL_UNITS: tuple[str, ...] = ("years", "months", "days", "minutes", "seconds")

# ─── STATISTICS ──────────────────────────────────────────────────────────
QUARTILE_PROBABILITIES: tuple[float, float, float] = (0.25, 0.5, 0.75)

# Tukey fences: Q1 - k*IQR, Q3 + k*IQR
OUTLIER_IQR_FACTOR = 1.5


def load_format_catalog(path: str | Path) -> tuple[str, ...]:
    """Read an ordered catalog from a JSON file holding a list of pattern strings."""
    p = Path(path)
    try:
        raw = json.loads(p.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"Cannot read date format catalog '{p}': {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Date format catalog '{p}' is not valid JSON: {e}") from e

    if not isinstance(raw, list) or not raw:
        raise ConfigError(f"Date format catalog '{p}' must be a non-empty JSON list.")
    for fmt in raw:
        if not isinstance(fmt, str) or not fmt:
            raise ConfigError(
                f"Date format catalog '{p}' contains a non-string entry: {fmt!r}"
            )
    return tuple(raw)


@lru_cache(maxsize=1)
def get_format_catalog() -> tuple[str, ...]:
    """
    Process-wide catalog: the file named by $SVIFTSTATS_DATE_FORMATS if set,
    DEFAULT_DATE_FORMATS otherwise. Read once and cached.
    """
    path = os.environ.get(FORMATS_ENV_VAR)
    if path:
        return load_format_catalog(path)
    return DEFAULT_DATE_FORMATS
