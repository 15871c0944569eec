"""
sviftstats command line report.

Usage:
    sviftstats PATH [PATH ...] [--formats FILE] [-v | -q]

Each PATH is a JSON dataset object, a directory of them, or an MDF file
(.mf4/.mdf). For every dataset the report lists its shape, whether each
axis is temporal/consistent (and its regular intervals), its quartiles
and the overall min, max, mean, median and deviation.

Examples:
    sviftstats test/datasets
    sviftstats sales.json --formats my_formats.json -v
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from sviftstats.analysis import Axis, classify, detect_intervals, detect_temporal
from sviftstats.analysis import aggregate as stats
from sviftstats.config import get_format_catalog, load_format_catalog
from sviftstats.core import CoreError, Dataset
from sviftstats.io.load import json_dataset_paths, load_json, load_mdf

logger = logging.getLogger(__name__)

MDF_SUFFIXES = {".mf4", ".mdf"}


def _dataset_files(path: Path) -> list[Path]:
    if path.is_dir():
        return json_dataset_paths(path)
    return [path]


def _load(path: Path) -> Dataset:
    if path.suffix.lower() in MDF_SUFFIXES:
        return load_mdf(path)
    return load_json(path)


def _fmt(value: float) -> str:
    return f"{value:.6g}"


def _fmt_all(values: Sequence[float]) -> str:
    return "[" + ", ".join(_fmt(v) for v in values) + "]"


def report(name: str, dataset: Dataset, formats: Sequence[str]) -> list[str]:
    """Build the report lines for one dataset."""
    lines = [f"{name} shape {classify(dataset).value}"]

    for axis in Axis:
        result = detect_temporal(dataset, axis, True, True, formats=formats)
        logger.debug("%s %s candidates %s", name, axis.value, result.candidates)

        if not result.is_temporal:
            lines.append(f"{name} {axis.value} isTemporal false")
            continue
        lines.append(f"{name} {axis.value} isTemporal true")
        if not result.is_consistent:
            lines.append(f"{name} {axis.value} isConsistent false")
            continue
        lines.append(f"{name} {axis.value} isConsistent true ({result.format})")

        intervals = detect_intervals(result.parsed_values or ())
        if intervals:
            found = ", ".join(f"{i.unit}={_fmt(i.value)}" for i in intervals)
        else:
            found = "none"
        lines.append(f"{name} {axis.value} intervals {found}")

    for label, q in zip(("q1", "q2", "q3"), stats.quartiles(dataset)):
        lines.append(
            f"{name} {label} overall={_fmt(q.overall)} "
            f"per_series={_fmt_all(q.per_series)} "
            f"per_label={_fmt_all(q.per_label)}"
        )

    overall = {key: _fmt(agg.overall) for key, agg in stats.summary(dataset).items()}
    lines.append(f"{name} overall " + " ".join(f"{k}={v}" for k, v in overall.items()))
    return lines


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sviftstats",
        description="Shape, temporal and statistical report for dataset objects.",
        epilog=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("paths", nargs="+", type=Path, help="dataset files or directories")
    parser.add_argument(
        "--formats", type=Path, default=None,
        help="JSON list of strptime patterns replacing the default catalog",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="warnings only")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.WARNING if args.quiet else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s - %(levelname)s - %(message)s")

    try:
        formats = load_format_catalog(args.formats) if args.formats else get_format_catalog()
    except CoreError as e:
        logger.error("%s", e)
        return 2

    failed = 0
    analysed = 0
    for path in args.paths:
        if not path.exists():
            logger.error("%s: no such file or directory", path)
            failed += 1
            continue
        for file_path in _dataset_files(path):
            try:
                lines = report(file_path.name, _load(file_path), formats)
            except (CoreError, OSError) as e:
                logger.error("%s: %s", file_path, e)
                failed += 1
                continue
            print("\n".join(lines))
            print("--------")
            analysed += 1

    logger.info("analysed %d dataset(s), %d failure(s)", analysed, failed)
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
