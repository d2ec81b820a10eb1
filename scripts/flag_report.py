#!/usr/bin/env python3
"""
Print out-of-range flags and chart reference ranges for a data file.

Usage:
    python scripts/flag_report.py                                   # Bundled fixture
    python scripts/flag_report.py --data path/to/data.json          # Custom data set
    python scripts/flag_report.py --only-flagged                    # Out-of-range only

Reads a ``{parameterName: [Measurement, ...]}`` JSON document and prints,
per parameter, the latest measurement's flag and the reference range the
evolution chart draws (taken from the first measurement).
"""
import argparse
import sys
from pathlib import Path

from pydantic import ValidationError

from labtrend.config import DEFAULT_DATA_FILE
from labtrend.repositories.measurements import MeasurementStore
from labtrend.services.annotation_builder import representative_range
from labtrend.services.range_parser import format_ref_range
from labtrend.services.status_classifier import (
    classify_parameters,
    flag_marker,
    select_latest,
)


def build_report(store: MeasurementStore, only_flagged: bool = False) -> list[str]:
    """Format one report line per parameter, in selector order."""
    data = store.all()
    lines: list[str] = []
    for name, flag in classify_parameters(data).items():
        if only_flagged and not flag.out_of_range:
            continue
        latest = select_latest(data[name])
        ref = representative_range(data[name])
        lines.append(
            f"{name}{flag_marker(flag)}\t{flag.trend}\t"
            f"latest={latest.value:g} {latest.unit} ({latest.date})\t"
            f"chart_ref={format_ref_range(ref)}"
        )
    return lines


def main():
    parser = argparse.ArgumentParser(
        description="Report blood-test flags and chart reference ranges"
    )
    parser.add_argument(
        "--data",
        type=Path,
        default=DEFAULT_DATA_FILE,
        help=f"JSON data file (default: {DEFAULT_DATA_FILE})",
    )
    parser.add_argument(
        "--only-flagged",
        action="store_true",
        help="Only list parameters whose latest value is out of range",
    )
    args = parser.parse_args()

    try:
        store = MeasurementStore.from_file(args.data)
    except FileNotFoundError:
        print(f"Data file not found: {args.data}")
        sys.exit(1)
    except (ValueError, ValidationError) as exc:
        print(f"Invalid data file {args.data}: {exc}")
        sys.exit(1)

    for line in build_report(store, only_flagged=args.only_flagged):
        print(line)


if __name__ == "__main__":
    main()
