#!/usr/bin/env python3
"""CLI entry point for the trip builder.

Usage:
    python build_trips.py input.txt --based-city MAD [--time-zone Europe/Madrid]

Options:
    --based-city IATA   Home city code (default: BASED_CITY from .env)
    --time-zone ZONE    IANA zone for the times in the file (default: inferred)
    --format FMT        Output format: text, json, csv, all (default: text)
    --output-dir DIR    Directory for json/csv files (default: output/)
    --quiet             Do not print progress to stderr
"""

import argparse
import sys
from pathlib import Path

from itinerary_trips.config import BASED_CITY, INPUT_PATH, OUTPUT_DIR, TIME_ZONE
from itinerary_trips.errors import ContextError
from itinerary_trips.output import format_errors, format_trips, trips_to_csv, trips_to_json
from itinerary_trips.pipeline import run_pipeline


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Build trips from a plain-text reservation itinerary.",
    )
    parser.add_argument(
        "input",
        nargs="?",
        default=INPUT_PATH,
        help="Path to the itinerary text file",
    )
    parser.add_argument(
        "--based-city",
        default=BASED_CITY,
        help="Home IATA code",
    )
    parser.add_argument(
        "--time-zone",
        default=TIME_ZONE,
        help="IANA time zone used to read the times in the file",
    )
    parser.add_argument(
        "--format",
        choices=["text", "json", "csv", "all"],
        default="text",
        help="Output format (text, json, csv, all)",
    )
    parser.add_argument(
        "--output-dir",
        default=str(OUTPUT_DIR),
        help="Output directory for json/csv",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Don't print progress to stderr",
    )
    args = parser.parse_args(argv)

    input_path = Path(args.input)
    try:
        text = input_path.read_text(encoding="utf-8")
    except OSError as e:
        print(f"Cannot read {input_path}: {e}", file=sys.stderr)
        return 2

    try:
        trips, errors = run_pipeline(
            text,
            based_city=args.based_city,
            time_zone=args.time_zone,
            verbose=not args.quiet,
        )
    except ContextError as e:
        print(f"Invalid context: {e}", file=sys.stderr)
        return 2

    if args.format in ("text", "all"):
        print(format_trips(trips))

    output_dir = Path(args.output_dir)
    if args.format in ("json", "all"):
        json_path = output_dir / "trips.json"
        trips_to_json(trips, errors, json_path)
        print(f"JSON written to: {json_path}", file=sys.stderr)

    if args.format in ("csv", "all"):
        csv_path = output_dir / "trips.csv"
        trips_to_csv(trips, csv_path)
        print(f"CSV written to: {csv_path}", file=sys.stderr)

    if errors:
        print(format_errors(errors), file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
