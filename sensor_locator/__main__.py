"""
CLI entry point for the Sensor Locator.

Usage:
    python -m sensor_locator locate <input.csv> <output.kml> [options]
    python -m sensor_locator batch <directory> [options]
    python -m sensor_locator decode <hex> <length>
"""

import argparse
import glob
import os
import sys

from .config import COLUMN_MODES, LocatorConfig, load_config
from .constants import INTERMEDIATE_FILE_EXTENSION
from .errors import TelemetryDecodeError
from .fields import FieldDecoder
from .hexcodec import HexDecoder
from .logger import setup_logging
from .pipeline import run_pipeline


def _add_run_options(parser: argparse.ArgumentParser):
    parser.add_argument(
        "--config",
        default=None,
        help="Path to a locator YAML configuration file",
    )
    parser.add_argument(
        "--columns",
        choices=COLUMN_MODES,
        default=None,
        help="Column resolution strategy (default: fixed)",
    )
    parser.add_argument(
        "--offsets",
        type=int,
        nargs=4,
        metavar=("TIME", "SENSOR_ID", "LENGTH", "DATA"),
        default=None,
        help="Fixed column offsets (default: 38 43 44 45)",
    )
    parser.add_argument(
        "--required-columns",
        type=int,
        default=None,
        help="Minimum cells per row in fixed mode (default: 46)",
    )
    parser.add_argument(
        "--event-marker",
        default=None,
        help="Only rows containing this string are decoded (default: Event-A)",
    )
    parser.add_argument(
        "--require-all-columns",
        action="store_true",
        default=None,
        help="Fail when a header column is missing (header mode)",
    )
    parser.add_argument(
        "--intermediate",
        action="store_true",
        help=f"Also write the decoded records to <input>{INTERMEDIATE_FILE_EXTENSION}",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set the logging level (default: WARNING, or the --log-config levels)",
    )
    parser.add_argument(
        "--log-config",
        default=None,
        help="Path to a YAML logging configuration",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Print detailed progress",
    )


def build_config(args) -> LocatorConfig:
    config = load_config(args.config)
    return config.with_overrides(
        column_mode=args.columns,
        column_offsets=tuple(args.offsets) if args.offsets else None,
        required_columns=args.required_columns,
        event_marker=args.event_marker,
        require_all_columns=args.require_all_columns,
    )


def _run_one(args, config: LocatorConfig, input_path: str, output_path: str, report_path=None):
    intermediate = input_path + INTERMEDIATE_FILE_EXTENSION if args.intermediate else None
    report = run_pipeline(
        input_path,
        output_path,
        config=config,
        verbose=args.verbose,
        intermediate_path=intermediate,
        report_path=report_path,
    )
    meta = report.metadata
    print(
        f"{meta['source_file']}: {meta['processed_rows']} rows decoded, "
        f"{meta['skipped_rows']} skipped, {meta['nodes']} placemarks -> {output_path}"
    )
    return report


def _decode_command(args) -> int:
    try:
        text = HexDecoder().decode_text(args.hex, args.length)
        fields = FieldDecoder().decode_all(text)
    except TelemetryDecodeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    print(f"payload: {text!r}")
    for f in fields:
        print(f"  {f.code}: {f.render()}")
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog="sensor_locator",
        description="Decode sensor telemetry CSV exports into KML placemarks",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # --- locate command ---
    locate_parser = subparsers.add_parser(
        "locate",
        help="Decode one CSV export into a KML file",
    )
    locate_parser.add_argument("input", help="Path to the CSV export")
    locate_parser.add_argument("output", help="Path of the KML file to write")
    locate_parser.add_argument(
        "--report",
        default=None,
        help="Write a JSON run report to this path",
    )
    _add_run_options(locate_parser)

    # --- batch command ---
    batch_parser = subparsers.add_parser(
        "batch",
        help="Decode every CSV export in a directory",
    )
    batch_parser.add_argument("directory", help="Directory containing .csv files")
    batch_parser.add_argument(
        "--output-dir", "-o",
        default="./kml",
        help="Output directory (default: ./kml)",
    )
    _add_run_options(batch_parser)

    # --- decode command ---
    decode_parser = subparsers.add_parser(
        "decode",
        help="Decode a single hex payload and print its fields",
    )
    decode_parser.add_argument("hex", help="Hex payload, e.g. 50:31:32:33:2c:34:35:36")
    decode_parser.add_argument("length", type=int, help="Declared payload length in bytes")

    args = parser.parse_args(argv)

    if args.command == "decode":
        return _decode_command(args)

    setup_logging(args.log_level, args.log_config)
    try:
        config = build_config(args)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.command == "locate":
        if not os.path.exists(args.input):
            print(f"Error: File not found: {args.input}", file=sys.stderr)
            return 1
        try:
            _run_one(args, config, args.input, args.output, report_path=args.report)
        except (OSError, ValueError, TelemetryDecodeError) as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

    elif args.command == "batch":
        if not os.path.isdir(args.directory):
            print(f"Error: Directory not found: {args.directory}", file=sys.stderr)
            return 1

        files = sorted(glob.glob(os.path.join(args.directory, "*.csv")))
        if not files:
            print(f"No .csv files found in {args.directory}")
            return 1

        os.makedirs(args.output_dir, exist_ok=True)
        print(f"Found {len(files)} files to process")
        failures = 0
        for i, filepath in enumerate(files, 1):
            basename = os.path.splitext(os.path.basename(filepath))[0]
            output_path = os.path.join(args.output_dir, basename + ".kml")
            print(f"\n[{i}/{len(files)}] Processing {os.path.basename(filepath)}...")
            try:
                _run_one(args, config, filepath, output_path)
            except (OSError, ValueError, TelemetryDecodeError) as e:
                print(f"  ERROR: {e}")
                failures += 1
                continue

        print(f"\nBatch complete. Results in {args.output_dir}/")
        return 1 if failures == len(files) else 0

    return 0


if __name__ == "__main__":
    sys.exit(main())
