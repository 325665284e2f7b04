"""Command-line interface for geojson-gtfs."""

import argparse
import json
import logging
import sys
from typing import Any

from geojson_gtfs.api import convert, validate
from geojson_gtfs.version import VERSION


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def load_config(args: argparse.Namespace) -> dict[str, Any]:
    """Build transform options from the config file and command-line overrides."""
    options: dict[str, Any] = {}
    if args.config:
        with open(args.config, encoding="utf-8") as f:
            options = json.load(f)
        if not isinstance(options, dict):
            raise ValueError(f"Config file {args.config} must contain a JSON object")

    if args.skip_stops_within_distance is not None:
        options["skipStopsWithinDistance"] = args.skip_stops_within_distance
    if args.stop_duration is not None:
        options["stopDuration"] = args.stop_duration

    return options


def cmd_convert(args: argparse.Namespace) -> int:
    """Execute convert command."""
    setup_logging(args.verbose)

    try:
        manifest = convert(
            args.input,
            args.output,
            load_config(args),
            zip_output=args.zip,
            debug_json=args.debug_json,
        )
        print("\nConversion successful!")
        print(f"Output: {args.output}")
        print(f"Stats: {manifest.stats}")
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        logging.exception("Conversion failed")
        return 1


def print_messages(title: str, messages: list[str]) -> None:
    """Print a heading with the message count, then one line per message."""
    if messages:
        print(f"{title} ({len(messages)}):")
        for message in messages:
            print(f"  - {message}")


def cmd_validate(args: argparse.Namespace) -> int:
    """Execute validate command."""
    setup_logging(args.verbose)

    try:
        report = validate(args.input)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        logging.exception("Validation failed")
        return 1

    print("\nValidation successful!" if report.valid else "\nValidation failed!")
    print(f"Stats: {report.stats}")
    print_messages("Errors", report.errors)
    print_messages("Warnings", report.warnings)
    return 0 if report.valid else 1


def main() -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="geojson-gtfs",
        description="Generate a GTFS feed from GeoJSON route geometries",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    # Convert command
    convert_parser = subparsers.add_parser("convert", help="Convert GeoJSON to GTFS")
    convert_parser.add_argument("--input", required=True, help="Path to GeoJSON file")
    convert_parser.add_argument(
        "--output", default="./gtfs", help="Output directory (default: ./gtfs)"
    )
    convert_parser.add_argument(
        "--config",
        help="JSON file with serviceWindows, skipStopsWithinDistance and stopDuration",
    )
    convert_parser.add_argument(
        "--skip-stops-within-distance",
        type=float,
        default=None,
        help="Skip points within this distance of the previous stop, in km",
    )
    convert_parser.add_argument(
        "--stop-duration",
        type=int,
        default=None,
        help="Dwell time at each stop in seconds",
    )
    convert_parser.add_argument(
        "--zip", action="store_true", help="Also write the feed as gtfs.zip"
    )
    convert_parser.add_argument(
        "--debug-json",
        type=lambda x: x.lower() == "true",
        default=False,
        help="Generate debug JSON file (default: false)",
    )
    convert_parser.set_defaults(func=cmd_convert)

    # Validate command
    validate_parser = subparsers.add_parser("validate", help="Validate a GTFS output directory")
    validate_parser.add_argument("--input", required=True, help="Path to output directory")
    validate_parser.set_defaults(func=cmd_validate)

    # Parse and execute
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    sys.exit(args.func(args))


if __name__ == "__main__":
    main()
