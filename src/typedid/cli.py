"""Command-line interface for typed identifier transforms."""

import argparse
import json
import logging
import sys
from pathlib import Path

from .config import load_field_mappings
from .detect import PatternDetector, safe_detect
from .exceptions import TypedIdError
from .pipeline import run_mappings
from .settings import JsonFieldSettingsStore
from .sources import load_bib_records, load_json_records
from .transform import TypedIdentifierTransform


def setup_logging(verbosity: int = 0) -> None:
    """Configure logging for the CLI application.

    Args:
        verbosity: Logging verbosity level (0=WARNING, 1=INFO, 2+=DEBUG)
    """
    level = {0: logging.WARNING, 1: logging.INFO}.get(verbosity, logging.DEBUG)
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s:%(lineno)d – %(message)s",
    )


def cmd_transform(args: argparse.Namespace) -> None:
    """Transform source records into typed identifier items."""
    logger = logging.getLogger(__name__)

    input_path = Path(args.input)
    input_format = args.format or ("bib" if input_path.suffix == ".bib" else "json")

    try:
        mappings = load_field_mappings(Path(args.mappings))

        if input_format == "bib":
            records = load_bib_records(input_path)
        else:
            records = load_json_records(input_path)

        store = JsonFieldSettingsStore(Path(args.settings)) if args.settings else None
        detector = None if args.no_detect else PatternDetector()
        transformer = TypedIdentifierTransform(store=store, detector=detector)

        results = run_mappings(records, mappings, transformer)

        if args.output:
            output_path = Path(args.output)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            with open(output_path, "w", encoding="utf-8") as f:
                json.dump(results, f, indent=2, ensure_ascii=False)
            logger.info(f"✓ Wrote {len(results)} records to {output_path}")
        else:
            json.dump(results, sys.stdout, indent=2, ensure_ascii=False)
            sys.stdout.write("\n")

        sys.exit(0)

    except (FileNotFoundError, TypedIdError) as e:
        logger.error(f"Transform error: {e}")
        sys.exit(1)


def cmd_detect(args: argparse.Namespace) -> None:
    """Print the detected identifier type of each value."""
    detector = PatternDetector()

    for value in args.values:
        detected = safe_detect(detector, value)
        result = (
            {"itemtype": detected.itemtype, "itemvalue": detected.itemvalue}
            if detected is not None
            else None
        )
        print(json.dumps({"value": value, "detected": result}, ensure_ascii=False))

    sys.exit(0)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="typed-ids",
        description="Classify identifier maps into typed identifier items.",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (use -v for INFO, -vv for DEBUG)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # transform subcommand
    transform_parser = subparsers.add_parser(
        "transform", help="Apply field mappings to a records file"
    )
    transform_parser.add_argument(
        "--mappings", required=True, help="JSON file of destination field mappings"
    )
    transform_parser.add_argument(
        "--input", required=True, help="Records file (.json records or .bib library)"
    )
    transform_parser.add_argument(
        "--settings", help="JSON file of field settings with allowed identifier types"
    )
    transform_parser.add_argument(
        "--format",
        choices=["json", "bib"],
        help="Input format (default: guessed from the file extension)",
    )
    transform_parser.add_argument(
        "-o", "--output", help="Output file path (default: standard output)"
    )
    transform_parser.add_argument(
        "--no-detect",
        action="store_true",
        help="Disable identifier type detection for the 'id' key",
    )
    transform_parser.set_defaults(func=cmd_transform)

    # detect subcommand
    detect_parser = subparsers.add_parser(
        "detect", help="Detect identifier types from bare values"
    )
    detect_parser.add_argument("values", nargs="+", help="Identifier values to inspect")
    detect_parser.set_defaults(func=cmd_detect)

    return parser


def main() -> None:
    """Main entry point for the typed-ids CLI."""
    parser = create_parser()
    args = parser.parse_args()

    # Setup logging based on verbosity
    setup_logging(args.verbose)

    # Handle case where no subcommand is provided
    if not hasattr(args, "func"):
        parser.print_help()
        sys.exit(1)

    # Execute the subcommand
    args.func(args)


if __name__ == "__main__":
    main()
