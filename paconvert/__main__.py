"""CLI entry point for paconvert.

Usage:
    python -m paconvert convert screen.yaml -o modern.yaml --log
    python -m paconvert info screen.yaml
    python -m paconvert mappings export -o mappings.json
    python -m paconvert sample gallery
"""

import argparse
import json
import sys
from pathlib import Path

from dotenv import load_dotenv

from paconvert.config import EnvVar, get_environment, get_mappings
from paconvert.core import ConversionError, get_logger, parse_level, setup_logging
from paconvert.dialect import extract_control_info, validate
from paconvert.engine import ConversionEngine, sample_classic_yaml
from paconvert.mapping import MappingConfiguration

logger = get_logger("paconvert.cli")


def _read_input(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def _write_output(text: str, output: Path | None) -> None:
    if output is None:
        sys.stdout.write(text)
        return
    output.write_text(text, encoding="utf-8")
    logger.info(f"Saved to {output}")


# =============================================================================
# Commands
# =============================================================================


def cmd_convert(args: argparse.Namespace) -> int:
    """Handle the convert command."""
    engine = ConversionEngine(get_mappings(args.mappings))
    text = _read_input(args.input)

    try:
        result = engine.convert_with_log(text)
    finally:
        if args.log:
            timestamps = get_environment(EnvVar.PACONVERT_LOG_TIMESTAMPS)
            for entry in engine.get_conversion_log():
                print(entry.format(timestamps=timestamps), file=sys.stderr)

    _write_output(result.output, args.output)
    logger.info(f"Converted {result.classic_type} -> {result.modern_type}")
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    """Handle the validate command."""
    if validate(_read_input(args.input)):
        print("valid")
        return 0
    print("invalid")
    return 1


def cmd_info(args: argparse.Namespace) -> int:
    """Handle the info command."""
    info = extract_control_info(_read_input(args.input))
    if info is None:
        logger.error("No control definition found in input")
        return 1

    print(f"Name:    {info.name}")
    print(f"Type:    {info.bare_type}")
    print(f"Version: {info.version or '-'}")
    return 0


def cmd_mappings_export(args: argparse.Namespace) -> int:
    """Handle the mappings export command."""
    data = get_mappings(args.mappings).to_data()
    _write_output(json.dumps(data, indent=2) + "\n", args.output)
    return 0


def cmd_mappings_check(args: argparse.Namespace) -> int:
    """Handle the mappings check command."""
    config = MappingConfiguration.from_json(_read_input(args.file))
    print(
        f"OK: {len(config.control_types)} control types, "
        f"{len(config.properties)} property tables, "
        f"{len(config.defaults)} default sets"
    )
    return 0


def cmd_sample(args: argparse.Namespace) -> int:
    """Handle the sample command."""
    try:
        sys.stdout.write(sample_classic_yaml(args.kind))
    except KeyError as e:
        logger.error(e.args[0])
        return 1
    return 0


# =============================================================================
# Parser
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="paconvert",
        description="Convert classic Power Apps control YAML to modern controls",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Logger level (default: PACONVERT_LOG_LEVEL or WARNING)",
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    convert_parser = subparsers.add_parser(
        "convert",
        help="Convert a classic control document",
    )
    convert_parser.add_argument("input", help="Input file, or - for stdin")
    convert_parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Output file path (prints to stdout if not specified)",
    )
    convert_parser.add_argument(
        "--mappings",
        "-m",
        type=Path,
        default=None,
        help="Mapping JSON file (default: PACONVERT_MAPPINGS_FILE)",
    )
    convert_parser.add_argument(
        "--log",
        action="store_true",
        help="Print the conversion log to stderr",
    )
    convert_parser.set_defaults(func=cmd_convert)

    validate_parser = subparsers.add_parser(
        "validate",
        help="Check whether input looks like a control document",
    )
    validate_parser.add_argument("input", help="Input file, or - for stdin")
    validate_parser.set_defaults(func=cmd_validate)

    info_parser = subparsers.add_parser(
        "info",
        help="Show the name and type of the declared control",
    )
    info_parser.add_argument("input", help="Input file, or - for stdin")
    info_parser.set_defaults(func=cmd_info)

    mappings_parser = subparsers.add_parser(
        "mappings",
        help="Export or check mapping tables",
    )
    mappings_sub = mappings_parser.add_subparsers(dest="mappings_command")

    export_parser = mappings_sub.add_parser(
        "export",
        help="Write the active mapping tables as JSON",
    )
    export_parser.add_argument("--output", "-o", type=Path, default=None)
    export_parser.add_argument(
        "--mappings",
        "-m",
        type=Path,
        default=None,
        help="Mapping JSON file to layer in before exporting",
    )
    export_parser.set_defaults(func=cmd_mappings_export)

    check_parser = mappings_sub.add_parser(
        "check",
        help="Validate a mapping JSON file",
    )
    check_parser.add_argument("file", help="Mapping file, or - for stdin")
    check_parser.set_defaults(func=cmd_mappings_check)

    sample_parser = subparsers.add_parser(
        "sample",
        help="Print a sample classic document",
    )
    sample_parser.add_argument(
        "kind",
        nargs="?",
        default="button",
        help="Sample kind: button, gallery or form (default: button)",
    )
    sample_parser.set_defaults(func=cmd_sample)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    load_dotenv()

    parser = build_parser()
    args = parser.parse_args(argv)

    level = get_environment(EnvVar.PACONVERT_LOG_LEVEL, override=args.log_level)
    setup_logging(parse_level(level))

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    try:
        return args.func(args)
    except ConversionError as e:
        logger.error(str(e))
        return 1
    except OSError as e:
        logger.error(f"Cannot read input: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
