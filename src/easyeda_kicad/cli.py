"""Command-line interface for easyeda-kicad."""

from __future__ import annotations

import argparse
import logging
import sys
from collections import Counter
from pathlib import Path

from .document import convert_board, load_document
from .exceptions import ConversionError
from .records import split_record
from .sexpr import format_document


def _read_input(input_arg: str) -> dict:
    input_path = Path(input_arg)
    if not input_path.exists():
        print(f"Error: Input file not found: {input_path}", file=sys.stderr)
        sys.exit(1)
    try:
        return load_document(input_path)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


# --- Subcommand handlers ---


def _cmd_convert(args: argparse.Namespace) -> None:
    """Handle the convert subcommand."""
    document = _read_input(args.input)

    try:
        conversion = convert_board(document, strict=args.strict)
    except ConversionError as e:
        print(f"Error: record {e.record_id or '?'}: {e}", file=sys.stderr)
        sys.exit(1)

    output_path = Path(args.output) if args.output else Path(args.input).with_suffix(".kicad_pcb")
    output_path.write_text(format_document(conversion.tree), encoding="utf-8")

    converted = len(conversion.results) - len(conversion.failures) - len(conversion.skipped)
    print(f"Converted {converted} records, "
          f"skipped {len(conversion.skipped)}, "
          f"failed {len(conversion.failures)}", file=sys.stderr)
    for failure in conversion.failures:
        print(f"  {failure.record_type} {failure.record_id}: {failure.error}", file=sys.stderr)
    print(f"Written: {output_path}", file=sys.stderr)

    if conversion.failures:
        sys.exit(2)


def _cmd_inspect(args: argparse.Namespace) -> None:
    """Handle the inspect subcommand."""
    document = _read_input(args.input)
    shapes = document.get("shape", [])

    counts = Counter(split_record(line)[0] for line in shapes if line.strip())
    conversion = convert_board(document)

    print(f"EasyEDA board: {args.input}")
    print()
    print("Record types:")
    for record_type in sorted(counts):
        print(f"  {record_type:20s} {counts[record_type]:5d}")
    print()
    print(f"Nets: {len(conversion.nets) - 1}")
    for index, name in enumerate(conversion.nets[1:], start=1):
        print(f"  {index:5d} {name}")
    print()
    print(f"Total records: {sum(counts.values())}")


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="easyeda-kicad",
        description="Convert EasyEDA PCB documents to KiCad board files.",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Log skipped and failed records (-vv for debug detail)",
    )
    subparsers = parser.add_subparsers(dest="command")

    # --- convert subcommand ---
    p_convert = subparsers.add_parser(
        "convert",
        help="Convert an EasyEDA board JSON file to .kicad_pcb.",
    )
    p_convert.add_argument(
        "input",
        help="Path to the EasyEDA JSON file",
    )
    p_convert.add_argument(
        "-o", "--output",
        help="Output board path (default: same directory as input, .kicad_pcb extension)",
    )
    p_convert.add_argument(
        "--strict",
        action="store_true",
        help="Abort on the first record that cannot be converted.",
    )
    p_convert.set_defaults(func=_cmd_convert)

    # --- inspect subcommand ---
    p_inspect = subparsers.add_parser(
        "inspect",
        help="Print record and net summary of an EasyEDA board.",
    )
    p_inspect.add_argument(
        "input",
        help="Path to the EasyEDA JSON file",
    )
    p_inspect.set_defaults(func=_cmd_inspect)

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    level = {0: logging.ERROR, 1: logging.WARNING}.get(args.verbose, logging.DEBUG)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    args.func(args)
