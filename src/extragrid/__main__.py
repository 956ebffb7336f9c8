"""CLI entry point for extragrid.

Usage:
    python -m extragrid label <index_or_letters>
    python -m extragrid show <sheet.json> [--time-columns C,D] [--header-rows N]
    python -m extragrid export <sheet.json> <output_dir> [--time-columns C,D]
    python -m extragrid blank <output_dir> [--rows N] [--cols N]
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from loguru import logger

from extragrid.config import get_settings
from extragrid.converter import export_sheet, import_sheet
from extragrid.exceptions import GridError
from extragrid.file_reader import read_sheet_document
from extragrid.formatting import time_formatter
from extragrid.grid import Grid
from extragrid.logging import configure_logging
from extragrid.utils import column_index_to_letter, letter_to_column_index
from extragrid.writer import FileWriter


def parse_column_list(value: str) -> set[int]:
    """Parse a comma-separated list of column letters, e.g. "C,D,H"."""
    return {
        letter_to_column_index(part.strip())
        for part in value.split(",")
        if part.strip()
    }


def _load_grid(args: argparse.Namespace) -> Grid:
    document = read_sheet_document(Path(args.file))
    formatter = None
    formatted_columns = None
    if args.time_columns:
        formatter = time_formatter(get_settings().placeholder)
        formatted_columns = parse_column_list(args.time_columns)
    return import_sheet(
        document["rows"],
        document["merges"],
        document["styles"],
        formatter=formatter,
        formatted_columns=formatted_columns,
        header_rows=args.header_rows,
    )


def cmd_label(args: argparse.Namespace) -> int:
    """Translate between column index and column letters."""
    value = args.value.strip()
    try:
        if value.isascii() and value.isdigit():
            print(column_index_to_letter(int(value)))
        else:
            print(letter_to_column_index(value))
        return 0
    except GridError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_show(args: argparse.Namespace) -> int:
    """Import a sheet document and print a summary."""
    try:
        grid = _load_grid(args)
    except (GridError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    rows, cols = grid.dimensions()
    print(f"Dimensions: {rows} rows x {cols} columns")
    if grid.merges:
        print(f"Merges ({len(grid.merges)}):")
        for region in grid.merges:
            row_span, col_span = region.span
            print(f"  {region.to_a1()} ({row_span}x{col_span})")
    else:
        print("Merges: none")
    headers = [h for h in grid.headers() if h]
    if headers:
        print(f"Headers: {', '.join(headers)}")
    return 0


def cmd_export(args: argparse.Namespace) -> int:
    """Import a sheet document and write it back as data.tsv + sheet.json."""
    try:
        grid = _load_grid(args)
    except (GridError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    sheet = export_sheet(grid)
    files = FileWriter(args.output).write_sheet(sheet)
    print(f"Wrote {len(files)} files to {args.output}:")
    for path in files:
        print(f"  {path}")
    return 0


def cmd_blank(args: argparse.Namespace) -> int:
    """Write an empty baseline grid."""
    try:
        grid = Grid.create_empty(args.rows, args.cols)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    files = FileWriter(args.output).write_sheet(export_sheet(grid))
    rows, cols = grid.dimensions()
    print(f"Wrote empty {rows}x{cols} grid to {args.output}")
    for path in files:
        print(f"  {path}")
    return 0


def _add_import_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--time-columns",
        default=None,
        help="Comma-separated column letters holding times of day (e.g. C,D)",
    )
    parser.add_argument(
        "--header-rows",
        type=int,
        default=1,
        help="Leading rows left unformatted (default: 1)",
    )


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        prog="extragrid",
        description="Inspect and convert spreadsheet grids with merged cells",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # label subcommand
    label_parser = subparsers.add_parser(
        "label",
        help="Convert a column index to letters or letters to an index",
    )
    label_parser.add_argument("value", help="Zero-based index (e.g. 26) or letters (e.g. AA)")
    label_parser.set_defaults(func=cmd_label)

    # show subcommand
    show_parser = subparsers.add_parser(
        "show",
        help="Print dimensions and merges of a sheet document",
    )
    show_parser.add_argument("file", help="Path to a JSON sheet document")
    _add_import_options(show_parser)
    show_parser.set_defaults(func=cmd_show)

    # export subcommand
    export_parser = subparsers.add_parser(
        "export",
        help="Normalize a sheet document into data.tsv and sheet.json",
    )
    export_parser.add_argument("file", help="Path to a JSON sheet document")
    export_parser.add_argument("output", help="Output directory")
    _add_import_options(export_parser)
    export_parser.set_defaults(func=cmd_export)

    # blank subcommand
    blank_parser = subparsers.add_parser(
        "blank",
        help="Write an empty grid of the baseline size",
    )
    blank_parser.add_argument("output", help="Output directory")
    blank_parser.add_argument("--rows", type=int, default=None, help="Row count")
    blank_parser.add_argument("--cols", type=int, default=None, help="Column count")
    blank_parser.set_defaults(func=cmd_blank)

    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging("DEBUG" if args.verbose else settings.log_level)
    logger.debug("Running extragrid {}", args.command)

    result: int = args.func(args)
    return result


if __name__ == "__main__":
    sys.exit(main())
