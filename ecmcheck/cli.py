"""
Command-line interface for ecmcheck.

Usage:
    ecmcheck run events.hepmc [more.hepmc ...] [-o output.root] [--ecm 500]
    ecmcheck info output.root
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

import ecmcheck
from .config import DEFAULT_ECM, DEFAULT_OUTPUT
from .errors import EcmCheckError
from .models import DEFAULT_COLLECTION


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ecmcheck",
        description="Truth-level centre-of-mass energy check for e+e- -> ZH -> qq + X samples.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {ecmcheck.__version__}"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- run ---
    run_parser = subparsers.add_parser(
        "run",
        help="Analyse event files and write the per-event tree and cut table",
        description="Classify generator particles event by event. Each input file is one run.",
    )
    run_parser.add_argument("inputs", nargs="+", help="Input event files (.hepmc, .hepmc3, .lhe, optionally .gz)")
    run_parser.add_argument(
        "--output", "-o", default=DEFAULT_OUTPUT,
        help=f"Output file, .root or .parquet (default: {DEFAULT_OUTPUT})",
    )
    run_parser.add_argument(
        "--from", dest="input_format", default=None,
        help="Input format (auto-detected from extension if omitted)",
    )
    run_parser.add_argument(
        "--to", dest="output_format", default=None,
        help="Output format (auto-detected from extension if omitted)",
    )
    run_parser.add_argument(
        "--collection", default=DEFAULT_COLLECTION,
        help=f"Name of the MC particle collection (default: {DEFAULT_COLLECTION})",
    )
    run_parser.add_argument(
        "--ecm", type=float, default=DEFAULT_ECM,
        help=f"Centre-of-mass energy in GeV (default: {DEFAULT_ECM:g})",
    )
    run_parser.add_argument(
        "--heartbeat", type=int, default=1000,
        help="Print a progress line every N events (default: 1000)",
    )
    run_parser.add_argument(
        "--stage", dest="extra_stages", action="append", default=None,
        help="Declare an extra cut stage after 'No Cuts' (repeatable)",
    )
    run_parser.add_argument(
        "--max-events", type=int, default=-1,
        help="Maximum number of events to analyse (-1 for all)",
    )
    run_parser.add_argument(
        "--json", dest="as_json", action="store_true",
        help="Print the end-of-job report as JSON on stdout",
    )
    run_parser.add_argument(
        "--quiet", "-q", action="store_true",
        help="Suppress progress output",
    )

    # --- info ---
    info_parser = subparsers.add_parser(
        "info",
        help="Show row count and cut table of an output file",
    )
    info_parser.add_argument("input", help="Output file written by 'ecmcheck run'")
    info_parser.add_argument(
        "--format", dest="input_format", default=None,
        help="Output file format (auto-detected if omitted)",
    )
    info_parser.add_argument(
        "--json", dest="as_json", action="store_true",
        help="Output as JSON",
    )

    return parser


def _cmd_run(args: argparse.Namespace) -> int:
    from .config import JobConfig
    from .job import run

    try:
        config = JobConfig.from_args(args)
        report = run(
            args.inputs,
            config,
            input_format=args.input_format,
            max_events=args.max_events,
        )
    except (EcmCheckError, ValueError, FileNotFoundError, ImportError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.as_json:
        print(json.dumps(report.to_dict(), indent=2, sort_keys=True))
    return 0


def _cmd_info(args: argparse.Namespace) -> int:
    from .io import read_summary
    from .report import format_cut_table

    try:
        summary = read_summary(args.input, format=args.input_format)
    except (ValueError, FileNotFoundError, ImportError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.as_json:
        serializable = dict(summary)
        serializable["cuts"] = [list(r) for r in summary["cuts"]]
        print(json.dumps(serializable, indent=2))
    else:
        print(f"Events:              {summary['n_rows']}")
        print(f"Cut table bins:      {summary['capacity']}")
        print(format_cut_table(summary["cuts"]))
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "run": _cmd_run,
        "info": _cmd_info,
    }

    handler = commands.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    return handler(args)


if __name__ == "__main__":
    raise SystemExit(main())
