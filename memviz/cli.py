"""Command-line entry point: trace JSON in, step JSON out."""

from __future__ import annotations

import argparse
import json
import logging
import sys

from .api import dump_steps, event_stats, interpret_json, load_payload, synthesize_json
from .dispatch import interpret
from .errors import MemvizError
from .messages import SUPPORTED_LOCALES
from .normalizers import SUPPORTED_FORMATS
from .run_types import InterpretMode, ReplayConfig

logger = logging.getLogger(__name__)

DEMO_TRACE = [
    {"type": "function_enter", "fn": "main", "line": 9},
    {"type": "local_alloc", "name": "x", "vtype": "int", "size": 4, "value": 42, "line": 10},
    {"type": "local_alloc", "name": "p", "vtype": "int*", "size": 8, "line": 11},
    {"type": "malloc", "sizeBytes": 4, "sym": "p", "line": 11},
    {"type": "store", "addr": "0x10000000", "bytes": [99, 0, 0, 0], "line": 12},
    {"type": "printf", "text": "99\n", "line": 13},
    {"type": "free", "addr": "0x10000000", "line": 14},
    {"type": "function_exit", "fn": "main", "line": 15},
]


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="memviz",
        description="Convert instrumentation traces into memory-visualizer steps",
    )
    parser.add_argument("file", nargs="?",
                        help="Trace (or recipe) JSON file; '-' reads stdin")
    parser.add_argument("--mode", "-m", default=InterpretMode.AUTO.value,
                        choices=[InterpretMode.AUTO.value, *SUPPORTED_FORMATS],
                        help="Trace format (default: auto-detect)")
    parser.add_argument("--recipe", "-r", action="store_true",
                        help="Treat the input as a synthetic recipe")
    parser.add_argument("--locale", "-l", default="en",
                        choices=list(SUPPORTED_LOCALES),
                        help="Description language (default: en)")
    parser.add_argument("--stats", action="store_true",
                        help="Only print event-kind counts")
    parser.add_argument("--compact", action="store_true",
                        help="Emit single-line JSON")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Log replay progress to stderr")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )
    config = ReplayConfig(locale=args.locale)
    indent = None if args.compact else 2

    try:
        if args.file is None and sys.stdin.isatty():
            print("No file provided. Using built-in demo trace.", file=sys.stderr)
            if args.stats:
                print(json.dumps(event_stats(DEMO_TRACE, args.mode), indent=indent))
            else:
                print(dump_steps(interpret(DEMO_TRACE, args.mode, config), indent))
            return 0

        if args.file in (None, "-"):
            text = sys.stdin.read()
        else:
            with open(args.file, encoding="utf-8") as f:
                text = f.read()

        if args.stats:
            counts = event_stats(load_payload(text), args.mode)
            print(json.dumps(counts, indent=indent))
        elif args.recipe:
            print(dump_steps(synthesize_json(text, config), indent))
        else:
            print(dump_steps(interpret_json(text, args.mode, config), indent))
    except (MemvizError, ValueError, OSError) as exc:
        logger.debug("Interpretation failed", exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
