"""Command line entry point for utxo-spec."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from utxo_spec.config import BASE_URL, DEFAULT_OUTPUT_DIR, DEFAULT_SRC_DIR, EngineConfig
from utxo_spec.engine import SpecEngine
from utxo_spec.models import UtxoSpecError
from utxo_spec.output import to_jsonable


def _add_common_options(parser: argparse.ArgumentParser, suppress: bool = False) -> None:
    parser.add_argument(
        "--src",
        type=Path,
        default=argparse.SUPPRESS if suppress else DEFAULT_SRC_DIR,
        help=f"Source directory holding numeric entry directories (default: {DEFAULT_SRC_DIR})",
    )
    parser.add_argument(
        "--silent",
        action="store_true",
        default=argparse.SUPPRESS if suppress else False,
        help="Only report warnings and errors",
    )


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="utxo-spec",
        description="Publish UTXO event specs as static JSON documents",
    )
    _add_common_options(parser)

    # Also accepted after the subcommand; suppressed defaults keep a value
    # given before the subcommand
    common = argparse.ArgumentParser(add_help=False)
    _add_common_options(common, suppress=True)

    sub = parser.add_subparsers(dest="command", required=True)

    build = sub.add_parser(
        "build", parents=[common], help="Publish every entry into the output directory"
    )
    build.add_argument(
        "--out",
        type=Path,
        default=DEFAULT_OUTPUT_DIR,
        help="Output directory, emptied before publishing (default: %(default)s)",
    )
    build.add_argument(
        "--base-url",
        default=BASE_URL,
        help="Public URL the output is served from (default: %(default)s)",
    )

    sub.add_parser(
        "list", parents=[common], help="List entry ids found in the source directory"
    )

    qa = sub.add_parser("qa", parents=[common], help="Print the QA summary of one entry")
    qa.add_argument("entry", help="Entry id, e.g. 2024")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    args = _parser().parse_args(argv)
    logging.basicConfig(
        level=logging.WARNING if args.silent else logging.INFO,
        format="%(message)s",
    )

    config = EngineConfig(
        src_dir=args.src,
        base_url=getattr(args, "base_url", BASE_URL),
        silent=args.silent or args.command != "build",
    )
    engine = SpecEngine(config, echo=print)

    try:
        engine.load()
        if args.command == "build":
            engine.build(args.out)
        elif args.command == "list":
            for entry_id in engine.entries_list():
                print(entry_id)
        elif args.command == "qa":
            summary = engine.qa_summary(args.entry)
            print(json.dumps(to_jsonable(summary), indent=2, ensure_ascii=False))
    except UtxoSpecError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
