#!/usr/bin/env python3
"""
cli.py
Command-line entrypoint: inspect an encoded R1CS or validate a witness against it.
"""

import argparse
import logging
import sys
from pathlib import Path

from config import load_config, DEFAULT_CONFIG
from errors import R1CSError
from runner import run_info, run_validation
from utils import setup_basic_logger


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        description="Inspect R1CS files and validate witnesses against them."
    )
    p.add_argument(
        "--config",
        "-c",
        default=None,
        help="Optional JSON config file to override defaults.",
    )
    p.add_argument(
        "--quiet",
        action="store_true",
        help="Minimize console output.",
    )
    sub = p.add_subparsers(dest="command", required=True)

    info = sub.add_parser("info", help="Print a summary of an .r1cs file.")
    info.add_argument("r1cs", help="Path to the encoded .r1cs file.")

    val = sub.add_parser("validate", help="Validate a witness JSON file against an .r1cs file.")
    val.add_argument("r1cs", help="Path to the encoded .r1cs file.")
    val.add_argument("witness", help="Path to the witness JSON file.")
    val.add_argument(
        "--out-dir",
        "-o",
        default="out",
        help="Directory to write the JSON report. Default: ./out",
    )
    return p


def main(argv=None) -> int:
    argv = argv if argv is not None else sys.argv[1:]
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    cfg = DEFAULT_CONFIG.copy()
    try:
        if args.config:
            cfg = load_config(args.config, base=cfg)

        level = logging.WARNING if args.quiet else getattr(logging, str(cfg["log_level"]).upper(), logging.INFO)
        setup_basic_logger("", level=level)
        logging.getLogger().setLevel(level)

        if not Path(args.r1cs).exists():
            print(f"ERROR: input file not found: {args.r1cs}", file=sys.stderr)
            return 2

        if args.command == "info":
            run_info(args.r1cs, config=cfg, quiet=args.quiet)
            return 0

        report = run_validation(args.r1cs, args.witness, out_dir=args.out_dir, config=cfg, quiet=args.quiet)
        return 0 if report.is_satisfied else 1
    except (R1CSError, FileNotFoundError, ValueError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
