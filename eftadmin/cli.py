from __future__ import annotations

import argparse
import sys
from typing import Optional

from .commands import register_all
from .core import EFTError, get_logger, setup_logging


def build_parser() -> argparse.ArgumentParser:
    """Build and return the argument parser for the eftadmin CLI."""
    parser = argparse.ArgumentParser(
        prog="eftadmin", description="Globalscape EFT admin API utilities"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    register_all(subparsers)
    return parser


def run_cli(argv: Optional[list[str]] = None) -> int:
    """Run the eftadmin command-line interface."""
    parser = build_parser()
    args = parser.parse_args(argv)

    verbose = bool(getattr(args, "verbose", False))
    setup_logging("INFO" if verbose else "WARNING")

    if not hasattr(args, "func"):
        parser.error("No handler registered for the selected command")

    try:
        return int(args.func(args))
    except EFTError as e:
        get_logger(__name__).debug("Command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1
