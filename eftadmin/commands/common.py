from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any

from ..client import EFTClient
from ..config import load_config


def add_common_args(parser: argparse.ArgumentParser, *, with_format: bool = False) -> None:
    """Add the --env / -v options (and --format when requested) to a subcommand."""
    if with_format:
        parser.add_argument(
            "--format",
            choices=["text", "json"],
            default="text",
            help="Output format: text (default) or json for scripting",
        )
    parser.add_argument(
        "--env",
        dest="env_file",
        type=Path,
        default=None,
        help="Path to .env file that overrides environment variables",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")


def connect(args: argparse.Namespace) -> EFTClient:
    """Load configuration and return an authenticated client."""
    cfg = load_config(args.env_file)
    return EFTClient.from_config(cfg)


def print_json(payload: Any) -> None:
    print(json.dumps(payload, indent=2, sort_keys=True))
