from __future__ import annotations

import argparse
import sys
from pathlib import Path

from ..core import canonicalize, sanitize


def register(subparsers: argparse._SubParsersAction) -> None:
    sanitize_cmd = subparsers.add_parser(
        "sanitize-json",
        help="Strip password/passphrase keys from a JSON document and print it canonically",
    )
    sanitize_cmd.add_argument("file", type=Path, help="JSON file to sanitize ('-' for stdin)")
    sanitize_cmd.add_argument(
        "--canonical-only",
        action="store_true",
        help="Only canonicalize; keep sensitive keys",
    )
    sanitize_cmd.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose logging"
    )

    def handle_sanitize_json(args: argparse.Namespace) -> int:
        if str(args.file) == "-":
            raw = sys.stdin.read()
        else:
            raw = args.file.read_text()
        out = canonicalize(raw) if args.canonical_only else sanitize(raw)
        print(out or "")
        return 0

    sanitize_cmd.set_defaults(func=handle_sanitize_json)
