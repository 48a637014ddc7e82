from __future__ import annotations

import argparse

from .common import add_common_args, connect, print_json


def register(subparsers: argparse._SubParsersAction) -> None:
    list_sites = subparsers.add_parser("list-sites", help="List sites configured on the server")
    add_common_args(list_sites, with_format=True)

    def handle_list_sites(args: argparse.Namespace) -> int:
        with connect(args) as client:
            sites = client.list_sites()
        if args.format == "json":
            rows = [{"id": s.id, "name": s.name} for s in sites]
            print_json({"sites": rows, "count": len(rows)})
        elif sites:
            for site in sites:
                print(f"{site.id}\t{site.name}")
        else:
            print("No sites found.")
        return 0

    list_sites.set_defaults(func=handle_list_sites)
