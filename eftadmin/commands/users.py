from __future__ import annotations

import argparse

from .common import add_common_args, connect, print_json


def register(subparsers: argparse._SubParsersAction) -> None:
    get_user = subparsers.add_parser("get-user", help="Show a site user")
    get_user.add_argument("site_id", help="Site ID")
    get_user.add_argument("user_id", help="User ID")
    add_common_args(get_user, with_format=True)

    def handle_get_user(args: argparse.Namespace) -> int:
        with connect(args) as client:
            user = client.get_site_user(args.site_id, args.user_id)
        attrs = user.attributes
        if args.format == "json":
            payload = attrs.to_api()
            payload.pop("password", None)
            print_json({"id": user.id, "type": user.type, "attributes": payload})
            return 0
        print(f"ID:         {user.id}")
        print(f"Login:      {attrs.login_name}")
        print(f"Enabled:    {attrs.account_enabled or '-'}")
        if attrs.personal is not None:
            print(f"Name:       {attrs.personal.name or '-'}")
            print(f"Email:      {attrs.personal.email or '-'}")
        if attrs.home_folder is not None and attrs.home_folder.value is not None:
            print(f"Home:       {attrs.home_folder.value.path}")
        return 0

    get_user.set_defaults(func=handle_get_user)

    delete_user = subparsers.add_parser("delete-user", help="Delete a site user")
    delete_user.add_argument("site_id", help="Site ID")
    delete_user.add_argument("user_id", help="User ID")
    delete_user.add_argument(
        "--confirm",
        action="store_true",
        help="Skip confirmation prompt (required for deletion)",
    )
    add_common_args(delete_user)

    def handle_delete_user(args: argparse.Namespace) -> int:
        if not args.confirm:
            print(
                f"WARNING: This will permanently delete user {args.user_id} "
                f"from site {args.site_id}."
            )
            print("Re-run with --confirm to proceed.")
            return 1
        with connect(args) as client:
            client.delete_site_user(args.site_id, args.user_id)
        print(f"Deleted user {args.user_id} from site {args.site_id}")
        return 0

    delete_user.set_defaults(func=handle_delete_user)
