from __future__ import annotations

import argparse

from ..models import SMTPSettings
from .common import add_common_args, connect, print_json


def register(subparsers: argparse._SubParsersAction) -> None:
    show = subparsers.add_parser(
        "show-server", help="Show server version, listener and SMTP settings"
    )
    add_common_args(show, with_format=True)

    def handle_show_server(args: argparse.Namespace) -> int:
        with connect(args) as client:
            server = client.get_server()
        attrs = server.attributes
        if args.format == "json":
            print_json(
                {
                    "id": server.id,
                    "version": attrs.version,
                    "admin_port": attrs.listener_settings.admin_port,
                    "listen_ips": attrs.listener_settings.listen_ips,
                    "smtp": {
                        "server": attrs.smtp.server,
                        "port": attrs.smtp.port,
                        "sender_address": attrs.smtp.sender_address,
                        "sender_name": attrs.smtp.sender_name,
                        "use_authentication": attrs.smtp.use_authentication,
                        "use_implicit_tls": attrs.smtp.use_implicit_tls,
                    },
                }
            )
            return 0
        print(f"Server:     {server.id}")
        print(f"Version:    {attrs.version}")
        print(f"Admin port: {attrs.listener_settings.admin_port}")
        print(f"SMTP:       {attrs.smtp.server}:{attrs.smtp.port} ({attrs.smtp.sender_address})")
        return 0

    show.set_defaults(func=handle_show_server)

    smtp = subparsers.add_parser(
        "set-smtp",
        help="Replace the server SMTP settings (fields not given are cleared on the server)",
    )
    smtp.add_argument("--server", required=True, help="SMTP server host name")
    smtp.add_argument("--port", type=int, required=True, help="SMTP server port")
    smtp.add_argument("--sender-address", required=True, help="From address for notifications")
    smtp.add_argument("--sender-name", required=True, help="From display name")
    smtp.add_argument("--login", default="", help="SMTP login")
    smtp.add_argument("--password", default="", help="SMTP password")
    smtp.add_argument("--use-authentication", action="store_true", help="Authenticate to SMTP")
    smtp.add_argument("--use-implicit-tls", action="store_true", help="Use implicit TLS")
    add_common_args(smtp)

    def handle_set_smtp(args: argparse.Namespace) -> int:
        settings = SMTPSettings(
            server=args.server,
            port=args.port,
            sender_address=args.sender_address,
            sender_name=args.sender_name,
            login=args.login,
            password=args.password,
            use_authentication=args.use_authentication,
            use_implicit_tls=args.use_implicit_tls,
        )
        with connect(args) as client:
            server = client.update_server_smtp(settings)
        print(f"Updated SMTP settings on server {server.id}")
        return 0

    smtp.set_defaults(func=handle_set_smtp)
