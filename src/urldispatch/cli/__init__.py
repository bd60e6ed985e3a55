"""urldispatch CLI — rule listing, path resolution, and rewrite rules.

Entry point registered as ``urldispatch`` in ``pyproject.toml``::

    [project.scripts]
    urldispatch = "urldispatch.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``urldispatch`` command."""
    parser = argparse.ArgumentParser(
        prog="urldispatch",
        description="urldispatch — A declarative, Django-like URL dispatcher.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- urldispatch routes -----------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List registered rules in match order")
    routes_parser.add_argument(
        "dispatcher",
        help="Import string (e.g. myapp.urls:dispatcher)",
    )

    # -- urldispatch match ------------------------------------------------
    match_parser = subparsers.add_parser(
        "match", help="Show which rule a request path dispatches to"
    )
    match_parser.add_argument(
        "dispatcher",
        help="Import string (e.g. myapp.urls:dispatcher)",
    )
    match_parser.add_argument("path", help="Raw request path, e.g. /blog/hello?page=2")

    # -- urldispatch htaccess ---------------------------------------------
    htaccess_parser = subparsers.add_parser(
        "htaccess", help="Print an Apache rewrite block for a front controller"
    )
    htaccess_parser.add_argument("--base-dir", default="", help="Site root directory")
    htaccess_parser.add_argument(
        "--dispatcher",
        default=None,
        help="Import string whose receiver_file is used (e.g. myapp.urls:dispatcher)",
    )
    htaccess_parser.add_argument(
        "--receiver",
        default=None,
        help="Script receiving rewritten requests (default: the config's receiver_file)",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        from urldispatch.cli._routes import run_routes

        run_routes(args)
    elif args.command == "match":
        from urldispatch.cli._match import run_match

        run_match(args)
    elif args.command == "htaccess":
        from urldispatch.cli._htaccess import run_htaccess

        run_htaccess(args)
