"""Warbler CLI — inspect page definitions and the route table.

Entry point registered as ``warbler`` in ``pyproject.toml``::

    [project.scripts]
    warbler = "warbler.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``warbler`` command."""
    parser = argparse.ArgumentParser(
        prog="warbler",
        description="Warbler — page definitions as plain Python scripts.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- warbler pages ----------------------------------------------------
    pages_parser = subparsers.add_parser("pages", help="List loaded page definitions")
    pages_parser.add_argument(
        "app",
        help="Import string (e.g. myapp:app)",
    )
    pages_parser.add_argument(
        "--match",
        default=None,
        help="Only show pages whose id matches this regex",
    )

    # -- warbler routes ---------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List the compiled route table")
    routes_parser.add_argument(
        "app",
        help="Import string (e.g. myapp:app)",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "pages":
        from warbler.cli._pages import run_pages

        run_pages(args)
    elif args.command == "routes":
        from warbler.cli._routes import run_routes

        run_routes(args)
