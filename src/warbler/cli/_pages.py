"""``warbler pages`` — list page definitions.

Loads the app's registry (executing every page script) and prints each
page's id, route, and metadata.
"""

import argparse
import sys

from warbler.cli._resolve import load_app
from warbler.errors import LoadError


def run_pages(args: argparse.Namespace) -> None:
    """Print a table of ID, ROUTE, and METADATA for the app's pages."""
    app = load_app(args)

    try:
        pages = app.registry[args.match] if args.match else app.registry.all()
    except LoadError as exc:
        cause = f": {exc.__cause__}" if exc.__cause__ else ""
        print(f"Error: {exc}{cause}", file=sys.stderr)
        raise SystemExit(1) from exc

    if not pages:
        print("No pages defined.")
        return

    rows = [
        (
            page.id,
            page.route,
            ", ".join(f"{key}={value!r}" for key, value in sorted(page.metadata.items())),
        )
        for page in pages
    ]

    max_id = max(max(len(r[0]) for r in rows), 2)  # "ID" header
    max_route = max(max(len(r[1]) for r in rows), 5)  # "ROUTE" header

    fmt = f"{{:<{max_id}}}  {{:<{max_route}}}  {{}}"
    print(fmt.format("ID", "ROUTE", "METADATA"))
    sep_len = max_id + max_route + 4 + max((len(r[2]) for r in rows), default=0)
    print("-" * min(sep_len, 80))
    for row in rows:
        print(fmt.format(*row))
