"""``warbler routes`` — list the compiled route table.

Resolves an import string to a warbler App and prints every route with
method, path, route name, and the page it serves.
"""

import argparse

from warbler.cli._resolve import load_app


def run_routes(args: argparse.Namespace) -> None:
    """List registered routes for a warbler app.

    Resolves ``args.app`` to an App instance, freezes it, and prints
    a table of METHOD, PATH, NAME, and PAGE.
    """
    app = load_app(args)

    routes = app.routes
    if not routes:
        print("No routes registered.")
        return

    rows: list[tuple[str, str, str, str]] = [
        (
            ", ".join(sorted(route.methods)),
            route.path,
            route.name or "-",
            route.page_id or "-",
        )
        for route in routes
    ]

    # Column widths, never narrower than the headers
    max_methods = max(max(len(r[0]) for r in rows), 6)
    max_path = max(max(len(r[1]) for r in rows), 4)
    max_name = max(max(len(r[2]) for r in rows), 4)

    fmt = f"{{:<{max_methods}}}  {{:<{max_path}}}  {{:<{max_name}}}  {{}}"
    print(fmt.format("METHOD", "PATH", "NAME", "PAGE"))
    sep_len = max_methods + max_path + max_name + 6 + max(len(r[3]) for r in rows)
    print("-" * min(sep_len, 80))
    for row in rows:
        print(fmt.format(*row))
