"""``rush routes``: list registered routes.

Resolves an import string to a rush Router and prints all registered
routes with method, path, and handler info.
"""

import argparse
import sys

from rush.cli._resolve import resolve_router


def run_routes(args: argparse.Namespace) -> None:
    """Print a table of METHOD, PATH, and handler name for ``args.router``."""
    try:
        router = resolve_router(args.router)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    routes = router.routes
    if not routes:
        print("No routes registered.")
        return

    rows: list[tuple[str, str, str]] = []
    for route in routes:
        methods_str = ", ".join(route.methods)
        handler_name = getattr(route.handler, "__qualname__", None) or repr(route.handler)
        rows.append((methods_str, route.pattern, handler_name))

    max_methods = max(max(len(r[0]) for r in rows), 6)  # "METHOD" header
    max_path = max(max(len(r[1]) for r in rows), 4)  # "PATH" header

    fmt = f"{{:<{max_methods}}}  {{:<{max_path}}}  {{}}"
    print(fmt.format("METHOD", "PATH", "HANDLER"))
    sep_len = max_methods + max_path + 4 + max(len(r[2]) for r in rows)
    print("-" * min(sep_len, 80))
    for methods_str, path, handler_name in rows:
        print(fmt.format(methods_str, path, handler_name))
