"""Rush CLI: route table introspection.

Entry point registered as ``rush`` in ``pyproject.toml``::

    [project.scripts]
    rush = "rush.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``rush`` command."""
    parser = argparse.ArgumentParser(
        prog="rush",
        description="Rush: an in-process HTTP request router.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- rush routes ------------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List registered routes")
    routes_parser.add_argument(
        "router",
        help="Import string (e.g. myapp:router)",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        from rush.cli._routes import run_routes

        run_routes(args)
