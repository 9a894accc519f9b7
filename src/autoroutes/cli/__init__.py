"""autoroutes CLI: inspect what a routes directory compiles to.

Entry point registered as ``autoroutes`` in ``pyproject.toml``::

    [project.scripts]
    autoroutes = "autoroutes.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``autoroutes`` command."""
    parser = argparse.ArgumentParser(
        prog="autoroutes",
        description="autoroutes: compile a directory tree into HTTP routes.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- autoroutes routes ------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List the routes a directory compiles to")
    routes_parser.add_argument("routes_dir", help="Routes directory")
    routes_parser.add_argument("--base-url", default=None, help="URL prefix for the root directory")
    routes_parser.add_argument("--ignore-prefix", default=None, help="Prefix of files never loaded")
    routes_parser.add_argument(
        "--computed-prefix",
        default=None,
        help="Prefix of computed-route files",
    )
    routes_parser.add_argument("--all-name", default=None, help="Name of catch-all files")
    routes_parser.add_argument("--index-name", default=None, help="Name of directory root files")
    routes_parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log every mapped route to stderr",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        from autoroutes.cli._routes import run_routes

        run_routes(args)
