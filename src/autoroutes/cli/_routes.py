"""``autoroutes routes``: list compiled routes.

Compiles a routes directory into a :class:`StackRouter` and prints the
route table (URL and source file) followed by the router layers
(method, pattern, and handler).
"""

import argparse
import logging
import sys
from typing import Any

from autoroutes.compiler import compile_routes_with_table
from autoroutes.errors import AutoRoutesError
from autoroutes.log import log_config
from autoroutes.routing.stack import StackRouter

# CLI flag -> RoutesConfig field
_OPTION_FIELDS = {
    "base_url": "base_url",
    "ignore_prefix": "ignore_prefix",
    "computed_prefix": "computed_prefix",
    "all_name": "all_route_name",
    "index_name": "root_route_name",
}


def _options(args: argparse.Namespace) -> dict[str, Any]:
    options: dict[str, Any] = {"routes_dir": args.routes_dir}
    for flag, field_name in _OPTION_FIELDS.items():
        value = getattr(args, flag)
        if value is not None:
            options[field_name] = value
    return options


def _print_table(header: tuple[str, ...], rows: list[tuple[str, ...]]) -> None:
    widths = [max([len(header[i]), *(len(r[i]) for r in rows)]) for i in range(len(header) - 1)]
    fmt = "  ".join(f"{{:<{w}}}" for w in widths) + "  {}"
    print(fmt.format(*header))
    sep_len = sum(widths) + 2 * len(widths) + max((len(r[-1]) for r in rows), default=0)
    print("-" * min(sep_len, 80))
    for row in rows:
        print(fmt.format(*row))


def run_routes(args: argparse.Namespace) -> None:
    """Compile ``args.routes_dir`` and print what it registered."""
    if args.verbose:
        log_config.mute_logs = False
        logging.basicConfig(level=logging.INFO, format="%(message)s", stream=sys.stderr)

    router = StackRouter()
    try:
        table = compile_routes_with_table(router, _options(args))
    except (FileNotFoundError, AutoRoutesError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    if not table:
        print("No routes registered.")
        return

    _print_table(("URL", "SOURCE"), list(table.items()))
    print()

    layers = [
        (
            layer.method.upper(),
            layer.pattern,
            getattr(layer.handler, "__qualname__", repr(layer.handler)),
        )
        for layer in router.layers
    ]
    _print_table(("METHOD", "PATTERN", "HANDLER"), layers)
