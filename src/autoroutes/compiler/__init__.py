"""Route compiler: turn a routes directory into router registrations.

Usage::

    router = StackRouter()
    compile_routes(router, routes_dir="routes")

    # Same, plus a url -> file table for introspection
    table = compile_routes_with_table(router, routes_dir="routes")

Conventions:

    routes/
      index.py         # /
      about.py         # /about
      all.py           # /*  (catch-all, exports ``handler``)
      #.py             # /<remainder>  (computed, exports ``pattern``)
      $helpers.py      # never loaded
      widgets/
        index.py       # /widgets
        gadget.py      # /widgets/gadget
"""

from collections.abc import Mapping
from typing import Any

from autoroutes.compiler.loader import ModuleLoader, build_route, load_module
from autoroutes.compiler.types import (
    AsyncHandler,
    ComputedRouteModule,
    RouteModule,
    SyncHandler,
    tag_handler,
)
from autoroutes.compiler.walker import RouteCompiler, RouteLoader
from autoroutes.config import RoutesConfig, resolve_config
from autoroutes.log import LoggerProtocol
from autoroutes.routing.protocol import RouteRegistry


def compile_routes(
    router: RouteRegistry,
    config: RoutesConfig | Mapping[str, Any] | None = None,
    /,
    *,
    loader: RouteLoader | None = None,
    log: LoggerProtocol | None = None,
    **options: Any,
) -> None:
    """Register every route under the configured directory on *router*.

    Args:
        router: Any object with ``add(method, pattern, handler)``.
        config: A ``RoutesConfig`` or a partial mapping of its fields.
        loader: Replacement for the default module loader.
        log: Replacement for the default gated logger.
        **options: ``RoutesConfig`` field overrides.

    Raises:
        FileNotFoundError: If the routes directory does not exist.
        RouteLoadError: If any route file fails to load.
        ConfigurationError: If an option is unknown.
    """
    resolved = resolve_config(config, **options)
    RouteCompiler(router, resolved, loader=loader, log=log).compile()


def compile_routes_with_table(
    router: RouteRegistry,
    config: RoutesConfig | Mapping[str, Any] | None = None,
    /,
    *,
    loader: RouteLoader | None = None,
    log: LoggerProtocol | None = None,
    **options: Any,
) -> dict[str, str]:
    """Same as :func:`compile_routes`, and return the compiled route table.

    Returns:
        Mapping of URL key to source file path, in registration order.
        Catch-alls appear as ``{base_url}$all`` and computed routes as
        ``{base_url}`pattern``` (``{base_url}**/`pattern``` when recursive).
    """
    resolved = resolve_config(config, **options)
    return RouteCompiler(router, resolved, record=True, loader=loader, log=log).compile()


__all__ = [
    "AsyncHandler",
    "ComputedRouteModule",
    "ModuleLoader",
    "RouteCompiler",
    "RouteModule",
    "SyncHandler",
    "build_route",
    "compile_routes",
    "compile_routes_with_table",
    "load_module",
    "tag_handler",
]
