"""autoroutes: compile a directory tree into HTTP routes.

Each ``.py`` file becomes a route, each sub-directory a URL segment.
Specially named files add catch-alls (``all.py``), pattern-matched
computed routes (``#*.py``), or are left out entirely (``$*.py``).

Basic usage::

    from autoroutes import StackRouter, compile_routes

    router = StackRouter()
    compile_routes(router, routes_dir="routes")

Any router with an ``add(method, pattern, handler)`` method works in
place of :class:`StackRouter`.
"""

__version__ = "0.1.0"
__all__ = [
    "AutoRoutesError",
    "ConfigurationError",
    "LogConfig",
    "Request",
    "Response",
    "RouteCompiler",
    "RouteLoadError",
    "RouteLogger",
    "RouteRegistry",
    "RoutesConfig",
    "StackRouter",
    "compile_routes",
    "compile_routes_with_table",
    "log_config",
    "resolve_config",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import autoroutes`` fast while providing a clean top-level API.
    """
    if name in ("compile_routes", "compile_routes_with_table", "RouteCompiler"):
        from autoroutes import compiler as _compiler

        return getattr(_compiler, name)

    if name in ("RoutesConfig", "resolve_config"):
        from autoroutes import config as _config

        return getattr(_config, name)

    if name in ("Request", "Response", "RouteRegistry", "StackRouter"):
        from autoroutes import routing as _routing

        return getattr(_routing, name)

    if name in ("LogConfig", "RouteLogger", "log_config"):
        from autoroutes import log as _log

        return getattr(_log, name)

    if name in ("AutoRoutesError", "ConfigurationError", "RouteLoadError"):
        from autoroutes import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
