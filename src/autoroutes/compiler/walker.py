"""Filesystem route compilation.

Walks the routes directory tree and registers, per directory:

1. computed-route files (``#*.py``), gated on the rest of the path
2. route files (``name.py``) at ``{base_url}name`` and sub-directories at
   ``{base_url}name/``; ``index.py`` maps to the directory URL
3. the directory's catch-all file (``all.py``) at ``{base_url}*``

Files starting with the ignore prefix (``$``) are never loaded.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from autoroutes.compiler.computed import computed_sink
from autoroutes.compiler.dispatch import guard_sent
from autoroutes.compiler.loader import ModuleLoader
from autoroutes.compiler.registrar import compose_middleware, register_methods
from autoroutes.compiler.types import AddFunction, ComputedRouteModule, RouteModule, TaggedHandler
from autoroutes.config import RoutesConfig
from autoroutes.log import LoggerProtocol, RouteLogger
from autoroutes.routing.protocol import RouteRegistry

# Loader call shape: loader(path, computed=...) -> RouteModule
RouteLoader = Callable[..., RouteModule]

_SKIP_DIRS = frozenset({"__pycache__"})


class RouteCompiler:
    """Compile one routes tree into registrations on *router*.

    Usage::

        compiler = RouteCompiler(router, resolve_config(routes_dir="routes"))
        compiler.compile()
        compiler.table  # {} unless record=True
    """

    __slots__ = ("_config", "_loader", "_log", "_record", "_router", "_table")

    def __init__(
        self,
        router: RouteRegistry,
        config: RoutesConfig,
        *,
        record: bool = False,
        loader: RouteLoader | None = None,
        log: LoggerProtocol | None = None,
    ) -> None:
        self._router = router
        self._config = config
        self._record = record
        self._log = log or RouteLogger()
        self._loader = loader or ModuleLoader(self._log)
        self._table: dict[str, str] = {}

    @property
    def table(self) -> dict[str, str]:
        """URL key to source file, in registration order."""
        return self._table

    def compile(self) -> dict[str, str]:
        """Walk the whole tree. Returns the (possibly empty) route table."""
        root = Path(self._config.routes_dir)
        if not root.is_dir():
            raise FileNotFoundError(f"Routes directory not found: {root}")

        self._log.info("Mapping directories:")
        self.walk(root, self._config.base_url)
        self._log.info("Successfully mapped!")
        return self._table

    def walk(self, directory: Path, base_url: str) -> None:
        """Compile *directory*, whose files live under *base_url*."""
        config = self._config
        log = self._log
        log.debug("Mapping directory %s with %s!", directory, base_url)
        entries = sorted(directory.iterdir(), key=lambda p: p.name)

        log.debug("Mapping computed routes!")
        for entry in entries:
            if (
                entry.name.startswith(config.computed_prefix)
                and entry.suffix == config.extension
                and entry.is_file()
            ):
                self._computed_route(entry, base_url)

        all_route: RouteModule | None = None

        log.debug("Mapping all other routes!")
        for entry in entries:
            log.debug("Routing %s...", entry)

            if entry.is_dir():
                if entry.name in _SKIP_DIRS:
                    continue
                log.debug("- is a directory:")
                self.walk(entry, f"{base_url}{entry.name}/")
                continue

            if entry.suffix != config.extension:
                log.debug("- not a %s file, skipping...", config.extension)
                continue
            if entry.name.startswith(config.ignore_prefix):
                log.debug("- ignore prefix found, skipping...")
                continue
            if entry.name.startswith(config.computed_prefix):
                log.debug("- computed, skipping...")
                continue

            route = self._loader(entry, computed=False)
            route_name = entry.stem

            if route_name == config.all_route_name:
                log.debug("- all route: setting & skipping...")
                all_route = route
                continue

            url = self._route_url(base_url, route_name)
            log.debug("- url: %s", url)

            if (directory / route_name).is_dir():
                log.warn(
                    "Directory with the same name as %s exists! Use %s%s in the folder instead!",
                    entry,
                    config.root_route_name,
                    config.extension,
                )

            self._register_route(url, route, self._add)
            self._remember(url, entry)
            log.log("%s --> %s", url, entry)

        if all_route is not None:
            self._catch_all(all_route, base_url)

    def _route_url(self, base_url: str, route_name: str) -> str:
        if route_name != self._config.root_route_name:
            return f"{base_url}{route_name}"
        # Root file: directory URL without its trailing slash
        if base_url != "/" and base_url.endswith("/"):
            return base_url[:-1]
        return base_url

    def _register_route(self, url: str, route: RouteModule, add: AddFunction) -> None:
        if route.middleware is not None:
            compose_middleware(url, route.middleware, add, self._log)
        register_methods(url, route, add)
        if route.end_middleware is not None:
            compose_middleware(url, route.end_middleware, add, self._log)

    def _computed_route(self, path: Path, base_url: str) -> None:
        route = self._loader(path, computed=True)
        if not isinstance(route, ComputedRouteModule):
            route = ComputedRouteModule(
                source=route.source,
                handlers=route.handlers,
                middleware=route.middleware,
                end_middleware=route.end_middleware,
                default=route.default,
            )
        self._log.debug("Mapping computed route %s* with %s:", base_url, path)
        self._log.debug("Pattern: %s, recursive: %s", route.pattern.pattern, route.recursive)

        self._register_route(f"{base_url}*", route, computed_sink(self._add, route, base_url))

        key = f"{base_url}{route.table_key_suffix}"
        self._remember(key, path)
        self._log.log("%s --> %s", key, path)

    def _catch_all(self, route: RouteModule, base_url: str) -> None:
        if route.default is None:
            self._log.warn("Catch-all file %s has no handler function! Skipping...", route.source)
            return
        self._log.debug("Registering all handler...")
        self._router.add("all", f"{base_url}*", guard_sent(route.default))

        key = f"{base_url}$all"
        self._remember(key, route.source)
        self._log.log("%s --> %s", key, route.source)

    def _add(self, method: str, url: str, handler: TaggedHandler) -> None:
        self._router.add(method, url, handler.func)

    def _remember(self, url: str, path: Path) -> None:
        if self._record:
            self._table[url] = str(path)
