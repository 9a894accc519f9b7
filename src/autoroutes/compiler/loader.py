"""Route module loading.

Imports a route file without touching ``sys.path`` and validates its
exports once, producing a :class:`RouteModule` (or
:class:`ComputedRouteModule` for computed-route files).

A route file exports handlers named after HTTP methods::

    # routes/widgets/index.py
    def get(request, response, next):
        response.send("all widgets")

    async def post(request, response, next):
        ...

    middleware = [require_login]
    end_middleware = {"post": audit}

Computed-route files may also export ``pattern`` and ``recursive``::

    # routes/#.py
    import re

    pattern = re.compile(r"^\\d+$")

    def get(request, response, next, remainder):
        response.send(f"item {remainder}")

Catch-all files export a single ``handler``.
"""

from __future__ import annotations

import importlib.util
import itertools
import re
import sys
from pathlib import Path
from types import ModuleType

from autoroutes.compiler.types import (
    DEFAULT_PATTERN,
    ComputedRouteModule,
    RouteModule,
    TaggedHandler,
    tag_handler,
)
from autoroutes.errors import RouteLoadError
from autoroutes.log import LoggerProtocol, RouteLogger
from autoroutes.methods import HTTP_METHODS, attribute_name

_MODULE_NAME_RE = re.compile(r"\W")
_module_ids = itertools.count()

_MISSING = object()


def load_module(path: Path) -> ModuleType:
    """Execute a route file as an anonymous module.

    Raises:
        RouteLoadError: If the file cannot be imported.
    """
    module_name = f"_autoroutes_{_MODULE_NAME_RE.sub('_', path.stem)}_{next(_module_ids)}"
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise RouteLoadError(path, "no import spec for file")

    try:
        module = importlib.util.module_from_spec(spec)
        # Registered so dataclasses and typing can look the module up by name
        sys.modules[module_name] = module
        spec.loader.exec_module(module)
    except Exception as exc:
        sys.modules.pop(module_name, None)
        raise RouteLoadError(path, str(exc)) from exc

    return module


def build_route(
    namespace: object,
    source: Path,
    *,
    computed: bool = False,
    log: LoggerProtocol | None = None,
) -> RouteModule:
    """Validate a module's exports and freeze them into a route module.

    Method exports that are present but not callable are reported and
    left out. ``namespace`` can be any object with attributes, which lets
    custom loaders reuse the validation.
    """
    log = log or RouteLogger()

    handlers: dict[str, TaggedHandler] = {}
    for method in HTTP_METHODS:
        value = getattr(namespace, attribute_name(method), _MISSING)
        if value is _MISSING:
            continue
        if not callable(value):
            log.warn("Method %s in %s is not a function! Skipping...", method, source)
            continue
        log.debug("-- %s method found", method)
        handlers[method] = tag_handler(value)

    # Only catch-all files use it; the compiler reports one without it
    handler = getattr(namespace, "handler", None)
    default = tag_handler(handler) if callable(handler) else None

    middleware = getattr(namespace, "middleware", None)
    end_middleware = getattr(namespace, "end_middleware", None)

    if not computed:
        return RouteModule(
            source=source,
            handlers=handlers,
            middleware=middleware,
            end_middleware=end_middleware,
            default=default,
        )

    return ComputedRouteModule(
        source=source,
        handlers=handlers,
        middleware=middleware,
        end_middleware=end_middleware,
        default=default,
        pattern=_compile_pattern(getattr(namespace, "pattern", None), source),
        recursive=bool(getattr(namespace, "recursive", False)),
    )


def _compile_pattern(value: object, source: Path) -> re.Pattern[str]:
    if value is None:
        return DEFAULT_PATTERN
    if isinstance(value, re.Pattern):
        return value
    if isinstance(value, str):
        try:
            return re.compile(value)
        except re.error as exc:
            raise RouteLoadError(source, f"invalid pattern {value!r}: {exc}") from exc
    raise RouteLoadError(source, f"pattern must be a str or re.Pattern, not {type(value).__name__}")


class ModuleLoader:
    """Default loader: import the file, then validate it.

    The compiler calls loaders as ``loader(path, computed=...)``. Any
    callable with that shape returning a :class:`RouteModule` can replace
    this one.
    """

    __slots__ = ("_log",)

    def __init__(self, log: LoggerProtocol | None = None) -> None:
        self._log = log or RouteLogger()

    def __call__(self, path: Path, *, computed: bool = False) -> RouteModule:
        module = load_module(path)
        return build_route(module, path, computed=computed, log=self._log)
