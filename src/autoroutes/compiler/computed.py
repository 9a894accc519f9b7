"""Computed routes: handlers gated on the rest of the request path.

A computed-route file is registered against ``{base_url}*``. Each of its
handlers is wrapped so that, per request, it only runs when the part of
the path below ``base_url`` passes the file's ``recursive`` and
``pattern`` tests. Otherwise the wrapper calls ``next()`` and does
nothing else, which is what lets several computed routes and regular
routes share one URL.
"""

import re
from typing import Any

from autoroutes.compiler.types import (
    AddFunction,
    AsyncHandler,
    ComputedRouteModule,
    SyncHandler,
    TaggedHandler,
)


def match_remainder(
    path: str,
    base_url: str,
    *,
    recursive: bool,
    pattern: re.Pattern[str],
) -> str | None:
    """Return the path remainder below *base_url* if the route accepts it.

    The remainder must be non-empty, contain no ``/`` unless *recursive*,
    and be found by ``pattern.search``. Returns ``None`` otherwise.
    """
    if not path.startswith(base_url):
        return None
    remainder = path[len(base_url) :]
    if not remainder:
        return None
    if not recursive and "/" in remainder:
        return None
    if pattern.search(remainder) is None:
        return None
    return remainder


def wrap_computed(handler: TaggedHandler, base_url: str, route: ComputedRouteModule) -> TaggedHandler:
    """Gate *handler* on the remainder test, keeping its calling convention.

    The wrapped handler is called as ``handler(request, response, next, remainder)``.
    """
    func = handler.func
    recursive = route.recursive
    pattern = route.pattern

    if isinstance(handler, AsyncHandler):

        async def computed_async(request: Any, response: Any, next: Any) -> None:  # noqa: A002
            remainder = match_remainder(request.path, base_url, recursive=recursive, pattern=pattern)
            if remainder is None:
                next()
                return
            await func(request, response, next, remainder)

        return AsyncHandler(computed_async)

    def computed_sync(request: Any, response: Any, next: Any) -> None:  # noqa: A002
        remainder = match_remainder(request.path, base_url, recursive=recursive, pattern=pattern)
        if remainder is None:
            next()
            return
        func(request, response, next, remainder)

    return SyncHandler(computed_sync)


def computed_sink(add: AddFunction, route: ComputedRouteModule, base_url: str) -> AddFunction:
    """Return a sink that wraps every handler before delegating to *add*."""

    def add_computed(method: str, url: str, handler: TaggedHandler) -> None:
        add(method, url, wrap_computed(handler, base_url, route))

    return add_computed
