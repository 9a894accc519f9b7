"""Ordered reference router.

Layers are tried in the order they were added, which is the precedence
model the compiler relies on: computed routes first, then specific
routes, then catch-alls, deepest directory first.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from autoroutes._internal.invoke import invoke
from autoroutes.errors import ConfigurationError
from autoroutes.methods import METHOD_SET, USE
from autoroutes.routing.http import Request, Response

_ANY_METHOD = frozenset({"all", USE})


def _strip_slash(path: str) -> str:
    if path != "/" and path.endswith("/"):
        return path[:-1]
    return path


def match_pattern(pattern: str, path: str, *, prefix: bool = False) -> bool:
    """Match *path* against a registration pattern.

    - ``"/widgets/*"`` matches any path starting with ``"/widgets/"``
    - with *prefix*, ``"/widgets"`` also matches ``"/widgets/anything"``
    - otherwise the path must equal the pattern

    A single trailing slash is ignored on both sides of a plain match.

    Examples::

        match_pattern("/*", "/a/b")                      -> True
        match_pattern("/widgets", "/widgets/")           -> True
        match_pattern("/widgets", "/widgets/1")          -> False
        match_pattern("/widgets", "/widgets/1", prefix=True) -> True
    """
    if pattern.endswith("*"):
        return path.startswith(pattern[:-1])

    pattern = _strip_slash(pattern)
    path = _strip_slash(path)
    if path == pattern:
        return True
    if not prefix:
        return False
    boundary = pattern if pattern.endswith("/") else f"{pattern}/"
    return path.startswith(boundary)


@dataclass(frozen=True, slots=True)
class Layer:
    """One registration on the stack."""

    method: str
    pattern: str
    handler: Callable[..., Any]

    def matches(self, method: str, path: str) -> bool:
        if self.method not in _ANY_METHOD:
            method = method.lower()
            if self.method != method and not (self.method == "get" and method == "head"):
                return False
        return match_pattern(self.pattern, path, prefix=self.method == USE)


class StackRouter:
    """Express-style router: an ordered stack of ``(method, pattern, handler)``.

    Usage::

        router = StackRouter()
        compile_routes(router, routes_dir="routes")
        response = await router.dispatch(Request("GET", "/widgets"), Response())
    """

    __slots__ = ("_layers",)

    def __init__(self) -> None:
        self._layers: list[Layer] = []

    def add(self, method: str, pattern: str, handler: Callable[..., Any]) -> None:
        """Append a layer.

        Raises:
            ConfigurationError: If *method* is not an HTTP method token or ``"use"``.
        """
        if method != USE and method not in METHOD_SET:
            msg = f"Unknown method {method!r} for pattern {pattern!r}"
            raise ConfigurationError(msg)
        self._layers.append(Layer(method=method, pattern=pattern, handler=handler))

    @property
    def layers(self) -> tuple[Layer, ...]:
        """Registered layers, in dispatch order."""
        return tuple(self._layers)

    def __len__(self) -> int:
        return len(self._layers)

    async def dispatch(self, request: Request, response: Response) -> Response:
        """Run matching layers in order until one does not call ``next()``.

        Sends ``404 Not Found`` if every matching layer passed the request
        on and nothing was sent.
        """
        for layer in self._layers:
            if not layer.matches(request.method, request.path):
                continue

            passed = False

            def next_() -> None:
                nonlocal passed
                passed = True

            await invoke(layer.handler, request, response, next_)
            if not passed:
                return response

        if not response.headers_sent:
            response.send("Not Found", status=404)
        return response
