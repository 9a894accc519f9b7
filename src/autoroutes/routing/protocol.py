"""Router protocol: what the compiler needs from the host router.

A router is any object with an ``add`` method::

    class MyRouter:
        def add(self, method: str, pattern: str, handler: Handler) -> None: ...

No base class required. The compiler checks the shape, not the lineage.

``method`` is one of ``HTTP_METHODS`` or the pseudo-method ``"use"``;
``pattern`` may end in ``*`` (everything below). Handlers are called as
``handler(request, response, next)`` and may be sync or async. The router
must try registrations in the order they were added, expose
``response.headers_sent``, and give each handler a synchronous ``next()``
continuation that moves on to the next matching registration.
"""

from collections.abc import Callable
from typing import Any, Protocol, TypeAlias

# The continuation handed to every handler
Next: TypeAlias = Callable[[], None]

# A router-level handler: (request, response, next) -> None | Awaitable[None]
Handler: TypeAlias = Callable[..., Any]


class RouteRegistry(Protocol):
    """Protocol for routers that accept compiled registrations."""

    def add(self, method: str, pattern: str, handler: Handler) -> None: ...
