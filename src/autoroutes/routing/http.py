"""Minimal request/response pair used by the reference router.

The compiler itself only touches ``request.path`` and
``response.headers_sent``; the rest exists so handlers have something
to write to in tests and introspection.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from autoroutes.errors import ResponseAlreadySent


@dataclass(frozen=True, slots=True)
class Request:
    """An incoming request. Immutable.

    Attributes:
        method: HTTP method, any case (``"GET"``, ``"m-search"``).
        path: URL path without query string.
        headers: Request headers.
        state: Free-form per-request values set by middleware.
    """

    method: str
    path: str
    headers: Mapping[str, str] = field(default_factory=dict)
    state: dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class Response:
    """A response that is written once.

    Handlers set headers and status, then call :meth:`send` or
    :meth:`end`. After that ``headers_sent`` is true and downstream
    catch-alls step aside.
    """

    status: int = 200
    headers: dict[str, str] = field(default_factory=dict)
    body: str = ""
    _sent: bool = False

    @property
    def headers_sent(self) -> bool:
        return self._sent

    def set_header(self, name: str, value: str) -> Response:
        self.headers[name.lower()] = value
        return self

    def send(self, body: str = "", *, status: int | None = None) -> Response:
        """Write *body* and finalize the response.

        Raises:
            ResponseAlreadySent: If the response was already finalized.
        """
        if self._sent:
            raise ResponseAlreadySent("Response was already sent")
        if status is not None:
            self.status = status
        self.body = body
        self._sent = True
        return self

    def end(self) -> Response:
        """Finalize the response without a body."""
        return self.send(self.body)
