"""Headers-sent guard for directory catch-all handlers.

Every directory with an ``all`` file registers a wildcard handler, so a
request deep in the tree can reach several of them. The guard makes a
catch-all step aside (call ``next()``) once the response has been sent.
"""

from collections.abc import Callable
from typing import Any

from autoroutes.compiler.types import AsyncHandler, TaggedHandler


def guard_sent(handler: TaggedHandler) -> Callable[..., Any]:
    """Return a router-ready callable with *handler*'s calling convention."""
    func = handler.func

    if isinstance(handler, AsyncHandler):

        async def guarded_async(request: Any, response: Any, next: Any) -> None:  # noqa: A002
            if response.headers_sent:
                next()
                return
            await func(request, response, next)

        return guarded_async

    def guarded_sync(request: Any, response: Any, next: Any) -> None:  # noqa: A002
        if response.headers_sent:
            next()
            return
        func(request, response, next)

    return guarded_sync
