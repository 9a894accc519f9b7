"""Invoke helpers: call sync or async handlers uniformly.

Route handlers and middleware can be ``def`` or ``async def``. The
reference router awaits whatever comes back, so the sync/async check
lives in exactly one place.

Usage::

    from autoroutes._internal.invoke import invoke

    result = await invoke(handler, request, response, next)
"""

import inspect
from typing import Any


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call a handler and await the result if it's awaitable."""
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result


def is_async_callable(func: Any) -> bool:
    """Return True if calling *func* produces a coroutine.

    Also recognises objects whose ``__call__`` is ``async def``.
    """
    if inspect.iscoroutinefunction(func):
        return True
    if inspect.isclass(func):
        return False
    call = getattr(func, "__call__", None)  # noqa: B004
    return call is not None and inspect.iscoroutinefunction(call)
