"""Registration of route handlers and middleware into a sink.

Both functions emit ``(method, url, handler)`` triples through an
``AddFunction``. The compiler passes a sink that registers directly on
the router; computed routes pass one that wraps each handler first.
"""

from collections.abc import Mapping

from autoroutes.compiler.types import AddFunction, RouteModule, tag_handler
from autoroutes.log import LoggerProtocol, RouteLogger
from autoroutes.methods import HTTP_METHODS, USE, attribute_name


def register_methods(url: str, route: RouteModule, add: AddFunction) -> None:
    """Register every method handler of *route* against *url*."""
    for method in HTTP_METHODS:
        handler = route.handlers.get(method)
        if handler is not None:
            add(method, url, handler)


def _is_sequence(value: object) -> bool:
    return isinstance(value, (list, tuple))


def compose_middleware(
    url: str,
    declaration: object,
    add: AddFunction,
    log: LoggerProtocol | None = None,
) -> None:
    """Resolve a middleware declaration into registrations.

    Accepted shapes:

    - a callable: registered once under ``"use"``
    - a list or tuple: each callable element registered under ``"use"``;
      other elements are dropped without a warning
    - a mapping of method token to callable or list of callables:
      registered under that method; bad values and bad list elements are
      reported. ``m-search`` may also be written ``m_search``.

    Anything else is reported and ignored.
    """
    log = log or RouteLogger()

    if callable(declaration):
        log.debug("- middleware is a function, adding...")
        add(USE, url, tag_handler(declaration))
        return

    if _is_sequence(declaration):
        log.debug("- middleware is a list, adding all...")
        for mw in declaration:
            if callable(mw):
                add(USE, url, tag_handler(mw))
        return

    if not isinstance(declaration, Mapping):
        log.warn("Middleware in %s is not a function, list nor a mapping. Skipping...", url)
        return

    log.debug("- middleware is a mapping, computing...")
    for method in HTTP_METHODS:
        # Keys may also use the attribute spelling (m_search)
        key = method if method in declaration else attribute_name(method)
        if key not in declaration:
            continue
        mw = declaration[key]
        if callable(mw):
            add(method, url, tag_handler(mw))
            continue
        if _is_sequence(mw):
            for index, fn in enumerate(mw):
                if not callable(fn):
                    log.warn(
                        "Method %s of middleware in %s: index %d of list is not a function!",
                        method,
                        url,
                        index,
                    )
                    continue
                add(method, url, tag_handler(fn))
            continue
        log.warn(
            "Method %s of middleware in %s is neither a function nor a list of functions!",
            method,
            url,
        )
