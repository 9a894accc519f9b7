"""Data models for compiled route files.

Immutable frozen dataclasses built once per file during compilation.
Handlers are tagged with their calling convention when they are first
accepted, so nothing downstream has to guess whether to await.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, TypeAlias

from autoroutes._internal.invoke import is_async_callable

# Default computed-route pattern: any non-empty remainder
DEFAULT_PATTERN: re.Pattern[str] = re.compile(r"^.+$")


@dataclass(frozen=True, slots=True)
class SyncHandler:
    """A plain callable handler."""

    func: Callable[..., Any]


@dataclass(frozen=True, slots=True)
class AsyncHandler:
    """A coroutine-function handler. Wrappers must await it."""

    func: Callable[..., Any]


TaggedHandler: TypeAlias = SyncHandler | AsyncHandler

# Registration sink: (method, url pattern, handler)
AddFunction: TypeAlias = Callable[[str, str, TaggedHandler], None]


def tag_handler(func: Callable[..., Any]) -> TaggedHandler:
    """Wrap *func* in the tag matching its calling convention."""
    if is_async_callable(func):
        return AsyncHandler(func)
    return SyncHandler(func)


@dataclass(frozen=True, slots=True)
class RouteModule:
    """A loaded route file.

    Attributes:
        source: Filesystem path of the route file.
        handlers: HTTP method token to tagged handler, in ``HTTP_METHODS``
            order. Only callable exports end up here.
        middleware: Raw ``middleware`` declaration, or ``None``.
        end_middleware: Raw ``end_middleware`` declaration, or ``None``.
        default: The module's ``handler`` export. Used when the file is a
            directory's catch-all file.
    """

    source: Path
    handlers: Mapping[str, TaggedHandler] = field(default_factory=dict)
    middleware: Any = None
    end_middleware: Any = None
    default: TaggedHandler | None = None


@dataclass(frozen=True, slots=True)
class ComputedRouteModule(RouteModule):
    """A route file whose URL is decided per request.

    Attributes:
        pattern: Searched against the part of the path below the
            directory's base URL. Must anchor itself.
        recursive: Allow remainders that span several path segments.
    """

    pattern: re.Pattern[str] = DEFAULT_PATTERN
    recursive: bool = False

    @property
    def table_key_suffix(self) -> str:
        """Suffix appended to the base URL in the compiled route table."""
        if self.recursive:
            return f"**/`{self.pattern.pattern}`"
        return f"`{self.pattern.pattern}`"
