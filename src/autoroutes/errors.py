"""autoroutes exception hierarchy.

Shared across the compiler, the loader, and the reference router so every
module raises and catches the same types.
"""

from pathlib import Path


class AutoRoutesError(Exception):
    """Base for all autoroutes-specific errors."""


class ConfigurationError(AutoRoutesError):
    """Raised when compiler options or router registrations are invalid.

    Typically raised by ``resolve_config()`` before any directory is walked.
    """


class RouteLoadError(AutoRoutesError):
    """Raised when a route file cannot be turned into a route module.

    Covers import failures (syntax errors, exceptions at import time) and
    invalid computed-route metadata. Always fatal: the compilation aborts.

    Attributes:
        path: The route file that failed to load.
    """

    def __init__(self, path: str | Path, detail: str = "") -> None:
        self.path = Path(path)
        message = f"Failed to load route module {self.path}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class ResponseAlreadySent(AutoRoutesError):  # noqa: N818
    """Raised when a response is sent a second time."""
