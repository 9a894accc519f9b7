"""Level-gated logging for the route compiler.

Messages go through the standard ``logging`` module under the
``"autoroutes"`` logger. On top of the logger's own level, three switches
on ``log_config`` gate what the compiler emits:

- ``mute_logs`` (default ``True``): silences ``info`` / ``log``
- ``ignore_warnings`` (default ``False``): silences ``warn``
- ``debug`` (default ``False``): enables ``debug``

``error`` and ``exception`` always fire and are terminal: they raise.

Any object with the six methods of :class:`LoggerProtocol` can be passed to
the compiler instead of a :class:`RouteLogger`.
"""

import logging
from dataclasses import dataclass, field
from typing import Protocol

from autoroutes.errors import AutoRoutesError


class LoggerProtocol(Protocol):
    """Logging sink accepted by the compiler."""

    def log(self, msg: str, *args: object) -> None: ...

    def debug(self, msg: str, *args: object) -> None: ...

    def info(self, msg: str, *args: object) -> None: ...

    def warn(self, msg: str, *args: object) -> None: ...

    def error(self, msg: str, *args: object) -> None: ...

    def exception(self, exc: BaseException) -> None: ...


@dataclass(slots=True)
class LogConfig:
    """Process-wide logging switches. Mutable so applications can flip them."""

    mute_logs: bool = True
    ignore_warnings: bool = False
    debug: bool = False
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger("autoroutes"))


log_config = LogConfig()


class RouteLogger:
    """Gated facade over a ``logging.Logger``.

    The switches are read on every call, so changes to the config apply to
    loggers that already exist.
    """

    __slots__ = ("_config",)

    def __init__(self, config: LogConfig | None = None) -> None:
        self._config = config or log_config

    @property
    def config(self) -> LogConfig:
        return self._config

    def debug(self, msg: str, *args: object) -> None:
        if self._config.debug:
            self._config.logger.debug(msg, *args)

    def info(self, msg: str, *args: object) -> None:
        if not self._config.mute_logs:
            self._config.logger.info(msg, *args)

    def log(self, msg: str, *args: object) -> None:
        if not self._config.mute_logs:
            self._config.logger.info(msg, *args)

    def warn(self, msg: str, *args: object) -> None:
        if not self._config.ignore_warnings:
            self._config.logger.warning(msg, *args)

    def error(self, msg: str, *args: object) -> None:
        self._config.logger.error(msg, *args)
        raise AutoRoutesError(msg % args if args else msg)

    def exception(self, exc: BaseException) -> None:
        self._config.logger.error("%s", exc, exc_info=exc)
        raise exc
