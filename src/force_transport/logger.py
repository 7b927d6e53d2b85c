"""Leveled logging with bound request context.

Every transport logs through a :class:`BoundLogger` that carries fields such as
the transport ``kind`` and the request ``url``. Those fields are appended to
each record as ``key=value`` pairs and handed to stdlib handlers through
``extra["context"]``.
"""

from __future__ import annotations

import logging
from typing import Any, Literal, Mapping

LogLevel = Literal["trace", "debug", "info", "warn", "error"]

TRACE_LEVEL = 5
logging.addLevelName(TRACE_LEVEL, "TRACE")

DEFAULT_LOGGER_NAME = "force_transport"

# Library logger: silent unless the application configures handlers.
logging.getLogger(DEFAULT_LOGGER_NAME).addHandler(logging.NullHandler())

LOG_LEVEL_PRIORITY: dict[LogLevel, int] = {
    "trace": 0,
    "debug": 1,
    "info": 2,
    "warn": 3,
    "error": 4,
}

_STDLIB_LEVELS: dict[LogLevel, int] = {
    "trace": TRACE_LEVEL,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}


def _render_context(context: Mapping[str, Any], escape: bool) -> str:
    rendered = " ".join(f"{key}={value}" for key, value in context.items())
    # Formatted messages would otherwise read URLs like "%20" as placeholders.
    return rendered.replace("%", "%%") if escape else rendered


class BoundLogger:
    """Level-filtered logger that stamps its bound context onto every message.

    ``logger`` is a ``logging.Logger`` or any object exposing
    ``trace``/``debug``/``info``/``warn``/``error`` methods.
    """

    def __init__(
        self,
        logger: Any | None = None,
        *,
        level: LogLevel = "info",
        context: Mapping[str, Any] | None = None,
    ) -> None:
        self._logger = logger or logging.getLogger(DEFAULT_LOGGER_NAME)
        self._level = level
        self._context = dict(context or {})

    @property
    def context(self) -> Mapping[str, Any]:
        return dict(self._context)

    def bind(self, **context: Any) -> "BoundLogger":
        """Return a logger carrying ``context`` on top of the current fields."""
        return BoundLogger(self._logger, level=self._level, context={**self._context, **context})

    def child(self, name: str, **context: Any) -> "BoundLogger":
        if isinstance(self._logger, logging.Logger):
            base = self._logger.getChild(name)
        else:
            base = self._logger
        return BoundLogger(base, level=self._level, context={**self._context, **context})

    def trace(self, msg: str, *args: Any) -> None:
        self._emit("trace", msg, args)

    def debug(self, msg: str, *args: Any) -> None:
        self._emit("debug", msg, args)

    def info(self, msg: str, *args: Any) -> None:
        self._emit("info", msg, args)

    def warn(self, msg: str, *args: Any) -> None:
        self._emit("warn", msg, args)

    def error(self, msg: str, *args: Any) -> None:
        self._emit("error", msg, args)

    def _emit(self, level: LogLevel, msg: str, args: tuple[Any, ...]) -> None:
        if LOG_LEVEL_PRIORITY[level] < LOG_LEVEL_PRIORITY[self._level]:
            return
        if self._context:
            msg = f"{msg} {_render_context(self._context, escape=bool(args))}"
        try:
            if isinstance(self._logger, logging.Logger):
                self._logger.log(_STDLIB_LEVELS[level], msg, *args, extra={"context": dict(self._context)})
                return
            handler = getattr(self._logger, level, None)
            if handler is not None:
                handler(msg, *args)
        except Exception:
            # Logging failures never reach request handling
            pass


def create_logger(*, logger: Any | None = None, level: LogLevel = "info") -> BoundLogger:
    if isinstance(logger, BoundLogger):
        return logger
    return BoundLogger(logger, level=level)


__all__ = ["BoundLogger", "LOG_LEVEL_PRIORITY", "LogLevel", "TRACE_LEVEL", "create_logger"]
