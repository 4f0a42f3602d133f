"""Structured stdout logging for the account core.

Development gets the colored console renderer; every other environment
gets one JSON object per line. A redaction processor runs before rendering
so raw passwords, codes and tokens never reach the output even if a caller
passes them by mistake.

ConsoleAdapter satisfies LoggerProtocol structurally.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

REDACTED = "[REDACTED]"

SECRET_KEYS = frozenset(
    {"password", "old_password", "new_password", "password_hash", "code", "token"}
)


def redact_secrets(
    _logger: Any, _method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """structlog processor replacing secret-bearing keys with a marker."""
    for key in SECRET_KEYS.intersection(event_dict):
        event_dict[key] = REDACTED
    return event_dict


def _build_processors(use_json: bool) -> list[Any]:
    renderer: Any
    if use_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        redact_secrets,
        structlog.processors.format_exc_info,
        renderer,
    ]


def _with_error(error: Exception | None, context: dict[str, Any]) -> dict[str, Any]:
    if error is None:
        return context
    return {
        **context,
        "error_type": type(error).__name__,
        "error_message": str(error),
    }


class ConsoleAdapter:
    """Logger writing structured events to stdout.

    Args:
        use_json (bool): Render JSON lines instead of the console format.
        level (str): Minimum level name. Unknown names mean INFO.
    """

    def __init__(self, *, use_json: bool = False, level: str = "INFO") -> None:
        threshold = logging.getLevelNamesMapping().get(level.upper(), logging.INFO)
        structlog.configure(
            processors=_build_processors(use_json),
            wrapper_class=structlog.make_filtering_bound_logger(threshold),
            context_class=dict,
            logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
            cache_logger_on_first_use=True,
        )
        self._logger = structlog.get_logger()

    @classmethod
    def _wrap(cls, logger: Any) -> ConsoleAdapter:
        adapter = cls.__new__(cls)
        adapter._logger = logger
        return adapter

    def debug(self, message: str, /, **context: Any) -> None:
        self._logger.debug(message, **context)

    def info(self, message: str, /, **context: Any) -> None:
        self._logger.info(message, **context)

    def warning(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        self._logger.warning(message, **_with_error(error, context))

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log at ERROR level.

        Args:
            message (str): Event name (snake_case).
            error (Exception | None): Expanded into error_type/error_message.
            **context: Structured fields.
        """
        self._logger.error(message, **_with_error(error, context))

    def critical(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        self._logger.critical(message, **_with_error(error, context))

    def bind(self, **context: Any) -> ConsoleAdapter:
        """Return a new adapter carrying ``context`` on every event."""
        return self._wrap(self._logger.bind(**context))

    def with_context(self, **context: Any) -> ConsoleAdapter:
        return self.bind(**context)
