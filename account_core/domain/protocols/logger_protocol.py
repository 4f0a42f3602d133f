"""LoggerProtocol definition for structured logging.

Implementations MUST keep logs structured (message key plus key-value
context) and safe: never log passwords, codes or token values. Codes and
tokens may appear only as short previews.

Usage:
    from account_core.core.container import get_logger

    logger = get_logger()
    logger.info("user_signed_up", user_id=str(user.id))

    scoped = logger.bind(user_id=str(user.id))
    scoped.info("token_created", family=family)
"""

from __future__ import annotations

from typing import Any, Protocol


class LoggerProtocol(Protocol):
    """Protocol for structured logging adapters."""

    def debug(self, message: str, /, **context: Any) -> None:
        """Log a debug-level message."""
        ...

    def info(self, message: str, /, **context: Any) -> None:
        """Log an info-level message."""
        ...

    def warning(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log a warning-level message with optional exception details."""
        ...

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log an error-level message with optional exception details.

        Args:
            message: Event name (snake_case, no f-strings).
            error: Optional exception; adds error_type and error_message.
            **context: Structured key-value context fields.
        """
        ...

    def critical(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log a critical-level message."""
        ...

    def bind(self, **context: Any) -> LoggerProtocol:
        """Return new logger with permanently bound context.

        The original logger is unchanged.
        """
        ...

    def with_context(self, **context: Any) -> LoggerProtocol:
        """Alias for bind()."""
        ...
