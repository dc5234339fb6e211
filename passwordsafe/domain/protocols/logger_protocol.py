"""LoggerProtocol definition for structured logging.

The client logs through this protocol so applications can inject their own
logger. A plain `structlog.get_logger()` satisfies it, and so does
`passwordsafe.infrastructure.logging.ConsoleAdapter`.

Security:
    - NEVER log client secrets, tokens, API keys or credential values
    - Access request ids are masked before they reach a log line

Usage:
    logger.info("Signed app in", user_name=user.user_name)

    scoped = logger.bind(operation="ManagedAccountGet")
    scoped.debug("GET", url=url)
"""

from __future__ import annotations

from typing import Any, Protocol


class LoggerProtocol(Protocol):
    """Protocol for structured logging adapters.

    All logging calls MUST be structured: message + key-value context.
    """

    def debug(self, message: str, /, **context: Any) -> Any:
        """Log a debug-level message."""
        ...

    def info(self, message: str, /, **context: Any) -> Any:
        """Log an info-level message."""
        ...

    def warning(self, message: str, /, **context: Any) -> Any:
        """Log a warning-level message."""
        ...

    def error(self, message: str, /, **context: Any) -> Any:
        """Log an error-level message."""
        ...

    def critical(self, message: str, /, **context: Any) -> Any:
        """Log a critical-level message."""
        ...

    def bind(self, **context: Any) -> LoggerProtocol:
        """Return new logger with permanently bound context.

        Original logger instance remains unchanged (immutable pattern).
        """
        ...
