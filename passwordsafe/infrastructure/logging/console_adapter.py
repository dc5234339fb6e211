"""Console logging adapter.

Builds a standalone structlog logger for applications that want the client's
logs on a stream:
- Development: human-readable console renderer
- CI / log shipping: JSON renderer for machine parsing

The adapter wraps its own logger with `structlog.wrap_logger`; it never calls
`structlog.configure`, so the host application's logging setup is untouched.

Implementation intentionally does NOT inherit from LoggerProtocol (PEP 544
structural subtyping). Any object with the same call signatures is compatible
with LoggerProtocol.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any, TextIO

import structlog

if TYPE_CHECKING:
    from passwordsafe.core.config import PasswordSafeSettings

_SENSITIVE_KEYS = frozenset(
    {"access_token", "api_key", "client_secret", "password", "request_id", "secret"}
)


def _redact_sensitive(
    _logger: Any, _method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Mask values of known sensitive keys."""
    for key in _SENSITIVE_KEYS.intersection(event_dict):
        event_dict[key] = "****"
    return event_dict


class ConsoleAdapter:
    """Console logger for the Password Safe client.

    Args:
        use_json (bool): JSON output when True, human-readable when False.
        level (str): Minimum level name (DEBUG, INFO, ...).
        stream (TextIO | None): Output stream, stdout by default.
    """

    def __init__(
        self,
        *,
        use_json: bool = False,
        level: str = "INFO",
        stream: TextIO | None = None,
    ) -> None:
        processors: list[structlog.types.Processor] = [
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            _redact_sensitive,
        ]

        if use_json:
            processors.append(structlog.processors.JSONRenderer())
        else:
            processors.append(structlog.dev.ConsoleRenderer(colors=False))

        self._logger = structlog.wrap_logger(
            structlog.PrintLogger(file=stream or sys.stdout),
            processors=processors,
            wrapper_class=structlog.make_filtering_bound_logger(
                logging.getLevelNamesMapping()[level.upper()]
            ),
            context_class=dict,
        )

    @classmethod
    def from_settings(
        cls,
        settings: PasswordSafeSettings,
        *,
        use_json: bool = False,
        stream: TextIO | None = None,
    ) -> ConsoleAdapter:
        """Adapter filtering at the configured `log_level`."""
        return cls(use_json=use_json, level=settings.log_level, stream=stream)

    @classmethod
    def _from_bound(cls, logger: Any) -> ConsoleAdapter:
        adapter = cls.__new__(cls)
        adapter._logger = logger
        return adapter

    def debug(self, message: str, /, **context: Any) -> None:
        self._logger.debug(message, **context)

    def info(self, message: str, /, **context: Any) -> None:
        self._logger.info(message, **context)

    def warning(self, message: str, /, **context: Any) -> None:
        self._logger.warning(message, **context)

    def error(
        self, message: str, /, *, error: Exception | str | None = None, **context: Any
    ) -> None:
        """Log an error message with optional exception details.

        Args:
            message (str): Message text.
            error (Exception | str | None): Exception instance or error text.
            **context: Structured key-value context.
        """
        if isinstance(error, Exception):
            context["error_type"] = type(error).__name__
            context["error_message"] = str(error)
        elif error is not None:
            context["error"] = error
        self._logger.error(message, **context)

    def critical(
        self, message: str, /, *, error: Exception | str | None = None, **context: Any
    ) -> None:
        if isinstance(error, Exception):
            context["error_type"] = type(error).__name__
            context["error_message"] = str(error)
        elif error is not None:
            context["error"] = error
        self._logger.critical(message, **context)

    def bind(self, **context: Any) -> ConsoleAdapter:
        """Return new adapter with bound context.

        Args:
            **context: Context to bind to all subsequent logs.

        Returns:
            ConsoleAdapter: New adapter instance with bound context.
        """
        return self._from_bound(self._logger.bind(**context))
