"""Domain protocols package."""

from passwordsafe.domain.protocols.logger_protocol import LoggerProtocol

__all__ = ["LoggerProtocol"]
