"""Machine-readable error codes.

Error codes follow the ENTITY_REASON naming convention and are carried by
every DomainError so callers can branch on a code instead of message text.

Categories:
- Validation errors (raised locally, before any request)
- Session state errors
- Technical errors (retryable)
- Business errors (remote rejection or unusable result)
"""

from enum import Enum


class ErrorCode(Enum):
    """Machine-readable error codes."""

    # Validation errors
    VALIDATION_FAILED = "validation_failed"
    INVALID_PATH = "invalid_path"
    INVALID_RESOURCE_ID = "invalid_resource_id"
    FILE_SECRET_TOO_LARGE = "file_secret_too_large"
    UNSUPPORTED_API_VERSION = "unsupported_api_version"

    # Session state errors
    SESSION_NOT_AUTHENTICATED = "session_not_authenticated"
    SESSION_CLOSED = "session_closed"

    # Technical errors
    TRANSPORT_FAILED = "transport_failed"
    SERVER_ERROR = "server_error"

    # Business errors
    REQUEST_REJECTED = "request_rejected"
    EMPTY_LIST = "empty_list"
    SECRET_NOT_FOUND = "secret_not_found"
    INVALID_RESPONSE = "invalid_response"
