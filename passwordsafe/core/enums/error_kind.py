"""Closed classification of every failure the client can return."""

from enum import Enum


class ErrorKind(str, Enum):
    """Top-level error classification.

    TECHNICAL errors are infrastructure failures and the only kind the retry
    policy retries. BUSINESS errors are well-formed rejections or unusable
    results from the remote service. VALIDATION errors are raised locally,
    before any network call.
    """

    TECHNICAL = "technical"
    BUSINESS = "business"
    VALIDATION = "validation"
