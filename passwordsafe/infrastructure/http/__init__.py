"""HTTP transport and retry policy.

Usage:
    from passwordsafe.infrastructure.http import PasswordSafeTransport, RetryPolicy
"""

from passwordsafe.infrastructure.http.retry import RetryPolicy, wait_randomized_exponential
from passwordsafe.infrastructure.http.transport import PasswordSafeTransport

__all__ = [
    "PasswordSafeTransport",
    "RetryPolicy",
    "wait_randomized_exponential",
]
