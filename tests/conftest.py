"""Shared fixtures for the Password Safe client tests.

HTTP traffic is mocked with respx: every httpx client used during a test,
including the one a session pools, is routed to the `api_mock` router. Routes
are declared relative to API_URL.
"""

from collections.abc import AsyncIterator, Callable, Iterator

import httpx
import pytest
import respx

from passwordsafe.application import PasswordSafeSession
from passwordsafe.infrastructure.http import RetryPolicy

API_URL = "https://fakeurl:8080/BeyondTrust/api/public/v3"
API_KEY = "a" * 128
CLIENT_ID = "6138d050-e266-4b05-9ced-35e7dd5093ae"
CLIENT_SECRET = "71svdPLh2AR97sPs5gfPjGjpqSUxZTKSPmEvvbMx89o="

SIGN_APP_IN_URL = f"{API_URL}/Auth/SignAppIn"
SIGN_OUT_URL = f"{API_URL}/Auth/Signout"
TOKEN_URL = f"{API_URL}/Auth/connect/token"

SIGN_APP_IN_BODY = {
    "UserId": 1,
    "EmailAddress": "app@example.com",
    "UserName": "app-user",
    "Name": "App User",
}


def make_retry_policy(max_attempts: int | None = 3) -> RetryPolicy:
    """Retry policy with millisecond waits and a hard attempt cap."""
    return RetryPolicy(
        initial_interval=0.001,
        multiplier=1.0,
        randomization_factor=0.0,
        max_interval=0.001,
        max_elapsed_time=2.0,
        max_attempts=max_attempts,
    )


@pytest.fixture
def api_mock() -> Iterator[respx.MockRouter]:
    """Router for the mocked Password Safe API; unmatched requests fail."""
    with respx.mock(
        base_url=API_URL, assert_all_mocked=True, assert_all_called=False
    ) as router:
        yield router


@pytest.fixture
def retry_policy() -> RetryPolicy:
    """Fast retry policy: three attempts at most."""
    return make_retry_policy()


@pytest.fixture
async def session_factory(
    retry_policy: RetryPolicy,
) -> AsyncIterator[Callable[..., PasswordSafeSession]]:
    """Build API-key sessions; every session is closed at teardown."""
    sessions: list[PasswordSafeSession] = []

    def _make(**kwargs) -> PasswordSafeSession:
        kwargs.setdefault("retry_policy", retry_policy)
        session = PasswordSafeSession.with_api_key(api_url=API_URL, api_key=API_KEY, **kwargs)
        sessions.append(session)
        return session

    yield _make

    for session in sessions:
        await session.close()


@pytest.fixture
def session(session_factory) -> PasswordSafeSession:
    """Unauthenticated API-key session."""
    return session_factory()


@pytest.fixture
async def authenticated_session(session, api_mock) -> PasswordSafeSession:
    """API-key session that has signed in."""
    api_mock.post("/Auth/SignAppIn").mock(
        return_value=httpx.Response(200, json=SIGN_APP_IN_BODY)
    )
    result = await session.authenticate()
    assert session.is_authenticated, result
    return session


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests with mocked dependencies")
    config.addinivalue_line(
        "markers", "integration: HTTP-level tests against a mocked Password Safe API"
    )
