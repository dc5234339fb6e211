"""Integration tests for ManagedAccountService.

Tests for:
- The four step credential-release handshake
- Retry behaviour per error kind
- Per-item isolation in batches, including a failed check-in
- Request id masking

Uses respx to mock HTTP responses.
"""

import json
from unittest.mock import MagicMock

import httpx
import pytest

from passwordsafe.application import ManagedAccountService
from passwordsafe.core.enums import ErrorCode, ErrorKind
from passwordsafe.core.result import Failure, Success
from passwordsafe.domain.entities import AccessRequest, ManagedAccountIdentity
from passwordsafe.domain.errors import BusinessError, TechnicalError
from tests.conftest import SIGN_APP_IN_BODY


def mock_lookup(api_mock, system, account, *, system_id=1, account_id=10, status=200):
    if status == 200:
        response = httpx.Response(200, json={"SystemId": system_id, "AccountId": account_id})
    else:
        response = httpx.Response(status, text="not found")
    return api_mock.get(
        "/ManagedAccounts", params={"systemName": system, "accountName": account}
    ).mock(return_value=response)


def mock_request(api_mock, request_id="124"):
    return api_mock.post("/Requests").mock(return_value=httpx.Response(200, text=request_id))


def mock_credential(api_mock, request_id="124", credential='"secretA"'):
    return api_mock.get(f"/Credentials/{request_id}").mock(
        return_value=httpx.Response(200, text=credential)
    )


def mock_check_in(api_mock, request_id="124", **kwargs):
    kwargs = kwargs or {"return_value": httpx.Response(204)}
    return api_mock.put(f"/Requests/{request_id}/checkin").mock(**kwargs)


@pytest.fixture
def service(authenticated_session) -> ManagedAccountService:
    return ManagedAccountService(authenticated_session)


@pytest.mark.integration
class TestReleaseHandshake:
    """Tests for a single managed account."""

    async def test_get_secret(self, service, api_mock):
        lookup = mock_lookup(api_mock, "sysA", "acct1")
        create = mock_request(api_mock)
        fetch = mock_credential(api_mock)
        check_in = mock_check_in(api_mock)

        result = await service.get_secret("sysA/acct1")

        assert result == Success(value="secretA")
        assert lookup.call_count == create.call_count == fetch.call_count == 1
        assert check_in.call_count == 1
        assert json.loads(create.calls.last.request.content) == {
            "SystemID": 1,
            "AccountID": 10,
            "DurationMinutes": 5,
            "Reason": "Credential retrieval",
            "ConflictOption": "reuse",
        }
        assert json.loads(check_in.calls.last.request.content) == {}

    async def test_credential_unquoted(self, service, api_mock):
        """Test the JSON string literal body is decoded."""
        mock_credential(api_mock, credential='"fake_credential"')

        request = AccessRequest(request_id="124", system_id=1, account_id=10)
        result = await service.get_credential(request)

        assert result == Success(value="fake_credential")

    async def test_credential_escapes_decoded(self, service, api_mock):
        mock_credential(api_mock, credential='"pa\\"ss\\\\word"')

        request = AccessRequest(request_id="124", system_id=1, account_id=10)
        result = await service.get_credential(request)

        assert result == Success(value='pa"ss\\word')

    async def test_unquoted_credential_rejected(self, service, api_mock):
        mock_credential(api_mock, credential="plain-secret")

        request = AccessRequest(request_id="124", system_id=1, account_id=10)
        result = await service.get_credential(request)

        assert isinstance(result, Failure)
        assert result.error.code is ErrorCode.INVALID_RESPONSE
        assert "plain-secret" not in result.error.message

    async def test_lookup_is_idempotent(self, service, api_mock):
        mock_lookup(api_mock, "sysA", "acct1", system_id=7, account_id=70)

        first = await service.get_managed_account("sysA", "acct1")
        second = await service.get_managed_account("sysA", "acct1")

        assert first == second == Success(
            value=ManagedAccountIdentity(system_id=7, account_id=70)
        )

    async def test_create_request(self, service, api_mock):
        mock_request(api_mock, request_id="555\n")

        result = await service.create_request(
            ManagedAccountIdentity(system_id=1, account_id=10), reason="deploy"
        )

        assert isinstance(result, Success)
        assert result.value.request_id == "555"
        assert result.value.reason == "deploy"

    async def test_invalid_lookup_body(self, service, api_mock):
        api_mock.get("/ManagedAccounts").mock(return_value=httpx.Response(200, text="[]"))

        result = await service.get_managed_account("sysA", "acct1")

        assert isinstance(result, Failure)
        assert result.error.code is ErrorCode.INVALID_RESPONSE

    async def test_single_failure_annotated(self, service, api_mock):
        mock_lookup(api_mock, "sysA", "acct1", status=404)

        result = await service.get_secret("sysA/acct1")

        assert isinstance(result, Failure)
        assert result.error.details == {"path": "sysA/acct1", "stage": "lookup"}

    async def test_failed_fetch_still_checks_in(self, service, api_mock):
        """Test the access request is checked in when the credential fetch fails."""
        mock_lookup(api_mock, "sysA", "acct1")
        mock_request(api_mock)
        api_mock.get("/Credentials/124").mock(
            return_value=httpx.Response(403, text="forbidden")
        )
        check_in = mock_check_in(api_mock)

        batch = await service.get_secrets(["sysA/acct1"])

        assert check_in.call_count == 1
        assert "sysA/acct1" not in batch.values
        assert batch.last_error.status_code == 403
        assert batch.last_error.details == {"path": "sysA/acct1", "stage": "credential_fetch"}

    async def test_failed_fetch_and_check_in_reports_fetch(self, service, api_mock):
        mock_lookup(api_mock, "sysA", "acct1")
        mock_request(api_mock)
        api_mock.get("/Credentials/124").mock(
            return_value=httpx.Response(403, text="forbidden")
        )
        check_in = mock_check_in(api_mock, return_value=httpx.Response(404, text="gone"))

        result = await service.get_secret("sysA/acct1")

        assert isinstance(result, Failure)
        assert result.error.status_code == 403
        assert result.error.details["stage"] == "credential_fetch"
        assert check_in.call_count == 1

    @pytest.mark.parametrize("duration_minutes", [0, -5])
    async def test_create_request_invalid_duration(self, service, api_mock, duration_minutes):
        """Test an invalid duration fails locally without a request."""
        create = mock_request(api_mock)

        result = await service.create_request(
            ManagedAccountIdentity(system_id=1, account_id=10),
            duration_minutes=duration_minutes,
        )

        assert isinstance(result, Failure)
        assert result.error.code is ErrorCode.VALIDATION_FAILED
        assert result.error.kind is ErrorKind.VALIDATION
        assert result.error.field == "access_request"
        assert not create.called

    async def test_requires_authenticated_session(self, session, api_mock):
        result = await ManagedAccountService(session).get_secret("sysA/acct1")

        assert isinstance(result, Failure)
        assert result.error.code is ErrorCode.SESSION_NOT_AUTHENTICATED
        assert not api_mock.calls


@pytest.mark.integration
class TestRetryPerErrorKind:
    """Tests for which failures are retried."""

    async def test_technical_error_retried(self, service, api_mock):
        lookup = api_mock.get("/ManagedAccounts").mock(return_value=httpx.Response(500))

        result = await service.get_managed_account("sysA", "acct1")

        assert isinstance(result, Failure)
        assert isinstance(result.error, TechnicalError)
        assert lookup.call_count > 1

    async def test_timeout_retried(self, service, api_mock):
        lookup = api_mock.get("/ManagedAccounts").mock(
            side_effect=httpx.ReadTimeout("timed out")
        )

        result = await service.get_managed_account("sysA", "acct1")

        assert isinstance(result, Failure)
        assert result.error.code is ErrorCode.TRANSPORT_FAILED
        assert lookup.call_count == 3

    async def test_business_error_called_once(self, service, api_mock):
        lookup = api_mock.get("/ManagedAccounts").mock(
            return_value=httpx.Response(400, text="bad request")
        )

        result = await service.get_managed_account("sysA", "acct1")

        assert isinstance(result, Failure)
        assert isinstance(result.error, BusinessError)
        assert lookup.call_count == 1

    async def test_recovers_after_transient_error(self, service, api_mock):
        api_mock.get("/ManagedAccounts").mock(
            side_effect=[
                httpx.Response(503),
                httpx.Response(200, json={"SystemId": 1, "AccountId": 10}),
            ]
        )

        result = await service.get_managed_account("sysA", "acct1")

        assert result == Success(value=ManagedAccountIdentity(system_id=1, account_id=10))


@pytest.mark.integration
class TestBatch:
    """Tests for get_secrets."""

    async def test_empty_batch(self, session, api_mock):
        """Test an empty batch fails before any check or request."""
        batch = await ManagedAccountService(session).get_secrets([])

        assert batch.values == {}
        assert isinstance(batch.last_error, BusinessError)
        assert batch.last_error.code is ErrorCode.EMPTY_LIST
        assert batch.last_error.message == "empty managed account list"
        assert not api_mock.calls

    async def test_not_authenticated(self, session, api_mock):
        batch = await ManagedAccountService(session).get_secrets(["sysA/acct1"])

        assert batch.values == {}
        assert batch.last_error.code is ErrorCode.SESSION_NOT_AUTHENTICATED
        assert not api_mock.calls

    async def test_all_succeed(self, service, api_mock):
        mock_lookup(api_mock, "sysA", "acct1")
        mock_lookup(api_mock, "sysB", "acct2", system_id=2, account_id=20)
        mock_request(api_mock)
        mock_credential(api_mock)
        mock_check_in(api_mock)

        batch = await service.get_secrets(["sysA/acct1", "sysB/acct2"])

        assert batch.values == {"sysA/acct1": "secretA", "sysB/acct2": "secretA"}
        assert batch.is_complete
        assert batch.errors == {}

    async def test_lookup_failure_does_not_stop_batch(self, service, api_mock):
        """Test a failure at item k leaves items after k unaffected."""
        mock_lookup(api_mock, "sysA", "acct1")
        mock_lookup(api_mock, "sysA", "missing", status=404)
        mock_lookup(api_mock, "sysA", "acct3")
        mock_request(api_mock)
        mock_credential(api_mock)
        mock_check_in(api_mock)

        batch = await service.get_secrets(["sysA/acct1", "sysA/missing", "sysA/acct3"])

        assert batch.values == {"sysA/acct1": "secretA", "sysA/acct3": "secretA"}
        assert list(batch.errors) == ["sysA/missing"]
        assert batch.last_error.status_code == 404
        assert batch.last_error.details == {"path": "sysA/missing", "stage": "lookup"}

    async def test_invalid_path_does_not_stop_batch(self, service, api_mock):
        mock_lookup(api_mock, "sysA", "acct1")
        mock_request(api_mock)
        mock_credential(api_mock)
        mock_check_in(api_mock)

        batch = await service.get_secrets(["no-separator", "sysA/acct1"])

        assert batch.values == {"sysA/acct1": "secretA"}
        error = batch.errors["no-separator"]
        assert error.kind is ErrorKind.VALIDATION
        assert error.details["stage"] == "parse"

    async def test_custom_separator(self, service, api_mock):
        mock_lookup(api_mock, "sysA", "acct1")
        mock_request(api_mock)
        mock_credential(api_mock)
        mock_check_in(api_mock)

        batch = await service.get_secrets(["sysA|acct1"], separator="|")

        assert batch.values == {"sysA|acct1": "secretA"}

    @pytest.mark.parametrize("separator", ["", "::"])
    async def test_invalid_separator(self, service, api_mock, separator):
        """Test a bad separator fails each item instead of raising."""
        lookup = api_mock.get("/ManagedAccounts")

        batch = await service.get_secrets(["sysA/acct1", "sysB/acct2"], separator=separator)

        assert batch.values == {}
        assert set(batch.errors) == {"sysA/acct1", "sysB/acct2"}
        assert batch.last_error.code is ErrorCode.INVALID_PATH
        assert batch.last_error.details["stage"] == "parse"
        assert not lookup.called

    async def test_check_in_failure_discards_value(self, service, api_mock):
        """Test a failed check-in keeps the credential out of the result."""
        mock_lookup(api_mock, "sysA", "acct1")
        mock_lookup(api_mock, "sysA", "acct2", system_id=1, account_id=11)
        mock_request(api_mock, request_id="124")
        mock_credential(api_mock, request_id="124", credential='"secretA"')

        check_in = mock_check_in(
            api_mock,
            request_id="124",
            side_effect=[httpx.Response(200)] + [httpx.Response(504)] * 3,
        )

        batch = await service.get_secrets(["sysA/acct1", "sysA/acct2"])

        assert batch.values == {"sysA/acct1": "secretA"}
        assert isinstance(batch.last_error, TechnicalError)
        assert batch.last_error.details == {"path": "sysA/acct2", "stage": "check_in"}
        assert batch.errors == {"sysA/acct2": batch.last_error}
        assert check_in.call_count == 1 + 3


@pytest.mark.integration
class TestRequestIdMasking:
    """Tests that request ids never reach the logs."""

    async def test_request_id_not_logged(self, session_factory, api_mock):
        logger = MagicMock()
        session = session_factory(logger=logger)
        api_mock.post("/Auth/SignAppIn").mock(
            return_value=httpx.Response(200, json=SIGN_APP_IN_BODY)
        )
        mock_lookup(api_mock, "sysA", "acct1")
        mock_request(api_mock, request_id="98765")
        mock_credential(api_mock, request_id="98765")
        mock_check_in(api_mock, request_id="98765")
        await session.authenticate()

        result = await ManagedAccountService(session, logger=logger).get_secret("sysA/acct1")

        assert result == Success(value="secretA")
        logged = " ".join(str(call) for call in logger.mock_calls)
        assert "98765" not in logged
        assert "****" in logged
