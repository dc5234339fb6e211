"""Unit tests for ConsoleAdapter (structured console logging).

Tests cover:
- JSON and console rendering to a stream
- Log level filtering
- Redaction of sensitive keys
- Error details and context binding
"""

import io
import json

import pytest

from passwordsafe.core.config import PasswordSafeSettings
from passwordsafe.infrastructure.logging import ConsoleAdapter
from tests.conftest import API_KEY, API_URL


def read_events(stream: io.StringIO) -> list[dict]:
    return [json.loads(line) for line in stream.getvalue().splitlines() if line]


@pytest.fixture
def stream() -> io.StringIO:
    return io.StringIO()


@pytest.mark.unit
class TestConsoleAdapterLogging:
    """Test ConsoleAdapter logging methods."""

    def test_info_renders_json_with_context(self, stream):
        """Test info() writes one JSON event with its context."""
        adapter = ConsoleAdapter(use_json=True, stream=stream)

        adapter.info("Managed system created", managed_system_id=7)

        (event,) = read_events(stream)
        assert event["event"] == "Managed system created"
        assert event["level"] == "info"
        assert event["managed_system_id"] == 7
        assert "timestamp" in event

    def test_console_renderer(self, stream):
        adapter = ConsoleAdapter(stream=stream)

        adapter.warning("Retrying", operation="SignAppin")

        output = stream.getvalue()
        assert "Retrying" in output
        assert "operation=SignAppin" in output

    def test_error_with_exception(self, stream):
        """Test error() records exception type and message."""
        adapter = ConsoleAdapter(use_json=True, stream=stream)

        adapter.error("Sign out failed", error=ValueError("bad state"))

        (event,) = read_events(stream)
        assert event["level"] == "error"
        assert event["error_type"] == "ValueError"
        assert event["error_message"] == "bad state"

    def test_error_with_text(self, stream):
        adapter = ConsoleAdapter(use_json=True, stream=stream)

        adapter.critical("Lost", error="connection reset")

        (event,) = read_events(stream)
        assert event["level"] == "critical"
        assert event["error"] == "connection reset"


@pytest.mark.unit
class TestConsoleAdapterFiltering:
    """Test level filtering."""

    def test_debug_filtered_at_info(self, stream):
        adapter = ConsoleAdapter(use_json=True, level="INFO", stream=stream)

        adapter.debug("hidden")
        adapter.info("shown")

        assert [event["event"] for event in read_events(stream)] == ["shown"]

    def test_level_is_case_insensitive(self, stream):
        adapter = ConsoleAdapter(use_json=True, level="debug", stream=stream)

        adapter.debug("shown")

        assert len(read_events(stream)) == 1

    def test_from_settings_uses_log_level(self, stream):
        settings = PasswordSafeSettings(api_url=API_URL, api_key=API_KEY, log_level="warning")
        adapter = ConsoleAdapter.from_settings(settings, use_json=True, stream=stream)

        adapter.info("hidden")
        adapter.warning("shown")

        assert [event["event"] for event in read_events(stream)] == ["shown"]


@pytest.mark.unit
class TestConsoleAdapterRedaction:
    """Test sensitive values never reach the stream."""

    @pytest.mark.parametrize(
        "key", ["access_token", "api_key", "client_secret", "password", "request_id", "secret"]
    )
    def test_sensitive_key_masked(self, stream, key):
        adapter = ConsoleAdapter(use_json=True, stream=stream)

        adapter.info("event", **{key: "top-secret-value"})

        (event,) = read_events(stream)
        assert event[key] == "****"
        assert "top-secret-value" not in stream.getvalue()

    def test_other_keys_untouched(self, stream):
        adapter = ConsoleAdapter(use_json=True, stream=stream)

        adapter.info("event", operation="SignAppin")

        (event,) = read_events(stream)
        assert event["operation"] == "SignAppin"


@pytest.mark.unit
class TestConsoleAdapterBind:
    """Test context binding."""

    def test_bind_returns_new_adapter(self, stream):
        adapter = ConsoleAdapter(use_json=True, stream=stream)

        bound = adapter.bind(operation="GetToken")
        bound.info("with context")
        adapter.info("without context")

        first, second = read_events(stream)
        assert isinstance(bound, ConsoleAdapter)
        assert first["operation"] == "GetToken"
        assert "operation" not in second

    def test_bound_context_redacted(self, stream):
        adapter = ConsoleAdapter(use_json=True, stream=stream).bind(api_key="k" * 10)

        adapter.info("event")

        (event,) = read_events(stream)
        assert event["api_key"] == "****"
