"""Unit tests for secret and managed account reference validation."""

from unittest.mock import MagicMock

import pytest

from passwordsafe.core.enums import ErrorCode
from passwordsafe.core.result import Failure, Success
from passwordsafe.domain.validators import (
    validate_paths,
    validate_resource_id,
    validate_separator,
    validate_single_path,
)


@pytest.mark.unit
class TestValidateSinglePath:
    """Test validate_single_path."""

    def test_managed_account_path(self):
        result = validate_single_path("system01/account01", "/", is_managed_account=True)
        assert result == Success(value="system01/account01")

    def test_whitespace_trimmed(self):
        result = validate_single_path(" system01 / account01 ", "/", is_managed_account=True)
        assert result == Success(value="system01/account01")

    def test_managed_account_rejects_nested_path(self):
        result = validate_single_path("a/b/c", "/", is_managed_account=True)

        assert isinstance(result, Failure)
        assert result.error.code is ErrorCode.INVALID_PATH
        assert result.error.details == {"path": "a/b/c"}

    def test_managed_account_requires_separator(self):
        result = validate_single_path("account01", "/", is_managed_account=True)
        assert isinstance(result, Failure)

    def test_system_name_too_long(self):
        result = validate_single_path("s" * 129 + "/acct", "/", is_managed_account=True)

        assert isinstance(result, Failure)
        assert "system name length=129" in result.error.message

    def test_account_name_too_long(self):
        result = validate_single_path("sys/" + "a" * 246, "/", is_managed_account=True)

        assert isinstance(result, Failure)
        assert "account name length=246" in result.error.message

    def test_secret_nested_path(self):
        result = validate_single_path("oauthgrp/folder1/title", "/", is_managed_account=False)
        assert result == Success(value="oauthgrp/folder1/title")

    def test_secret_depth_limit(self):
        path = "/".join(["f"] * 8) + "/title"
        result = validate_single_path(path, "/", is_managed_account=False)

        assert isinstance(result, Failure)
        assert "path depth=8" in result.error.message

    def test_secret_max_depth_accepted(self):
        path = "/".join(["f"] * 7) + "/title"
        assert isinstance(validate_single_path(path, "/", is_managed_account=False), Success)

    def test_secret_title_too_long(self):
        result = validate_single_path("folder/" + "t" * 257, "/", is_managed_account=False)
        assert isinstance(result, Failure)

    def test_custom_separator(self):
        result = validate_single_path("folder-title", "-", is_managed_account=False)
        assert result == Success(value="folder-title")

    @pytest.mark.parametrize("separator", ["", "//"])
    @pytest.mark.parametrize("is_managed_account", [True, False])
    def test_invalid_separator(self, separator, is_managed_account):
        result = validate_single_path(
            "folder/title", separator, is_managed_account=is_managed_account
        )

        assert isinstance(result, Failure)
        assert result.error.code is ErrorCode.INVALID_PATH
        assert result.error.details == {"path": "folder/title"}


@pytest.mark.unit
class TestValidateSeparator:
    """Test validate_separator."""

    def test_single_character(self):
        assert validate_separator("|") == Success(value="|")

    @pytest.mark.parametrize("separator", ["", "ab"])
    def test_rejected(self, separator):
        result = validate_separator(separator)

        assert isinstance(result, Failure)
        assert result.error.field == "separator"


@pytest.mark.unit
class TestValidatePaths:
    """Test validate_paths."""

    def test_blank_entries_skipped(self):
        logger = MagicMock()

        validated = validate_paths(
            ["sys/acct", "  ", "sys/acct2"], "/", is_managed_account=True, logger=logger
        )

        assert validated == ["sys/acct", "sys/acct2"]
        logger.error.assert_called_once()

    def test_stops_at_first_invalid(self):
        """Test entries after the first invalid one are not returned."""
        validated = validate_paths(
            ["sys/acct", "invalid", "sys/acct2"],
            "/",
            is_managed_account=True,
            logger=MagicMock(),
        )

        assert validated == ["sys/acct"]

    def test_empty_list(self):
        assert validate_paths([], "/", is_managed_account=False) == []


@pytest.mark.unit
class TestValidateResourceId:
    """Test validate_resource_id."""

    def test_integer_string(self):
        assert validate_resource_id("13", "Asset") == Success(value=13)

    @pytest.mark.parametrize("resource_id", ["", "abc", "0", "-4", "1.5"])
    def test_invalid_ids(self, resource_id):
        result = validate_resource_id(resource_id, "Asset")

        assert isinstance(result, Failure)
        assert result.error.code is ErrorCode.INVALID_RESOURCE_ID
        assert result.error.field == "asset_id"
