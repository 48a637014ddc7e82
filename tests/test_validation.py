"""Tests for eftadmin.core.validation module."""

from __future__ import annotations

import pytest

from eftadmin.core import (
    YES_NO_INHERIT,
    InvalidConfigurationError,
    InvalidIdentifierError,
    InvalidImportIdError,
    InvalidURLError,
    parse_import_id,
    validate_choice,
    validate_identifier,
    validate_rule_id,
    validate_server_url,
    validate_site_id,
    validate_timeout,
    validate_user_id,
)


class TestValidateServerURL:
    """Tests for validate_server_url function."""

    def test_valid_https_url(self):
        assert validate_server_url("https://eft.example.com:4450") == "https://eft.example.com:4450"

    def test_valid_http_url(self):
        assert validate_server_url("http://localhost:4450") == "http://localhost:4450"

    def test_strips_whitespace_and_trailing_slashes(self):
        assert validate_server_url("  https://eft.example.com//  ") == "https://eft.example.com"

    @pytest.mark.parametrize("url", ["", "   ", None])
    def test_empty_url_raises(self, url):
        with pytest.raises(InvalidURLError):
            validate_server_url(url)

    def test_no_scheme_raises(self):
        with pytest.raises(InvalidURLError) as exc_info:
            validate_server_url("eft.example.com")
        assert "scheme" in str(exc_info.value)

    def test_unsupported_scheme_raises(self):
        with pytest.raises(InvalidURLError) as exc_info:
            validate_server_url("ftp://eft.example.com")
        assert "http:// or https://" in str(exc_info.value)

    def test_no_hostname_raises(self):
        with pytest.raises(InvalidURLError):
            validate_server_url("https://")


class TestValidateIdentifier:
    """Tests for identifier validation."""

    def test_guid(self):
        guid = "6f1d2e7a-58a1-4b0e-9d52-3a1c5c7f4b10"
        assert validate_identifier(guid) == guid

    def test_strips_whitespace(self):
        assert validate_site_id("  site42 ") == "site42"

    @pytest.mark.parametrize("value", ["", "   "])
    def test_empty_raises(self, value):
        with pytest.raises(InvalidIdentifierError):
            validate_user_id(value)

    @pytest.mark.parametrize("value", ["a/b", "a?b", "a#b"])
    def test_path_breaking_characters_raise(self, value):
        with pytest.raises(InvalidIdentifierError) as exc_info:
            validate_rule_id(value)
        assert exc_info.value.identifier_type == "rule_id"

    def test_too_long_raises(self):
        with pytest.raises(InvalidIdentifierError):
            validate_identifier("x" * 257)

    def test_non_string_raises(self):
        with pytest.raises(InvalidIdentifierError):
            validate_identifier(42)  # type: ignore[arg-type]


class TestParseImportId:
    """Tests for parse_import_id function."""

    def test_valid(self):
        assert parse_import_id("site42/rule7") == ("site42", "rule7")

    @pytest.mark.parametrize("value", ["badformat", "a/b/c", "/rule7", "site42/", "/", ""])
    def test_invalid(self, value):
        with pytest.raises(InvalidImportIdError):
            parse_import_id(value, "rule_id")

    def test_error_names_expected_form(self):
        with pytest.raises(InvalidImportIdError) as exc_info:
            parse_import_id("badformat", "rule_id")
        assert "<site_id>/<rule_id>" in str(exc_info.value)
        assert exc_info.value.import_id == "badformat"


class TestValidateChoice:
    """Tests for validate_choice function."""

    @pytest.mark.parametrize("value", YES_NO_INHERIT)
    def test_allowed(self, value):
        assert validate_choice(value, YES_NO_INHERIT, "account_enabled") == value

    def test_disallowed(self):
        with pytest.raises(InvalidConfigurationError) as exc_info:
            validate_choice("maybe", YES_NO_INHERIT, "account_enabled")
        assert exc_info.value.field == "account_enabled"

    def test_case_sensitive(self):
        with pytest.raises(InvalidConfigurationError):
            validate_choice("Yes", YES_NO_INHERIT, "account_enabled")

    def test_none(self):
        assert validate_choice(None, YES_NO_INHERIT, "f") is None
        with pytest.raises(InvalidConfigurationError):
            validate_choice(None, YES_NO_INHERIT, "f", allow_none=False)


class TestValidateTimeout:
    """Tests for validate_timeout function."""

    def test_valid(self):
        assert validate_timeout(30, "timeout") == 30
        assert validate_timeout("120", "timeout") == 120

    def test_none_returns_default(self):
        assert validate_timeout(None, "timeout", default=60) == 60

    @pytest.mark.parametrize("value", [0, -5, 3601, "abc"])
    def test_invalid(self, value):
        with pytest.raises(InvalidConfigurationError):
            validate_timeout(value, "timeout")
