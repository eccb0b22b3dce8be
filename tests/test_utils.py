"""Tests for nscli/utils.py - parsing and environment helpers."""

from __future__ import annotations

import datetime as dt

import pytest
from nscli.exceptions import UserError
from nscli.utils import (
    env_api_secret,
    env_debug,
    env_site_url,
    env_timeout,
    format_number,
    hash_api_secret,
    is_absolute_url,
    parse_int,
    parse_timestamp,
)


class TestParseInt:
    """Tests for parse_int."""

    @pytest.mark.parametrize(("text", "expected"), [("5", 5), ("+5", 5), ("-5", -5), ("0", 0)])
    def test_integers(self, text: str, expected: int):
        assert parse_int(text) == expected

    @pytest.mark.parametrize("text", ["", "abc", "1.5", " 5", "1_000", "-", "5e2"])
    def test_not_integers(self, text: str):
        assert parse_int(text) is None


class TestIsAbsoluteUrl:
    """Tests for is_absolute_url."""

    @pytest.mark.parametrize(
        "text", ["https://ns.example.com", "http://localhost:1337", "https://x.herokuapp.com/"]
    )
    def test_valid(self, text: str):
        assert is_absolute_url(text)

    @pytest.mark.parametrize("text", [None, "", "ns.example.com", "/api/v1", "ftp://x.com", "-e"])
    def test_invalid(self, text: str | None):
        assert not is_absolute_url(text)


class TestParseTimestamp:
    """Tests for parse_timestamp."""

    def test_epoch_millis(self):
        assert parse_timestamp(1774101600000) == dt.datetime(2026, 3, 21, 14, 0, tzinfo=dt.UTC)

    def test_iso_with_z(self):
        assert parse_timestamp("2026-03-21T14:00:00.000Z") == dt.datetime(
            2026, 3, 21, 14, 0, tzinfo=dt.UTC
        )

    def test_iso_with_offset(self):
        assert parse_timestamp("2026-03-21T10:00:00-04:00") == dt.datetime(
            2026, 3, 21, 14, 0, tzinfo=dt.UTC
        )

    def test_naive_is_utc(self):
        assert parse_timestamp("2026-03-21T14:00:00") == dt.datetime(
            2026, 3, 21, 14, 0, tzinfo=dt.UTC
        )

    @pytest.mark.parametrize("value", [None, "", "yesterday", True, {}])
    def test_unparseable(self, value):
        assert parse_timestamp(value) is None


class TestFormatNumber:
    """Tests for format_number."""

    @pytest.mark.parametrize(
        ("value", "expected"), [(30, "30"), (30.0, "30"), (2.5, "2.5"), (0.05, "0.05"), (-3.0, "-3")]
    )
    def test_shortest_form(self, value: float, expected: str):
        assert format_number(value) == expected


class TestEnvironment:
    """Tests for environment-driven settings."""

    def test_hash_api_secret(self):
        """The secret is sent as its SHA1 hex digest."""
        assert hash_api_secret("abc") == "a9993e364706816aba3e25717850c26c9cd0d89d"

    def test_site_and_secret(self):
        env = {"NS_SITE": "https://ns.example.com", "NS_API_SECRET": ""}
        assert env_site_url(env) == "https://ns.example.com"
        assert env_api_secret(env) is None
        assert env_site_url({}) is None

    @pytest.mark.parametrize(("value", "expected"), [("1", True), ("TRUE", True), ("0", False)])
    def test_debug(self, value: str, expected: bool):
        assert env_debug({"NS_DEBUG": value}) is expected

    def test_debug_unset(self):
        assert env_debug({}) is False

    def test_timeout_default(self):
        assert env_timeout({}) == 30.0

    def test_timeout_override(self):
        assert env_timeout({"NS_TIMEOUT": "5"}) == 5.0

    @pytest.mark.parametrize("value", ["soon", "0", "-2"])
    def test_timeout_invalid(self, value: str):
        with pytest.raises(UserError, match="NS_TIMEOUT"):
            env_timeout({"NS_TIMEOUT": value})
