"""Shared pytest fixtures for nscli tests."""

from __future__ import annotations

import pytest
from helpers import FakeClient, make_entry, make_treatment


@pytest.fixture
def fake_client() -> FakeClient:
    """A FakeClient with a few entries and treatments, newest first."""
    return FakeClient(
        entries=[make_entry(10, 120), make_entry(5, 115), make_entry(0, 110)],
        treatments=[make_treatment(20), make_treatment(10), make_treatment(0)],
    )


@pytest.fixture
def site_env(monkeypatch) -> str:
    """Point NS_SITE at a test site and clear the other NS_* settings."""
    site = "https://ns.example.com"
    monkeypatch.setenv("NS_SITE", site)
    for name in ("NS_API_SECRET", "NS_TIMEOUT", "NS_DEBUG"):
        monkeypatch.delenv(name, raising=False)
    return site
