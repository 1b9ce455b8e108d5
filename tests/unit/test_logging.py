"""Unit tests for the structlog processors in atlas_export.utils.logging."""

from __future__ import annotations

import logging

import pytest

from atlas_export.utils.logging import _resolve_level, redact_secrets


class TestRedactSecrets:
    def test_masks_credential_keys(self) -> None:
        event = redact_secrets(
            None,
            "info",
            {
                "event": "credentials_resolved",
                "api_key": "token-123",
                "Authorization": "Basic abc",
                "base_url": "https://acme.atlassian.net",
            },
        )

        assert event["api_key"] == "***"
        assert event["Authorization"] == "***"
        assert event["base_url"] == "https://acme.atlassian.net"
        assert event["event"] == "credentials_resolved"

    def test_leaves_empty_values_alone(self) -> None:
        event = redact_secrets(None, "info", {"event": "x", "token": None})
        assert event["token"] is None


@pytest.mark.parametrize(
    ("name", "expected"),
    [("debug", logging.DEBUG), ("WARNING", logging.WARNING), ("chatty", logging.INFO)],
)
def test_resolve_level(name: str, expected: int) -> None:
    assert _resolve_level(name) == expected
