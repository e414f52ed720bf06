"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from pathlib import Path
from typing import cast

import pytest

from discord_hook import Webhook
from discord_hook.transport import HTTPTransport
from tests.fixtures.transport_mocks import WEBHOOK_URL, MockTransport


@pytest.fixture
def mock_transport() -> MockTransport:
    """Provide a transport answering 204 No Content."""
    return MockTransport()


@pytest.fixture
def webhook(mock_transport: MockTransport) -> Webhook:
    """Provide a webhook client wired to the mock transport."""
    # Using object intermediary for Protocol cast as per type safety guidelines
    return Webhook(WEBHOOK_URL, transport=cast(HTTPTransport, cast(object, mock_transport)))


@pytest.fixture
def text_file(tmp_path: Path) -> Path:
    """Create a small text file to attach."""
    path = tmp_path / "report.txt"
    _ = path.write_text("mover finished\n", encoding="utf-8")
    return path


@pytest.fixture
def image_file(tmp_path: Path) -> Path:
    """Create a fake PNG file to attach."""
    path = tmp_path / "chart.png"
    _ = path.write_bytes(b"\x89PNG\r\n\x1a\n" + b"\x00" * 16)
    return path
