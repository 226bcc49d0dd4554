"""Shared fixtures for the hoarder-relay test suite."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from hoarder_relay.config import Settings
from hoarder_relay.serve import create_app
from tests.helpers import SECRET, RecordingSink


@pytest.fixture()
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        _env_file=None,
        webhook_secret=SECRET,
        hoarder_api_url="https://hoarder.test",
        hoarder_api_token="token-123",
        save_new_entries=True,
    )


@pytest.fixture()
def client(settings: Settings, sink: RecordingSink):
    """TestClient wired to the recording sink."""
    app = create_app(settings, bookmarks=sink)
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c
