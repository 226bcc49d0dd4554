"""Payload builders, signing helper and a recording bookmark sink for tests."""

from __future__ import annotations

import json
from typing import Any

from hoarder_relay.errors import BookmarkError
from hoarder_relay.webhooks.models import Entry
from hoarder_relay.webhooks.verification import compute_signature

SECRET = "miniflux-test-secret"


class RecordingSink:
    """Fake bookmark sink: records entries, optionally fails on a given URL."""

    def __init__(self) -> None:
        self.saved: list[Entry] = []
        self.fail_on: set[str] = set()
        self.error: BookmarkError | None = None

    async def add_bookmark(self, entry: Entry) -> None:
        if entry.url in self.fail_on:
            raise self.error or BookmarkError(f"refused {entry.url}")
        self.saved.append(entry)

    @property
    def urls(self) -> list[str]:
        return [e.url for e in self.saved]


def sign(body: bytes, secret: str = SECRET) -> str:
    return compute_signature(secret, body)


def to_body(payload: dict[str, Any]) -> bytes:
    return json.dumps(payload).encode()


def make_entry(entry_id: int = 1, url: str = "https://x.test", **extra: Any) -> dict:
    return {"id": entry_id, "title": f"Entry {entry_id}", "url": url, **extra}


def make_feed(**extra: Any) -> dict:
    return {"id": 7, "user_id": 1, "title": "Test Feed", "feed_url": "https://x.test/rss", **extra}
