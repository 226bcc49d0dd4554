"""Miniflux webhook payload shapes and the outbound bookmark request.

All models are frozen: an event is never mutated after decoding. Unknown keys
are ignored so newer Miniflux releases can add fields without breaking the
relay. Only ``Feed.id``, ``Entry.id`` and ``Entry.url`` are required; every
other field defaults to its empty value, as Miniflux omits or zeroes them
freely.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, field_validator

NEW_ENTRIES = "new_entries"
SAVE_ENTRY = "save_entry"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class Feed(_Frozen):
    id: int
    user_id: int = 0
    feed_url: str = ""
    site_url: str = ""
    title: str = ""
    checked_at: datetime | None = None


class Enclosure(_Frozen):
    id: int = 0
    user_id: int = 0
    entry_id: int = 0
    url: str = ""
    mime_type: str = ""
    size: int = 0
    media_progression: int = 0


class Entry(_Frozen):
    id: int
    user_id: int = 0
    feed_id: int = 0
    status: str = ""
    hash: str = ""
    title: str = ""
    url: str
    comments_url: str = ""
    published_at: datetime | None = None
    created_at: datetime | None = None
    changed_at: datetime | None = None
    content: str = ""
    share_code: str = ""
    starred: bool = False
    reading_time: int = 0
    enclosures: tuple[Enclosure, ...] = ()
    tags: tuple[str, ...] = ()
    feed: Feed | None = None

    @field_validator("enclosures", "tags", mode="before")
    @classmethod
    def _null_is_empty(cls, value: object) -> object:
        # Go encodes nil slices as null
        return () if value is None else value


class NewEntriesEvent(_Frozen):
    """New entries discovered on one feed."""

    event_type: str = NEW_ENTRIES
    feed: Feed
    entries: tuple[Entry, ...]

    @field_validator("entries", mode="before")
    @classmethod
    def _null_is_empty(cls, value: object) -> object:
        return () if value is None else value


class SaveEntryEvent(_Frozen):
    """User asked Miniflux to save a single entry."""

    event_type: str = SAVE_ENTRY
    entry: Entry


WebhookEvent = NewEntriesEvent | SaveEntryEvent


class BookmarkRequest(_Frozen):
    type: Literal["link"] = "link"
    url: str

    @classmethod
    def for_entry(cls, entry: Entry) -> BookmarkRequest:
        return cls(url=entry.url)
