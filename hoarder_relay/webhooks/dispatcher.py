"""Webhook event dispatcher: verifies, decodes and routes Miniflux events.

Maps each event type to a bookmark action:
- new_entries: one bookmark per entry, in order, only when enabled
- save_entry: always one bookmark

Security contract:
- Signature is checked against the raw body before any parsing
- Batch submission is fail-fast: the first bookmark failure stops the batch
- No state is kept between requests
"""

from __future__ import annotations

import logging

from hoarder_relay.bookmarks import BookmarkSink
from hoarder_relay.errors import BookmarkError, DownstreamFailure, SignatureMismatch
from hoarder_relay.webhooks.decoder import decode_event
from hoarder_relay.webhooks.models import (
    Entry,
    NewEntriesEvent,
    SaveEntryEvent,
    WebhookEvent,
)
from hoarder_relay.webhooks.verification import verify_signature

logger = logging.getLogger(__name__)


class WebhookDispatcher:
    """Single-pass pipeline: verify -> decode -> route -> bookmark."""

    def __init__(
        self,
        secret: bytes | str,
        bookmarks: BookmarkSink,
        save_new_entries: bool = False,
    ):
        self._secret = secret
        self._bookmarks = bookmarks
        self._save_new_entries = save_new_entries

    @property
    def save_new_entries(self) -> bool:
        return self._save_new_entries

    async def dispatch(
        self, signature: str, event_type: str | None, body: bytes
    ) -> WebhookEvent:
        """Verify and handle one webhook delivery.

        Returns the decoded event on success.

        Raises:
            SignatureMismatch: signature does not match the body.
            UnknownEventType: event type header not supported.
            MalformedPayload: body does not decode into the event shape.
            DownstreamFailure: a bookmark could not be created.
        """
        if not verify_signature(self._secret, body, signature):
            raise SignatureMismatch()

        event = decode_event(event_type, body)

        if isinstance(event, NewEntriesEvent):
            await self.handle_new_entries(event)
        elif isinstance(event, SaveEntryEvent):
            await self.handle_save_entry(event)
        return event

    async def handle_new_entries(self, event: NewEntriesEvent) -> int:
        """Bookmark every entry of the event. Returns the number saved."""
        if not self._save_new_entries:
            logger.info(
                "Ignoring %d new entries from feed %r (SAVE_NEW_ENTRIES disabled)",
                len(event.entries),
                event.feed.title,
            )
            return 0

        logger.info(
            "Processing %d new entries from feed: %s",
            len(event.entries),
            event.feed.title,
        )
        saved = 0
        for entry in event.entries:
            try:
                await self._save(entry)
            except BookmarkError as e:
                raise DownstreamFailure("Error processing entries", e) from e
            saved += 1
        return saved

    async def handle_save_entry(self, event: SaveEntryEvent) -> None:
        entry = event.entry
        logger.info("Processing saved entry: %s - %s", entry.title, entry.url)
        try:
            await self._save(entry)
        except BookmarkError as e:
            raise DownstreamFailure("Error processing saved entry", e) from e

    async def _save(self, entry: Entry) -> None:
        try:
            await self._bookmarks.add_bookmark(entry)
        except BookmarkError as e:
            logger.error("Failed to save bookmark for %s: %s", entry.url, e)
            raise
        logger.info("Successfully saved bookmark for: %s", entry.url)
