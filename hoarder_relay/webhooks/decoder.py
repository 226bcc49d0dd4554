"""Event decoding: turns a verified body into a typed webhook event.

The ``X-Miniflux-Event-Type`` header selects the shape. The body's own
``event_type`` field is optional, but when present it must agree with the
header; a disagreement is treated as a malformed payload.
"""

from __future__ import annotations

import json
import logging

from pydantic import BaseModel, ValidationError

from hoarder_relay.errors import MalformedPayload, UnknownEventType
from hoarder_relay.webhooks.models import (
    NEW_ENTRIES,
    SAVE_ENTRY,
    NewEntriesEvent,
    SaveEntryEvent,
    WebhookEvent,
)

logger = logging.getLogger(__name__)

_EVENT_MODELS: dict[str, type[BaseModel]] = {
    NEW_ENTRIES: NewEntriesEvent,
    SAVE_ENTRY: SaveEntryEvent,
}


def decode_event(event_type: str | None, body: bytes) -> WebhookEvent:
    """Decode *body* into the event shape named by *event_type*.

    Raises:
        UnknownEventType: *event_type* is missing or not supported.
        MalformedPayload: body is not JSON, misses required fields, or its
            ``event_type`` field contradicts the header.
    """
    model = _EVENT_MODELS.get(event_type or "")
    if model is None:
        raise UnknownEventType(event_type)

    try:
        raw = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MalformedPayload(f"invalid JSON: {e}") from e

    if not isinstance(raw, dict):
        raise MalformedPayload("payload is not a JSON object")

    body_type = raw.get("event_type")
    if body_type is not None and body_type != event_type:
        raise MalformedPayload(
            f"event_type {body_type!r} does not match header {event_type!r}"
        )

    try:
        event = model.model_validate(raw)
    except ValidationError as e:
        raise MalformedPayload(
            f"{e.error_count()} validation error(s) for {event_type}"
        ) from e

    logger.debug("Decoded %s event", event_type)
    return event  # type: ignore[return-value]
