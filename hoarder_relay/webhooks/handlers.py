"""Webhook HTTP handlers: FastAPI route for inbound Miniflux webhooks.

The handler:
1. Rejects anything but POST (405)
2. Requires X-Miniflux-Signature (400)
3. Reads the raw body (500 on I/O failure)
4. Hands off to the dispatcher for verify/decode/route
5. Returns 200 with an empty body

Every RelayError becomes a plain-text response with its status code.
"""

from __future__ import annotations

import logging
import time

from fastapi import FastAPI, Request, Response
from fastapi.responses import PlainTextResponse
from starlette.requests import ClientDisconnect

from hoarder_relay.errors import (
    BodyReadFailure,
    InvalidMethod,
    MissingSignature,
    RelayError,
)
from hoarder_relay.webhooks.dispatcher import WebhookDispatcher

logger = logging.getLogger(__name__)

WEBHOOK_PATH = "/webhook"
SIGNATURE_HEADER = "x-miniflux-signature"
EVENT_TYPE_HEADER = "x-miniflux-event-type"

# Every method is routed here so non-POST gets our own 405 body
_ALL_METHODS = [
    "GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "TRACE", "CONNECT",
]


def _log_webhook(event_type: str, status: str) -> None:
    """Audit log for webhook activity."""
    logger.info("WEBHOOK_AUDIT event=%s status=%s", event_type or "-", status)


async def _handle_webhook(request: Request, dispatcher: WebhookDispatcher) -> Response:
    start = time.time()

    if request.method != "POST":
        raise InvalidMethod(request.method)

    signature = request.headers.get(SIGNATURE_HEADER, "")
    if not signature:
        raise MissingSignature()

    event_type = request.headers.get(EVENT_TYPE_HEADER)

    try:
        body = await request.body()
    except (ClientDisconnect, OSError) as e:
        raise BodyReadFailure() from e

    await dispatcher.dispatch(signature, event_type, body)

    _log_webhook(event_type or "", "ok")
    elapsed_ms = (time.time() - start) * 1000
    logger.debug("Webhook processed in %.1fms: %s", elapsed_ms, event_type)
    return Response(status_code=200)


async def relay_error_handler(request: Request, exc: RelayError) -> PlainTextResponse:
    """Map a RelayError to its plain-text response."""
    event_type = request.headers.get(EVENT_TYPE_HEADER, "")
    _log_webhook(event_type, type(exc).__name__)
    level = logging.ERROR if exc.status_code >= 500 else logging.WARNING
    outcome = "failed" if exc.status_code >= 500 else "rejected"
    if exc.detail:
        logger.log(level, "Webhook %s (%d): %s (%s)", outcome, exc.status_code, exc.message, exc.detail)
    else:
        logger.log(level, "Webhook %s (%d): %s", outcome, exc.status_code, exc.message)
    return PlainTextResponse(exc.message, status_code=exc.status_code)


def register_webhook_routes(app: FastAPI, dispatcher: WebhookDispatcher) -> None:
    """Register the webhook route and the RelayError handler on *app*."""

    @app.api_route(WEBHOOK_PATH, methods=_ALL_METHODS, include_in_schema=False)
    async def miniflux_webhook(request: Request):
        """Receive Miniflux webhooks (signature-verified)."""
        return await _handle_webhook(request, dispatcher)

    app.add_exception_handler(RelayError, relay_error_handler)

    logger.info("Webhook route registered: %s", WEBHOOK_PATH)
