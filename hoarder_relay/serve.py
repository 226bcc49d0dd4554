"""HTTP entrypoint: app factory and uvicorn runner."""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from hoarder_relay.bookmarks import BookmarkClient, BookmarkSink
from hoarder_relay.config import Settings, load_settings
from hoarder_relay.errors import ConfigError
from hoarder_relay.logging_config import setup_logging
from hoarder_relay.webhooks.dispatcher import WebhookDispatcher
from hoarder_relay.webhooks.handlers import register_webhook_routes

logger = logging.getLogger(__name__)


def create_app(settings: Settings, bookmarks: BookmarkSink | None = None) -> FastAPI:
    """Build the relay application.

    Args:
        settings: Loaded configuration.
        bookmarks: Bookmark sink to use. Defaults to a ``BookmarkClient`` for
            the configured Hoarder API, closed on shutdown.
    """
    owned_client: BookmarkClient | None = None
    if bookmarks is None:
        owned_client = BookmarkClient(
            settings.hoarder_api_url,
            settings.hoarder_api_token,
            timeout=settings.bookmark_timeout,
        )
        bookmarks = owned_client

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            "Relaying to %s (save new entries: %s)",
            settings.hoarder_api_url,
            settings.save_new_entries,
        )
        yield
        if owned_client is not None:
            await owned_client.aclose()

    app = FastAPI(title="hoarder-relay", lifespan=lifespan)

    dispatcher = WebhookDispatcher(
        settings.webhook_secret,
        bookmarks,
        save_new_entries=settings.save_new_entries,
    )
    register_webhook_routes(app, dispatcher)

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


def main() -> None:
    """Load settings, configure logging and serve until interrupted."""
    try:
        settings = load_settings()
    except ConfigError as e:
        setup_logging()
        logger.critical("Failed to load configuration: %s", e)
        sys.exit(1)

    setup_logging(settings.log_level)
    app = create_app(settings)

    logger.info("Starting webhook server on %s:%d", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
