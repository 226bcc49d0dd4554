"""Hoarder bookmark API client.

Submits one ``{"type": "link", "url": ...}`` bookmark per call to
``POST {base_url}/api/v1/bookmarks`` with bearer-token auth. No retries:
each call either succeeds or raises once. The feed reader retries on 5xx.

Security: the API token is sent as a header only, never logged.
"""

from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable

import httpx

from hoarder_relay.errors import BookmarkNetworkError, BookmarkStatusError
from hoarder_relay.webhooks.models import BookmarkRequest, Entry

logger = logging.getLogger(__name__)

BOOKMARKS_PATH = "/api/v1/bookmarks"
DEFAULT_TIMEOUT = 10.0

# Hoarder answers 201 on create, 200 when the link already exists
_SUCCESS_STATUS_CODES = {200, 201}


@runtime_checkable
class BookmarkSink(Protocol):
    """Anything that can turn an entry into a bookmark."""

    async def add_bookmark(self, entry: Entry) -> None:
        """Create a bookmark for *entry*.

        Raises
        ------
        hoarder_relay.errors.BookmarkError
            If the bookmark could not be created.
        """
        ...


class BookmarkClient:
    """Bookmark API client over a shared ``httpx.AsyncClient``."""

    def __init__(
        self,
        base_url: str,
        api_token: str,
        timeout: float = DEFAULT_TIMEOUT,
        client: httpx.AsyncClient | None = None,
    ):
        self._endpoint = base_url.rstrip("/") + BOOKMARKS_PATH
        self._api_token = api_token
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._timeout = timeout

    @property
    def endpoint(self) -> str:
        return self._endpoint

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "Authorization": f"Bearer {self._api_token}",
        }

    async def add_bookmark(self, entry: Entry) -> None:
        """Create a link bookmark for *entry*.

        Raises:
            BookmarkStatusError: API answered with a status other than 200/201.
            BookmarkNetworkError: API could not be reached in time.
        """
        payload = BookmarkRequest.for_entry(entry)

        try:
            resp = await self._client.post(
                self._endpoint,
                content=payload.model_dump_json(),
                headers=self._headers(),
                timeout=self._timeout,
            )
        except httpx.TransportError as e:
            raise BookmarkNetworkError(
                f"failed to send request: {type(e).__name__}: {e}"
            ) from e

        if resp.status_code not in _SUCCESS_STATUS_CODES:
            raise BookmarkStatusError(resp.status_code, resp.text)

        logger.info("Successfully created bookmark. Response: %s", resp.text)

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_client:
            await self._client.aclose()
