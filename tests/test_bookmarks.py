"""Tests for the Hoarder bookmark client (httpx.MockTransport, no network)."""

from __future__ import annotations

import json

import httpx
import pytest

from hoarder_relay.bookmarks import BookmarkClient, BookmarkSink
from hoarder_relay.errors import BookmarkNetworkError, BookmarkStatusError
from hoarder_relay.webhooks.models import Entry

ENTRY = Entry(id=1, title="T", url="https://x.test")


def _client(handler, base_url: str = "https://hoarder.test") -> BookmarkClient:
    transport = httpx.MockTransport(handler)
    return BookmarkClient(
        base_url,
        "token-123",
        client=httpx.AsyncClient(transport=transport),
    )


class TestAddBookmark:
    @pytest.mark.asyncio
    async def test_posts_link_bookmark(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(201, json={"id": "bm_1"})

        await _client(handler).add_bookmark(ENTRY)

        assert len(seen) == 1
        req = seen[0]
        assert req.method == "POST"
        assert str(req.url) == "https://hoarder.test/api/v1/bookmarks"
        assert req.headers["Authorization"] == "Bearer token-123"
        assert req.headers["Content-Type"] == "application/json"
        assert req.headers["Accept"] == "application/json"
        assert json.loads(req.content) == {"type": "link", "url": "https://x.test"}

    @pytest.mark.asyncio
    async def test_trailing_slash_in_base_url(self):
        seen: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(str(request.url))
            return httpx.Response(200)

        client = _client(handler, base_url="https://hoarder.test/")
        assert client.endpoint == "https://hoarder.test/api/v1/bookmarks"
        await client.add_bookmark(ENTRY)
        assert seen == ["https://hoarder.test/api/v1/bookmarks"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [200, 201])
    async def test_success_statuses(self, status):
        await _client(lambda request: httpx.Response(status)).add_bookmark(ENTRY)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [202, 204, 400, 401, 404, 500, 503])
    async def test_other_statuses_fail(self, status):
        client = _client(lambda request: httpx.Response(status, text="nope"))
        with pytest.raises(BookmarkStatusError) as exc_info:
            await client.add_bookmark(ENTRY)
        assert exc_info.value.status_code == status
        assert exc_info.value.body == "nope"
        assert str(status) in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_connection_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(BookmarkNetworkError, match="ConnectError"):
            await _client(handler).add_bookmark(ENTRY)

    @pytest.mark.asyncio
    async def test_timeout(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(BookmarkNetworkError, match="ReadTimeout"):
            await _client(handler).add_bookmark(ENTRY)

    @pytest.mark.asyncio
    async def test_no_retry_on_failure(self):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(503)

        with pytest.raises(BookmarkStatusError):
            await _client(handler).add_bookmark(ENTRY)
        assert len(calls) == 1


class TestLifecycle:
    def test_is_bookmark_sink(self):
        assert isinstance(BookmarkClient("https://hoarder.test", "t"), BookmarkSink)

    @pytest.mark.asyncio
    async def test_aclose_closes_owned_client(self):
        client = BookmarkClient("https://hoarder.test", "t")
        await client.aclose()
        assert client._client.is_closed

    @pytest.mark.asyncio
    async def test_aclose_leaves_injected_client_open(self):
        injected = httpx.AsyncClient()
        client = BookmarkClient("https://hoarder.test", "t", client=injected)
        await client.aclose()
        assert not injected.is_closed
        await injected.aclose()
