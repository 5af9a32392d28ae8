"""Tests for the signed Instapaper client."""

import httpx
import pytest

from feedlizer.auth.oauth1 import sign
from feedlizer.config.constants import INSTAPAPER_API_BASE
from feedlizer.config.settings import InstapaperCredentials
from feedlizer.errors import ConfigurationError, ProviderRejected, ResponseParseError, SignatureRequestError
from feedlizer.providers.instapaper.adapter import InstapaperClient
from feedlizer.providers.instapaper.parsers import parse_bookmarks
from tests.conftest import ADD_PATH, LIST_PATH, TOKEN_PATH
from tests.helpers.mock_transport import parse_form


BOOKMARKS_PAYLOAD = [
    {"type": "meta"},
    {"type": "user", "user_id": 7, "username": "reader@example.com"},
    {
        "type": "bookmark", "bookmark_id": 10, "url": "https://example.com/old",
        "title": "Old", "time": 1_600_000_000, "starred": "0", "progress": 0.5,
    },
    {
        "type": "bookmark", "bookmark_id": 11, "url": "https://example.com/new",
        "title": "New", "description": "fresh", "time": 1_700_000_000, "starred": "1",
    },
    {"type": "bookmark", "bookmark_id": 12, "url": "undefined", "title": "Broken"},
    {"type": "bookmark", "bookmark_id": 13, "title": "No URL"},
]


class TestParseBookmarks:
    def test_keeps_bookmarks_newest_first(self):
        bookmarks = parse_bookmarks(BOOKMARKS_PAYLOAD)

        assert [b.id for b in bookmarks] == [11, 10]
        assert bookmarks[0].starred is True
        assert bookmarks[0].description == "fresh"
        assert bookmarks[1].progress == 0.5

    def test_accepts_wrapped_payload(self):
        bookmarks = parse_bookmarks({"user": {}, "bookmarks": BOOKMARKS_PAYLOAD[2:4]})
        assert len(bookmarks) == 2

    @pytest.mark.parametrize("payload", [None, "oops", 42, {"error": "x"}])
    def test_unexpected_shapes_yield_nothing(self, payload):
        assert parse_bookmarks(payload) == []


class TestInstapaperClient:
    """Test signed bookmark calls."""

    def test_is_available(self, credentials):
        assert InstapaperClient(credentials).is_available()
        assert not InstapaperClient(InstapaperCredentials(consumer_key="k")).is_available()

    @pytest.mark.asyncio
    async def test_add_bookmark_sends_signed_url_and_title(self, instapaper_client, instapaper_routes):
        await instapaper_client.add_bookmark("https://example.com/a?x=1&y=2", "A title: with spaces")

        request = instapaper_routes.calls_to(ADD_PATH)[0]
        form = parse_form(request)

        assert form["url"] == "https://example.com/a?x=1&y=2"
        assert form["title"] == "A title: with spaces"
        assert form["oauth_token"] == "access-token"
        assert form["oauth_signature_method"] == "HMAC-SHA1"
        assert form["oauth_version"] == "1.0"
        assert "description" not in form

        signature = form.pop("oauth_signature")
        expected = sign(
            "POST", f"{INSTAPAPER_API_BASE}/bookmarks/add", form,
            "test-consumer-secret", "token-secret"
        )
        assert signature == expected

    @pytest.mark.asyncio
    async def test_add_bookmark_without_title(self, instapaper_client, instapaper_routes):
        await instapaper_client.add_bookmark("https://example.com/a")

        form = parse_form(instapaper_routes.calls_to(ADD_PATH)[0])
        assert "title" not in form

    @pytest.mark.asyncio
    async def test_token_reused_across_calls(self, instapaper_client, instapaper_routes):
        await instapaper_client.add_bookmark("https://example.com/1")
        await instapaper_client.add_bookmark("https://example.com/2")

        assert len(instapaper_routes.calls_to(TOKEN_PATH)) == 1
        adds = [parse_form(r) for r in instapaper_routes.calls_to(ADD_PATH)]
        assert len(adds) == 2
        # Fresh nonce per call
        assert adds[0]["oauth_nonce"] != adds[1]["oauth_nonce"]

    @pytest.mark.asyncio
    async def test_rejected_add(self, instapaper_client, instapaper_routes):
        instapaper_routes.routes[("POST", ADD_PATH)] = httpx.Response(403, text="Invalid signature")

        with pytest.raises(ProviderRejected) as exc_info:
            await instapaper_client.add_bookmark("https://example.com/a")

        assert exc_info.value.status_code == 403
        assert exc_info.value.body == "Invalid signature"

    @pytest.mark.asyncio
    async def test_network_failure_during_add(self, instapaper_client, instapaper_routes):
        def timeout(request):
            raise httpx.ReadTimeout("timed out", request=request)

        instapaper_routes.routes[("POST", ADD_PATH)] = timeout

        with pytest.raises(SignatureRequestError) as exc_info:
            await instapaper_client.add_bookmark("https://example.com/a")

        assert exc_info.value.is_retryable is True
        assert isinstance(exc_info.value.original_error, httpx.ReadTimeout)

    @pytest.mark.asyncio
    async def test_missing_credentials(self, clock):
        client = InstapaperClient(InstapaperCredentials(), clock=clock)

        with pytest.raises(ConfigurationError):
            await client.add_bookmark("https://example.com/a")

    @pytest.mark.asyncio
    async def test_list_bookmarks(self, instapaper_client, instapaper_routes):
        instapaper_routes.routes[("POST", LIST_PATH)] = httpx.Response(200, json=BOOKMARKS_PAYLOAD)

        bookmarks = await instapaper_client.list_bookmarks("starred", limit=10)

        assert [b.url for b in bookmarks] == ["https://example.com/new", "https://example.com/old"]
        form = parse_form(instapaper_routes.calls_to(LIST_PATH)[0])
        assert form["folder_id"] == "starred"
        assert form["limit"] == "10"

    @pytest.mark.asyncio
    async def test_list_bookmarks_invalid_json(self, instapaper_client, instapaper_routes):
        instapaper_routes.routes[("POST", LIST_PATH)] = httpx.Response(200, text="<html>")

        with pytest.raises(ResponseParseError):
            await instapaper_client.list_bookmarks()
