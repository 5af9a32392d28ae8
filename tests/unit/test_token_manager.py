"""Tests for xAuth token acquisition and caching."""

import asyncio
import gc

import httpx
import pytest

from feedlizer.auth.token_manager import TokenManager, parse_token_response
from feedlizer.config.constants import INSTAPAPER_API_BASE
from feedlizer.config.settings import InstapaperCredentials
from feedlizer.errors import ConfigurationError, ProviderRejected, TokenAcquisitionError
from feedlizer.http.client import ApiClient
from feedlizer.auth.oauth1 import sign
from tests.conftest import TOKEN_PATH
from tests.helpers.mock_transport import RecordingTransport, parse_form, token_response


def make_manager(credentials, routes, clock):
    api = ApiClient("instapaper", INSTAPAPER_API_BASE, transport=routes.transport())
    return TokenManager(credentials, api, clock=clock)


class TestParseTokenResponse:
    def test_parses_form_body(self):
        assert parse_token_response("oauth_token_secret=s%3D1&oauth_token=t") == ("t", "s=1")

    @pytest.mark.parametrize("body", [
        "",
        "oauth_token=t",
        "oauth_token_secret=s",
        "oauth_token=&oauth_token_secret=s",
        "<html>Service unavailable</html>",
    ])
    def test_malformed_bodies_raise(self, body):
        with pytest.raises(TokenAcquisitionError):
            parse_token_response(body)


class TestTokenManager:
    """Test token caching, refresh and failure handling."""

    @pytest.mark.asyncio
    async def test_token_request_is_signed_xauth(self, credentials, clock):
        routes = RecordingTransport({("POST", TOKEN_PATH): token_response("tok", "sec")})
        manager = make_manager(credentials, routes, clock)

        token = await manager.get_token()

        assert token.access_token == "tok"
        assert token.token_secret == "sec"
        assert token.expires_at == clock.now + 3600

        request = routes.requests[0]
        assert request.headers["content-type"] == "application/x-www-form-urlencoded"
        form = parse_form(request)
        assert form["x_auth_mode"] == "client_auth"
        assert form["x_auth_username"] == "reader@example.com"
        assert form["x_auth_password"] == "hunter2"
        assert form["oauth_consumer_key"] == "test-consumer-key"
        assert "oauth_token" not in form

        signature = form.pop("oauth_signature")
        expected = sign("POST", f"{INSTAPAPER_API_BASE}/oauth/access_token", form, "test-consumer-secret", "")
        assert signature == expected

    @pytest.mark.asyncio
    async def test_cached_token_reused_until_expiry(self, credentials, clock):
        routes = RecordingTransport({("POST", TOKEN_PATH): token_response()})
        manager = make_manager(credentials, routes, clock)

        first = await manager.get_token()
        clock.advance(3599)
        second = await manager.get_token()

        assert second is first
        assert len(routes.calls_to(TOKEN_PATH)) == 1

        clock.advance(1)  # now == expires_at
        third = await manager.get_token()

        assert len(routes.calls_to(TOKEN_PATH)) == 2
        assert third.expires_at == clock.now + 3600

    @pytest.mark.asyncio
    async def test_forced_expiry_triggers_second_exchange(self, credentials, clock):
        routes = RecordingTransport({("POST", TOKEN_PATH): token_response()})
        manager = make_manager(credentials, routes, clock)

        await manager.get_token()
        await manager.get_token()
        assert len(routes.calls_to(TOKEN_PATH)) == 1

        manager._token = manager.cached_token.model_copy(update={"expires_at": clock.now - 1})
        await manager.get_token()
        assert len(routes.calls_to(TOKEN_PATH)) == 2

    @pytest.mark.asyncio
    async def test_invalidate(self, credentials, clock):
        routes = RecordingTransport({("POST", TOKEN_PATH): token_response()})
        manager = make_manager(credentials, routes, clock)

        await manager.get_token()
        manager.invalidate()
        assert manager.cached_token is None
        await manager.get_token()
        assert len(routes.calls_to(TOKEN_PATH)) == 2

    @pytest.mark.asyncio
    async def test_concurrent_refresh_is_single_flight(self, credentials, clock):
        routes = RecordingTransport({("POST", TOKEN_PATH): token_response()})
        manager = make_manager(credentials, routes, clock)

        tokens = await asyncio.gather(*(manager.get_token() for _ in range(5)))

        assert len(routes.calls_to(TOKEN_PATH)) == 1
        assert all(t is tokens[0] for t in tokens)

    @pytest.mark.asyncio
    async def test_missing_credentials_fail_before_network(self, clock):
        routes = RecordingTransport({("POST", TOKEN_PATH): token_response()})
        creds = InstapaperCredentials(consumer_key="k", consumer_secret="s")
        manager = make_manager(creds, routes, clock)

        with pytest.raises(ConfigurationError) as exc_info:
            await manager.get_token()

        assert "INSTAPAPER_USERNAME" in str(exc_info.value)
        assert "INSTAPAPER_PASSWORD" in str(exc_info.value)
        assert routes.requests == []

    @pytest.mark.asyncio
    async def test_malformed_response_does_not_populate_cache(self, credentials, clock):
        routes = RecordingTransport({("POST", TOKEN_PATH): httpx.Response(200, text="oauth_token=only")})
        manager = make_manager(credentials, routes, clock)

        with pytest.raises(TokenAcquisitionError) as exc_info:
            await manager.get_token()

        assert exc_info.value.status_code == 200
        assert manager.cached_token is None

        # A later call starts a fresh exchange rather than reusing the failure
        routes.routes[("POST", TOKEN_PATH)] = token_response()
        token = await manager.get_token()
        assert token.access_token == "access-token"
        assert len(routes.calls_to(TOKEN_PATH)) == 2

    @pytest.mark.asyncio
    async def test_rejected_exchange_carries_status_and_body(self, credentials, clock):
        routes = RecordingTransport({("POST", TOKEN_PATH): httpx.Response(401, text="Invalid xAuth credentials.")})
        manager = make_manager(credentials, routes, clock)

        with pytest.raises(ProviderRejected) as exc_info:
            await manager.get_token()

        assert exc_info.value.status_code == 401
        assert exc_info.value.body == "Invalid xAuth credentials."
        assert manager.cached_token is None

    @pytest.mark.asyncio
    async def test_network_failure_raises_token_error(self, credentials, clock):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        routes = RecordingTransport({("POST", TOKEN_PATH): refuse})
        manager = make_manager(credentials, routes, clock)

        with pytest.raises(TokenAcquisitionError) as exc_info:
            await manager.get_token()

        assert exc_info.value.is_retryable is True
        assert isinstance(exc_info.value.original_error, httpx.ConnectError)
        assert manager.cached_token is None

    @pytest.mark.asyncio
    async def test_failed_refresh_after_cancelled_waiter_is_observed(self, credentials, clock):
        started = asyncio.Event()
        release = asyncio.Event()

        async def slow_refusal(request):
            started.set()
            await release.wait()
            raise httpx.ConnectError("connection refused", request=request)

        routes = RecordingTransport({("POST", TOKEN_PATH): slow_refusal})
        manager = make_manager(credentials, routes, clock)

        loop = asyncio.get_running_loop()
        reported = []
        previous_handler = loop.get_exception_handler()
        loop.set_exception_handler(lambda _loop, context: reported.append(context))
        try:
            waiter = asyncio.ensure_future(manager.get_token())
            await started.wait()
            refresh = manager._refresh
            waiter.cancel()
            with pytest.raises(asyncio.CancelledError):
                await waiter

            release.set()
            await asyncio.wait({refresh})
            assert refresh.done() and not refresh.cancelled()
            assert manager._refresh is None
            assert manager.cached_token is None

            del refresh
            gc.collect()
            await asyncio.sleep(0)
        finally:
            loop.set_exception_handler(previous_handler)

        assert not [c for c in reported if "never retrieved" in c.get("message", "")]
