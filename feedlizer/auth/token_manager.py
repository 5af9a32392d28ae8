"""
Access token acquisition for the bookmarking provider (xAuth).

A token is obtained by a signed POST carrying the account username and
password, then reused until it expires. Concurrent callers that find the
cache empty or expired share a single in-flight refresh.
"""

import asyncio
import time
from typing import Callable, Optional, Tuple
from urllib.parse import parse_qs

from ..config.constants import INSTAPAPER_ACCESS_TOKEN_PATH, TOKEN_LIFETIME_SECONDS, XAUTH_MODE
from ..config.settings import InstapaperCredentials
from ..errors import TokenAcquisitionError, TransportError
from ..http.client import ApiClient
from ..models.oauth import CachedToken
from ..observability.logging import ProviderLogger
from .oauth1 import OAuthSigner


logger = ProviderLogger("instapaper")


def parse_token_response(body: str) -> Tuple[str, str]:
    """
    Extract ``(oauth_token, oauth_token_secret)`` from a form-encoded body.

    Raises:
        TokenAcquisitionError: If either value is missing or empty
    """
    fields = parse_qs(body.strip())
    token = (fields.get("oauth_token") or [""])[0]
    secret = (fields.get("oauth_token_secret") or [""])[0]
    if not token or not secret:
        raise TokenAcquisitionError(
            "Malformed access token response",
            provider="instapaper",
            body=body[:500]
        )
    return token, secret


def _retrieve_exception(future: asyncio.Future) -> None:
    # Every waiter may have been cancelled; mark the failure as observed
    if not future.cancelled():
        future.exception()


class TokenManager:
    """Caches one access token and refreshes it on demand."""

    def __init__(
        self,
        credentials: InstapaperCredentials,
        api_client: ApiClient,
        signer: Optional[OAuthSigner] = None,
        clock: Callable[[], float] = time.time,
        lifetime_seconds: float = TOKEN_LIFETIME_SECONDS
    ):
        self._credentials = credentials
        self._api = api_client
        self._signer = signer
        self._clock = clock
        self.lifetime = lifetime_seconds
        self._token: Optional[CachedToken] = None
        self._refresh: Optional[asyncio.Future] = None

    @property
    def cached_token(self) -> Optional[CachedToken]:
        return self._token

    @property
    def signer(self) -> OAuthSigner:
        if self._signer is None:
            creds = self._credentials.require()
            self._signer = OAuthSigner(creds.consumer_key, creds.consumer_secret, clock=self._clock)
        return self._signer

    def invalidate(self) -> None:
        """Drop the cached token so the next call performs a fresh exchange."""
        self._token = None

    async def get_token(self) -> CachedToken:
        """
        Return a valid access token, exchanging credentials if needed.

        Returns:
            CachedToken valid at the time of the call

        Raises:
            ConfigurationError: If any credential is missing
            TokenAcquisitionError: On network failure or malformed response
            ProviderRejected: If the provider refuses the exchange
        """
        self._credentials.require()

        token = self._token
        if token is not None and token.is_valid(self._clock()):
            logger.debug("Using cached token")
            return token

        if self._refresh is None:
            self._refresh = asyncio.ensure_future(self._refresh_token())
            self._refresh.add_done_callback(_retrieve_exception)
        else:
            logger.debug("Joining in-flight token refresh")
        # Shield so one cancelled waiter does not abort the shared refresh
        return await asyncio.shield(self._refresh)

    async def _refresh_token(self) -> CachedToken:
        try:
            token = await self._acquire()
            self._token = token
            return token
        finally:
            self._refresh = None

    async def _acquire(self) -> CachedToken:
        creds = self._credentials.require()
        url = self._api.url_for(INSTAPAPER_ACCESS_TOKEN_PATH)
        signed = self.signer.signed_parameters("POST", url, {
            "x_auth_mode": XAUTH_MODE,
            "x_auth_username": creds.username,
            "x_auth_password": creds.password,
        })

        with logger.track_request("get_token", INSTAPAPER_ACCESS_TOKEN_PATH):
            try:
                response = await self._api.post_form(
                    INSTAPAPER_ACCESS_TOKEN_PATH,
                    signed.as_form(),
                    expected=range(200, 300)
                )
            except TransportError as e:
                error = TokenAcquisitionError(
                    f"Token exchange failed: {e.message}", provider="instapaper"
                )
                error.original_error = e.original_error
                error.is_retryable = e.is_retryable
                raise error from e

            try:
                access_token, token_secret = parse_token_response(response.text)
            except TokenAcquisitionError as e:
                e.status_code = response.status_code
                raise

        return CachedToken(
            access_token=access_token,
            token_secret=token_secret,
            expires_at=self._clock() + self.lifetime
        )


__all__ = ["TokenManager", "parse_token_response"]
