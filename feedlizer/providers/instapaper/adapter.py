import time
from typing import Callable, List, Mapping, Optional

from ...auth.oauth1 import OAuthSigner
from ...auth.token_manager import TokenManager
from ...config.constants import (
    DEFAULT_TIMEOUT_SECONDS,
    INSTAPAPER_API_BASE,
    INSTAPAPER_BOOKMARKS_ADD_PATH,
    INSTAPAPER_BOOKMARKS_LIST_PATH,
    TOKEN_LIFETIME_SECONDS,
)
from ...config.settings import InstapaperCredentials
from ...errors import ResponseParseError, SignatureRequestError, TransportError
from ...http.client import ApiClient
from ...models.articles import Bookmark
from ...models.oauth import CachedToken, SignedRequestParams
from ...observability.logging import ProviderLogger
from .parsers import parse_bookmarks


logger = ProviderLogger("instapaper")


class InstapaperClient:
    """
    Signed client for the Instapaper full API.

    Each call acquires (or reuses) an access token and sends a freshly
    signed form body, so nonce and timestamp are never shared between calls.
    """

    def __init__(
        self,
        credentials: Optional[InstapaperCredentials] = None,
        api_client: Optional[ApiClient] = None,
        clock: Callable[[], float] = time.time,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        token_lifetime: float = TOKEN_LIFETIME_SECONDS,
        signer: Optional[OAuthSigner] = None
    ):
        if credentials is None:
            credentials = InstapaperCredentials.from_env()
        self.credentials = credentials
        if api_client is None:
            api_client = ApiClient("instapaper", INSTAPAPER_API_BASE, timeout=timeout)
        self._api = api_client
        self.tokens = TokenManager(
            self.credentials,
            self._api,
            signer=signer,
            clock=clock,
            lifetime_seconds=token_lifetime
        )

    def is_available(self) -> bool:
        return self.credentials.is_configured()

    async def get_token(self) -> CachedToken:
        return await self.tokens.get_token()

    async def _signed_post(self, path: str, params: Mapping[str, object], operation: str):
        token = await self.tokens.get_token()
        signed: SignedRequestParams = self.tokens.signer.signed_parameters(
            "POST",
            self._api.url_for(path),
            params,
            token=token.access_token,
            token_secret=token.token_secret
        )
        try:
            return await self._api.post_form(path, signed.as_form())
        except TransportError as e:
            error = SignatureRequestError(
                f"{operation} failed: {e.message}", provider="instapaper"
            )
            error.original_error = e.original_error
            error.is_retryable = e.is_retryable
            raise error from e

    async def add_bookmark(self, url: str, title: Optional[str] = None) -> None:
        """
        Save ``url`` to the account.

        Only ``url`` and ``title`` are signed and sent. Freeform fields such as
        a description have been observed to break signature validation.

        Raises:
            ConfigurationError: If credentials are missing
            TokenAcquisitionError: If no token could be obtained
            SignatureRequestError: On network failure during the call
            ProviderRejected: If the provider does not answer 200
        """
        with logger.track_request("add_bookmark", INSTAPAPER_BOOKMARKS_ADD_PATH):
            await self._signed_post(
                INSTAPAPER_BOOKMARKS_ADD_PATH,
                {"url": url, "title": title or None},
                "Add bookmark"
            )
        logger.info("Added bookmark", url=url)

    async def list_bookmarks(self, folder: str = "unread", limit: int = 25) -> List[Bookmark]:
        """
        List bookmarks in ``folder`` ("unread", "starred", "archive" or a folder id).

        Args:
            folder: Folder to read
            limit: Maximum number of items (the API caps this at 500)
        """
        with logger.track_request("list_bookmarks", INSTAPAPER_BOOKMARKS_LIST_PATH):
            response = await self._signed_post(
                INSTAPAPER_BOOKMARKS_LIST_PATH,
                {"folder_id": folder, "limit": limit},
                "List bookmarks"
            )
            try:
                payload = response.json()
            except ValueError as e:
                raise ResponseParseError(
                    "Invalid bookmarks response", provider="instapaper",
                    status_code=response.status_code, body=response.text[:500]
                ) from e
            bookmarks = parse_bookmarks(payload)
        logger.info("Retrieved bookmarks", folder=folder, count=len(bookmarks))
        return bookmarks

    async def aclose(self) -> None:
        await self._api.aclose()
