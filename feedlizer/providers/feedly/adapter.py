from typing import List, Optional, Union
from urllib.parse import quote

from ..base import FeedProvider
from ...config.constants import (
    DEFAULT_STREAM_COUNT,
    DEFAULT_TIMEOUT_SECONDS,
    FEEDLY_API_BASE,
    GLOBAL_ALL_CATEGORY,
    GLOBAL_SAVED_TAG,
)
from ...config.settings import FeedlySettings
from ...errors import ResponseParseError
from ...http.client import ApiClient
from ...models.articles import ArticlePage, Profile, Subscription
from ...observability.logging import ProviderLogger
from .parsers import parse_profile, parse_stream, parse_subscriptions


logger = ProviderLogger("feedly")


class FeedlyProvider(FeedProvider):
    """Feedly cloud API backend authenticated with a bearer token."""

    def __init__(
        self,
        settings: Optional[FeedlySettings] = None,
        api_client: Optional[ApiClient] = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS
    ):
        self.settings = settings if settings is not None else FeedlySettings.from_env()
        self._client = api_client
        self._timeout = timeout
        self.user_id: Optional[str] = None

    @property
    def client(self) -> ApiClient:
        """Lazy initialization of the HTTP client; needs a token."""
        if self._client is None:
            token = self.settings.require_token()
            self._client = ApiClient(
                "feedly",
                FEEDLY_API_BASE,
                headers={
                    "Authorization": f"Bearer {token}",
                    "User-Agent": self.settings.user_agent,
                },
                timeout=self._timeout
            )
        return self._client

    def is_available(self) -> bool:
        return bool(self.settings.access_token) or self._client is not None

    async def get_profile(self) -> Profile:
        """Fetch the user profile and remember the user id."""
        with logger.track_request("get_profile", "/profile"):
            payload = await self.client.get_json("/profile")
            try:
                profile = parse_profile(payload)
            except (KeyError, TypeError) as e:
                raise ResponseParseError(
                    "Invalid profile response", provider="feedly", body=str(payload)[:500]
                ) from e
        self.user_id = profile.id
        logger.info("Logged in", user=profile.display_name)
        return profile

    async def _ensure_user_id(self) -> str:
        if self.user_id is None:
            await self.get_profile()
        return self.user_id

    async def list_articles(
        self,
        stream_id: Optional[str] = None,
        count: int = DEFAULT_STREAM_COUNT,
        unread_only: bool = True,
        continuation: Optional[str] = None
    ) -> ArticlePage:
        if stream_id is None:
            user_id = await self._ensure_user_id()
            stream_id = f"user/{user_id}/category/{GLOBAL_ALL_CATEGORY}"

        params = {"streamId": stream_id, "count": count}
        if unread_only:
            params["unreadOnly"] = "true"
        if continuation:
            params["continuation"] = continuation

        with logger.track_request("list_articles", "/streams/contents") as request_info:
            payload = await self.client.get_json("/streams/contents", params=params)
            if not isinstance(payload, dict):
                raise ResponseParseError(
                    "Invalid stream response", provider="feedly", body=str(payload)[:500]
                )
            page = parse_stream(payload, stream_id)
            logger.info(
                "Fetched articles",
                request_id=request_info["request_id"],
                count=len(page.items),
                has_more=page.has_more
            )
        return page

    async def mark_read(self, entry_ids: Union[str, List[str]]) -> None:
        entries = [entry_ids] if isinstance(entry_ids, str) else list(entry_ids)
        with logger.track_request("mark_read", "/markers"):
            await self.client.send_json("POST", "/markers", {
                "action": "markAsRead",
                "type": "entries",
                "entryIds": entries,
            })
        logger.info("Marked article(s) as read", count=len(entries))

    async def save_for_later(self, entry_id: str) -> None:
        user_id = await self._ensure_user_id()
        tag_id = f"user/{user_id}/tag/{GLOBAL_SAVED_TAG}"
        path = f"/tags/{quote(tag_id, safe='')}"
        with logger.track_request("save_for_later", path):
            await self.client.send_json("PUT", path, {"entryId": entry_id})

    async def list_subscriptions(self) -> List[Subscription]:
        with logger.track_request("list_subscriptions", "/subscriptions"):
            payload = await self.client.get_json("/subscriptions")
            if not isinstance(payload, list):
                raise ResponseParseError(
                    "Invalid subscriptions response", provider="feedly", body=str(payload)[:500]
                )
            subscriptions = parse_subscriptions(payload)
        logger.info("Found subscriptions", count=len(subscriptions))
        return subscriptions

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
