"""Main client interface for Feedlizer."""

import logging
from typing import List, Optional

from ..config.constants import DEFAULT_STREAM_COUNT
from ..config.settings import FeedlizerConfig
from ..models.actions import ActionResult
from ..models.articles import Article, Bookmark, Subscription
from ..providers.base import FeedProvider
from ..providers.feedly.adapter import FeedlyProvider
from ..providers.instapaper.adapter import InstapaperClient
from ..reliability.article_cache import ArticleCache
from ..reliability.idempotency import (
    IdempotencyCache,
    bookmark_fingerprint,
    mark_read_fingerprint,
)

logger = logging.getLogger(__name__)


class FeedlizerClient:
    """
    Review service behind the swipe interface.

    Owns every piece of mutable state (deduplication cache, article cache,
    provider clients and their tokens) so two instances never share it.
    """

    def __init__(
        self,
        feed_provider: Optional[FeedProvider] = None,
        instapaper: Optional[InstapaperClient] = None,
        idempotency: Optional[IdempotencyCache] = None,
        article_cache: Optional[ArticleCache] = None,
        config: Optional[FeedlizerConfig] = None
    ):
        """
        Initialize the client.

        Args:
            feed_provider: Feed backend; Feedly by default
            instapaper: Bookmarking client; built from config by default
            idempotency: Deduplication cache for side-effecting actions
            article_cache: Cache for the last fetched article list
            config: Settings used to build whatever was not injected
        """
        self.config = config if config is not None else FeedlizerConfig.from_env()
        self.feed_provider = feed_provider if feed_provider is not None else FeedlyProvider(
            self.config.feedly, timeout=self.config.http_timeout
        )
        self.instapaper = instapaper if instapaper is not None else InstapaperClient(
            self.config.instapaper,
            timeout=self.config.http_timeout,
            token_lifetime=self.config.token_lifetime_seconds
        )
        if idempotency is None:
            idempotency = IdempotencyCache(self.config.dedup_window_seconds)
        if article_cache is None:
            article_cache = ArticleCache(self.config.article_cache_ttl_seconds)
        self.idempotency = idempotency
        self.article_cache = article_cache

    def is_duplicate_request(self, fingerprint: str) -> bool:
        """Record ``fingerprint`` and report whether it was seen within the window."""
        return self.idempotency.is_duplicate_request(fingerprint)

    async def add_to_instapaper(
        self,
        url: str,
        title: Optional[str] = None,
        description: Optional[str] = None
    ) -> None:
        """
        Save a URL to Instapaper.

        ``description`` is accepted for callers that have one but is not
        forwarded; see ``InstapaperClient.add_bookmark``.

        Raises:
            ProviderError: On any configuration, token or provider failure
        """
        if description:
            logger.debug("Dropping description for bookmark %s", url)
        await self.instapaper.add_bookmark(url, title)

    async def get_articles(self, count: int = DEFAULT_STREAM_COUNT, refresh: bool = False) -> List[Article]:
        """
        Articles for review, newest first.

        The list is served from cache for a short time; ``refresh`` forces a
        new fetch.
        """
        if not refresh:
            cached = self.article_cache.get()
            if cached is not None:
                return cached

        logger.info(
            "Fetching fresh articles from %s (count: %d)",
            self.feed_provider.get_provider_name(), count
        )
        page = await self.feed_provider.list_articles(count=count)
        return self.article_cache.store(page.items)

    async def mark_read(self, article_id: str, call_id: Optional[str] = None) -> ActionResult:
        """
        Mark an article read, absorbing repeats within the dedup window.

        Raises:
            ProviderError: If the provider call fails
        """
        if self.is_duplicate_request(mark_read_fingerprint(article_id)):
            return ActionResult(duplicate=True, message="Duplicate mark-as-read request ignored")

        logger.info("Processing mark-as-read request (ID: %s): %s", call_id or "unknown", article_id)
        await self.feed_provider.mark_read(article_id)
        self.article_cache.remove(article_id)
        return ActionResult(message="Article marked as read")

    async def save_article(
        self,
        article_id: str,
        url: Optional[str],
        title: Optional[str] = None,
        description: Optional[str] = None,
        call_id: Optional[str] = None
    ) -> ActionResult:
        """
        Send an article to Instapaper, absorbing repeats within the dedup window.

        Raises:
            ValueError: If there is no URL to save
            ProviderError: If the provider call fails
        """
        if not url:
            raise ValueError("URL is required to save an article")

        if self.is_duplicate_request(bookmark_fingerprint(article_id, title)):
            return ActionResult(duplicate=True, message="Duplicate request ignored")

        logger.info("Processing Instapaper save request (ID: %s): %s", call_id or "unknown", title)
        await self.add_to_instapaper(url, title, description)
        self.article_cache.remove(article_id)
        return ActionResult(message="Article saved to Instapaper")

    async def list_subscriptions(self) -> List[Subscription]:
        return await self.feed_provider.list_subscriptions()

    async def list_bookmarks(self, folder: str = "unread", limit: int = 25) -> List[Bookmark]:
        return await self.instapaper.list_bookmarks(folder, limit)

    async def aclose(self) -> None:
        await self.feed_provider.aclose()
        await self.instapaper.aclose()

    async def __aenter__(self) -> "FeedlizerClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
