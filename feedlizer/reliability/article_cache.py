from __future__ import annotations

import logging
import time
from typing import Callable, List, Optional

from ..config.constants import ARTICLE_CACHE_TTL_SECONDS
from ..models.articles import Article

logger = logging.getLogger(__name__)


class ArticleCache:
    """Last fetched article list, newest first, valid for ``ttl_seconds``."""

    def __init__(
        self,
        ttl_seconds: float = ARTICLE_CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.ttl = ttl_seconds
        self._clock = clock
        self._articles: List[Article] = []
        self._fetched_at: Optional[float] = None

    def get(self) -> Optional[List[Article]]:
        """Cached articles, or ``None`` when stale or empty."""
        if self._fetched_at is None or not self._articles:
            return None
        if self._clock() - self._fetched_at > self.ttl:
            return None
        return list(self._articles)

    def store(self, articles: List[Article]) -> List[Article]:
        # Entries without a publish date sort last
        self._articles = sorted(
            articles,
            key=lambda a: a.published.timestamp() if a.published else float("-inf"),
            reverse=True,
        )
        self._fetched_at = self._clock()
        logger.info("Cached %d articles", len(self._articles))
        return list(self._articles)

    def remove(self, article_id: str) -> bool:
        before = len(self._articles)
        self._articles = [a for a in self._articles if a.id != article_id]
        return len(self._articles) != before

    def invalidate(self) -> None:
        self._articles = []
        self._fetched_at = None

    def __len__(self) -> int:
        return len(self._articles)
