"""In-memory request deduplication and article caching.

Both caches are per-instance and per-process. They are a safety net
against double submission, not a durable store.
"""

from .article_cache import ArticleCache
from .idempotency import (
    DuplicateCheck,
    IdempotencyCache,
    bookmark_fingerprint,
    mark_read_fingerprint,
)

__all__ = [
    "ArticleCache",
    "DuplicateCheck",
    "IdempotencyCache",
    "bookmark_fingerprint",
    "mark_read_fingerprint",
]
