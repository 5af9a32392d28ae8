"""
Feedlizer - swipe-style review of feed articles with read-later forwarding.

This package aggregates articles from a feed-reading API and forwards
review decisions to the feed provider and to a read-later service:
- Feedly (token-authenticated, paginated streams)
- Instapaper (OAuth 1.0a / xAuth signed calls)

Features:
- Strategy interface for feed backends
- OAuth 1.0a request signing with token caching
- Short-window request deduplication for side-effecting actions
- Short-lived article cache
- JSON API for the swipe front end
"""

__version__ = "0.1.0"

from .api.client import FeedlizerClient
from .config.settings import FeedlizerConfig, FeedlySettings, InstapaperCredentials
from .errors import (
    ConfigurationError,
    ProviderError,
    ProviderRejected,
    ResponseParseError,
    SignatureRequestError,
    TokenAcquisitionError,
    TransportError,
)
from .models import ActionResult, Article, ArticlePage, CachedToken, SignedRequestParams
from .providers.base import FeedProvider
from .providers.feedly import FeedlyProvider
from .providers.instapaper import InstapaperClient
from .reliability import ArticleCache, IdempotencyCache

__all__ = [
    # Main client
    "FeedlizerClient",

    # Providers
    "FeedProvider",
    "FeedlyProvider",
    "InstapaperClient",

    # Caches
    "ArticleCache",
    "IdempotencyCache",

    # Configuration
    "FeedlizerConfig",
    "FeedlySettings",
    "InstapaperCredentials",

    # Errors
    "ProviderError",
    "ConfigurationError",
    "TransportError",
    "ProviderRejected",
    "ResponseParseError",
    "TokenAcquisitionError",
    "SignatureRequestError",

    # Models
    "ActionResult",
    "Article",
    "ArticlePage",
    "CachedToken",
    "SignedRequestParams",
]
