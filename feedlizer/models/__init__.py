"""Data models shared across providers, caches and the server layer."""

from .actions import ActionResult
from .articles import Article, ArticlePage, ArticleSource, Bookmark, Profile, Subscription
from .oauth import CachedToken, OAuthCredentials, SignedRequestParams

__all__ = [
    "ActionResult",
    "Article",
    "ArticlePage",
    "ArticleSource",
    "Bookmark",
    "Profile",
    "Subscription",
    "CachedToken",
    "OAuthCredentials",
    "SignedRequestParams",
]
