from .adapter import FeedlyProvider

__all__ = ["FeedlyProvider"]
