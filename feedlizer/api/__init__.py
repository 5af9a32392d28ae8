from .client import FeedlizerClient

__all__ = ["FeedlizerClient"]
