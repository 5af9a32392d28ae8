from .adapter import InstapaperClient

__all__ = ["InstapaperClient"]
