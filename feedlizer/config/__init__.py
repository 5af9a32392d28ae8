"""Configuration module for Feedlizer."""

from .settings import FeedlizerConfig, FeedlySettings, InstapaperCredentials

# Import all constants
from .constants import *

__all__ = [
    "FeedlizerConfig",
    "FeedlySettings",
    "InstapaperCredentials",
]
