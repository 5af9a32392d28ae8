"""
Provider Layer

This layer contains the remote service integrations. Each backend lives in
its own subpackage (``feedly``, ``instapaper``) and translates between the
normalized models and the service's wire format.
"""

from .base import FeedProvider, ProviderError
from .errors import ErrorMapper

__all__ = [
    "FeedProvider",
    "ProviderError",
    "ErrorMapper",
]
