"""
Base Feed Provider Interface

This module defines the abstract base class for feed backends. The review
service talks to a backend only through this interface, so a token-based
backend, a session-based one or an RSS reader can be swapped without
touching the caching or deduplication logic.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Union

from ..errors import ProviderError
from ..models.articles import ArticlePage, Subscription


class FeedProvider(ABC):
    """
    Abstract base class for feed providers.

    The provider is responsible for:
    - Fetching paginated article lists
    - Forwarding read/save actions to the remote service
    - Normalizing remote entries into ``Article`` models
    - Raising ``ProviderError`` for transport and API failures

    Providers should NOT contain:
    - Caching of article lists
    - Request deduplication
    """

    @abstractmethod
    async def list_articles(
        self,
        stream_id: Optional[str] = None,
        count: int = 200,
        unread_only: bool = True,
        continuation: Optional[str] = None
    ) -> ArticlePage:
        """
        Fetch one page of articles.

        Args:
            stream_id: Stream to read, or the provider's "everything" stream
            count: Maximum number of articles on the page
            unread_only: Skip articles already marked read
            continuation: Cursor returned by the previous page

        Returns:
            ArticlePage with normalized articles and the next cursor

        Raises:
            ProviderError: For transport or API errors
        """
        pass

    @abstractmethod
    async def mark_read(self, entry_ids: Union[str, List[str]]) -> None:
        """
        Mark one or more entries as read.

        Raises:
            ProviderError: For transport or API errors
        """
        pass

    @abstractmethod
    async def save_for_later(self, entry_id: str) -> None:
        """
        Add an entry to the provider's own read-later collection.

        Raises:
            ProviderError: For transport or API errors
        """
        pass

    async def list_subscriptions(self) -> List[Subscription]:
        """Feeds the user follows. Backends without the notion return nothing."""
        return []

    @abstractmethod
    def is_available(self) -> bool:
        """
        Check if the provider is configured.

        Returns:
            bool: True if credentials are present
        """
        pass

    async def aclose(self) -> None:
        """Release network resources."""
        return None

    def get_provider_name(self) -> str:
        """
        Get the name of this provider.

        By default, returns the class name without 'Provider' suffix.

        Returns:
            str: The provider name (e.g., "feedly")
        """
        class_name = self.__class__.__name__
        if class_name.endswith("Provider"):
            return class_name[:-8].lower()
        return class_name.lower()


__all__ = ["FeedProvider", "ProviderError"]
