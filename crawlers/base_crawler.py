"""
Base Search Client - Abstract base class for news search backends.
"""
from abc import ABC, abstractmethod
from typing import Optional

from data_transformers.models import RawNewsItem


class SearchBackendError(Exception):
    """Raised when a single search request fails (transport, HTTP status or payload)."""

    def __init__(self, message: str, region: Optional[str] = None):
        super().__init__(message)
        self.region = region


class BaseSearchClient(ABC):
    """Abstract base class for news search backends."""

    def __init__(self, name: str):
        self.name = name

    @abstractmethod
    async def search_news(
        self,
        query: str,
        region: str = "us",
        time_filter: Optional[str] = None,
    ) -> list[RawNewsItem]:
        """
        Search news for one region.

        Must be implemented by subclasses.

        Raises:
            SearchBackendError: If the request cannot be completed
        """
        pass

    async def aclose(self) -> None:
        """Release network resources held by the client."""
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name})"
