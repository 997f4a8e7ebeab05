"""Web search provider interface."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class SearchResult:
    """Single web search hit."""

    title: str
    url: str
    description: str


class WebSearchProvider(ABC):
    """Abstract base class for web search providers."""

    @abstractmethod
    async def search(self, query: str) -> list[SearchResult]:
        """Search the web.

        Args:
            query: Search query

        Returns:
            Results in the provider's ranking order
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the provider is reachable."""
        pass

    async def aclose(self) -> None:
        """Release network clients held by the provider."""
