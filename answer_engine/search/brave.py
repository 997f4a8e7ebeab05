"""Brave Search API provider implementation."""

import logging
from typing import Any

import httpx
from pydantic import BaseModel

from answer_engine.errors import ProviderError
from answer_engine.search.base import SearchResult, WebSearchProvider

logger = logging.getLogger(__name__)


class BraveSearchConfig(BaseModel):
    """Configuration for the Brave Search provider."""

    api_key: str
    url: str = "https://api.search.brave.com/res/v1/web/search"
    timeout: int = 30


class BraveSearchProvider(WebSearchProvider):
    """Web search backed by the Brave Search API."""

    def __init__(self, config: BraveSearchConfig | None = None, **kwargs: Any) -> None:
        """Initialize Brave Search provider.

        Args:
            config: Brave Search configuration
            **kwargs: Additional configuration options
        """
        self.config = config or BraveSearchConfig(**kwargs)
        self.client = httpx.AsyncClient(
            timeout=self.config.timeout,
            headers={
                "Accept": "application/json",
                "Accept-Encoding": "gzip",
                "Cache-Control": "no-cache",
                "X-Subscription-Token": self.config.api_key,
            },
        )

    async def search(self, query: str) -> list[SearchResult]:
        """Run a web search.

        Args:
            query: Search query

        Returns:
            Results in Brave's ranking order

        Raises:
            ProviderError: If the request fails or the API returns an error status
        """
        try:
            response = await self.client.get(self.config.url, params={"q": query})
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"Brave Search HTTP error: {e}")
            logger.error(f"Status: {e.response.status_code}")
            raise ProviderError(
                f"Brave Search API error: {e}",
                data={"status": e.response.status_code},
            )
        except httpx.RequestError as e:
            logger.error(f"Brave Search request failed: {e}")
            raise ProviderError(f"Brave Search request failed: {e}")

        raw_results = (data.get("web") or {}).get("results") or []
        results = [
            SearchResult(
                title=item.get("title") or "",
                url=item.get("url") or "",
                description=item.get("description") or "",
            )
            for item in raw_results
        ]
        logger.debug(f"Brave Search returned {len(results)} results")
        return results

    async def health_check(self) -> bool:
        # No request; only reports whether a key is configured
        return bool(self.config.api_key)

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.aclose()

    async def aclose(self) -> None:
        await self.client.aclose()
