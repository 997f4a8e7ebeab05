"""Web search providers module."""

from answer_engine.config import get_settings
from answer_engine.search.base import SearchResult, WebSearchProvider
from answer_engine.search.brave import BraveSearchConfig, BraveSearchProvider


def create_search_provider() -> WebSearchProvider:
    """Create the web search provider from configuration.

    Raises:
        ValueError: If no Brave Search API key is configured
    """
    settings = get_settings()
    if not settings.brave_search_api_key:
        raise ValueError("Brave Search API key is required")

    config = BraveSearchConfig(api_key=settings.brave_search_api_key, url=settings.brave_search_url)
    return BraveSearchProvider(config=config)


__all__ = [
    "BraveSearchConfig",
    "BraveSearchProvider",
    "SearchResult",
    "WebSearchProvider",
    "create_search_provider",
]
