"""Turn retrieval results into prompt-ready context text."""

import re
from collections.abc import Iterable, Sequence

from answer_engine.search.base import SearchResult
from answer_engine.vector.index import VectorMatch

VECTOR_SEPARATOR = "---\n"
SEARCH_RESULTS_LABEL = "External Search Results:\n"


def normalize_query(query: str) -> str:
    """Collapse whitespace runs (newlines included) and trim the ends."""
    return re.sub(r"\s+", " ", query.strip())


def filter_vector_matches(matches: Iterable[VectorMatch], min_score: float) -> list[VectorMatch]:
    """Keep matches scoring strictly above ``min_score`` with non-blank content.

    Index order is preserved.
    """
    return [
        match
        for match in matches
        if (match.score or 0.0) > min_score and match.content and match.content.strip()
    ]


def format_vector_matches(matches: Iterable[VectorMatch], min_score: float) -> str:
    """Join the surviving match contents with a separator line."""
    return VECTOR_SEPARATOR.join(
        match.content.strip() for match in filter_vector_matches(matches, min_score)
    )


def format_search_results(results: Sequence[SearchResult]) -> str:
    """Render search hits as labelled title/URL/summary blocks."""
    if not results:
        return ""

    blocks = [
        f"Title: {result.title}\nURL: {result.url}\nSummary: {result.description}"
        for result in results
    ]
    return SEARCH_RESULTS_LABEL + "\n\n".join(blocks)
