"""Builders for provider results used across the tests."""

from answer_engine.llm.base import ResponseResult
from answer_engine.search.base import SearchResult
from answer_engine.vector.index import VectorMatch


def make_response(content: str, model: str = "gpt-test") -> ResponseResult:
    """Build a completion result."""
    return ResponseResult(content=content, model=model)


def make_match(score: float, content: str, match_id: str = "chunk-1") -> VectorMatch:
    """Build a vector index hit."""
    return VectorMatch(id=match_id, score=score, content=content, metadata={"document_id": "doc-1"})


def make_results(count: int) -> list[SearchResult]:
    """Build ranked web search results."""
    return [
        SearchResult(
            title=f"Result {i}",
            url=f"https://example.com/{i}",
            description=f"Description {i}",
        )
        for i in range(1, count + 1)
    ]
