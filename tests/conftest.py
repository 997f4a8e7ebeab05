"""Shared fixtures for the query pipeline tests."""

from unittest.mock import AsyncMock

import pytest

from answer_engine.llm.base import EmbeddingResult, LLMProvider
from answer_engine.logs import InMemoryQueryLogSink, QueryLogger
from answer_engine.query import QueryOrchestrator
from answer_engine.search.base import WebSearchProvider
from answer_engine.vector.index import VectorIndex

from factories import make_response


@pytest.fixture
def embedder():
    """Embedding provider returning a fixed vector."""
    provider = AsyncMock(spec=LLMProvider)
    provider.generate_embedding.return_value = EmbeddingResult(embedding=[0.1, 0.2, 0.3], model="embed-test")
    return provider


@pytest.fixture
def vector_index():
    """Vector index with no matches."""
    index = AsyncMock(spec=VectorIndex)
    index.search.return_value = []
    return index


@pytest.fixture
def completer():
    """Completion provider declining the direct-answer check."""
    provider = AsyncMock(spec=LLMProvider)
    provider.generate_response.return_value = make_response("no")
    return provider


@pytest.fixture
def search_provider():
    """Web search provider with no results."""
    provider = AsyncMock(spec=WebSearchProvider)
    provider.search.return_value = []
    return provider


@pytest.fixture
def log_sink():
    """In-memory query log sink."""
    return InMemoryQueryLogSink()


@pytest.fixture
def query_logger(log_sink):
    """Query logger writing to the in-memory sink."""
    return QueryLogger(log_sink)


@pytest.fixture
def orchestrator(embedder, vector_index, completer, search_provider, query_logger):
    """Orchestrator wired to mock collaborators."""
    return QueryOrchestrator(
        embedder=embedder,
        vector_index=vector_index,
        completer=completer,
        search_provider=search_provider,
        query_logger=query_logger,
    )
