"""Source cascade deciding where a query's context comes from.

Sources are tried in priority order and the first one that produces usable
context wins:

1. the vector-indexed knowledge base,
2. the language model itself, if it says it can answer unaided,
3. a live web search.

A collaborator that raises or times out is treated like a source with nothing
to offer; the cascade moves on and the source is reported in
``ResolvedContext.failed_sources``.
"""

import asyncio
import logging
from collections.abc import Awaitable, Mapping
from typing import Any, TypeVar

from answer_engine.errors import NotFoundError, ProviderError
from answer_engine.llm.base import LLMProvider
from answer_engine.logs import QueryLogger
from answer_engine.search.base import WebSearchProvider
from answer_engine.vector.index import VectorIndex

from .formatter import filter_vector_matches, format_search_results, format_vector_matches, normalize_query
from .models import Empty, Failed, Found, Provenance, QueryOptions, ResolvedContext, SourceResult

logger = logging.getLogger(__name__)

T = TypeVar("T")

MAX_SEARCH_RESULTS = 5

DIRECT_ANSWER_PROMPT = (
    "Can you answer this question without any external information? "
    "Respond with only 'yes' or 'no': {query}"
)


class QueryOrchestrator:
    """Resolves the context for a query by walking the source cascade."""

    def __init__(
        self,
        embedder: LLMProvider,
        vector_index: VectorIndex,
        completer: LLMProvider,
        search_provider: WebSearchProvider | None,
        query_logger: QueryLogger,
        default_options: QueryOptions | None = None,
        completion_max_tokens: int = 512,
        completion_temperature: float = 0.2,
        call_timeout: float | None = None,
    ):
        """Initialize the orchestrator.

        Args:
            embedder: Provider used to embed queries
            vector_index: Knowledge base index
            completer: Provider used for the yes/no check and direct answers
            search_provider: Web search provider, None disables web search
            query_logger: Records every source attempt
            default_options: Options callers' overrides are merged over
            completion_max_tokens: Output cap for completion calls
            completion_temperature: Temperature for completion calls
            call_timeout: Seconds allowed per collaborator call, None for no limit
        """
        self.embedder = embedder
        self.vector_index = vector_index
        self.completer = completer
        self.search_provider = search_provider
        self.query_logger = query_logger
        self.default_options = default_options or QueryOptions()
        self.completion_max_tokens = completion_max_tokens
        self.completion_temperature = completion_temperature
        self.call_timeout = call_timeout

    async def perform_query(
        self,
        query: str,
        options: QueryOptions | Mapping[str, Any] | None = None,
    ) -> ResolvedContext:
        """Find context for ``query`` from the first source that has any.

        Args:
            query: User question
            options: Overrides merged field by field over the defaults

        Returns:
            Context text and the source it came from

        Raises:
            NotFoundError: If no enabled source produced usable context
        """
        return await self.resolve_context(normalize_query(query), self.default_options.merged(options))

    async def resolve_context(self, query: str, options: QueryOptions) -> ResolvedContext:
        """Run the source cascade for an already normalised query and merged options."""
        cascade = (
            (options.use_vector_store, Provenance.VECTOR_DB, self._query_vector_store),
            (options.use_llm, Provenance.LLM, self._query_llm),
            (options.use_internet, Provenance.INTERNET_SEARCH, self._query_internet),
        )

        failed_sources: list[Provenance] = []
        for enabled, source, attempt in cascade:
            if not enabled:
                logger.debug(f"Skipping disabled source {source.value}")
                continue

            result: SourceResult = await attempt(query, options)

            if isinstance(result, Found):
                if failed_sources:
                    logger.warning(
                        f"Answered from {source.value} in degraded mode; "
                        f"failed sources: {', '.join(s.value for s in failed_sources)}"
                    )
                return ResolvedContext(
                    context_text=result.content,
                    context_source=source,
                    failed_sources=tuple(failed_sources),
                )

            if isinstance(result, Failed):
                failed_sources.append(source)

        logger.info(f"No source produced context for query: {query}")
        raise NotFoundError()

    async def _query_vector_store(self, query: str, options: QueryOptions) -> SourceResult:
        logger.info(f"KB: Performing query on vector store to retrieve context: {query}")
        try:
            embedding = await self._call(self.embedder.generate_embedding(query))
            if not embedding.embedding:
                raise ProviderError("Embedding provider returned an empty vector")
            matches = await self._call(self.vector_index.search(embedding.embedding, options.top_k))
        except Exception as e:
            reason = self._describe(e)
            logger.error(f"Vector store query failed: {reason}")
            await self.query_logger.log_knowledge_base_query(
                query, [], options.min_score, success=False, error=reason
            )
            return Failed(reason)

        surviving = filter_vector_matches(matches, options.min_score)
        context_text = format_vector_matches(matches, options.min_score)

        await self.query_logger.log_knowledge_base_query(
            query, surviving, options.min_score, success=bool(context_text)
        )

        if not context_text:
            logger.info(f"KB: No chunks above {options.min_score} among {len(matches)} matches")
            return Empty()

        logger.info(f"KB: Got context from vector store ({len(surviving)} chunks)")
        return Found(context_text, surviving)

    async def _query_llm(self, query: str, options: QueryOptions) -> SourceResult:
        logger.info("Checking if the model can answer directly...")
        try:
            verdict = await self._call(
                self.completer.generate_response(
                    DIRECT_ANSWER_PROMPT.format(query=query),
                    max_tokens=self.completion_max_tokens,
                    temperature=self.completion_temperature,
                )
            )
        except Exception as e:
            reason = self._describe(e)
            logger.error(f"Direct answer check failed: {reason}")
            return Failed(reason)

        if verdict.content.strip().lower() != "yes":
            logger.info("Query requires external information")
            return Empty()

        logger.info("Model: can answer directly. Asking the model...")
        try:
            response = await self._call(
                self.completer.generate_response(
                    query,
                    max_tokens=self.completion_max_tokens,
                    temperature=self.completion_temperature,
                )
            )
        except Exception as e:
            reason = self._describe(e)
            logger.error(f"LLM query failed: {reason}")
            await self.query_logger.log_model_query(
                query, self._model_name(), "", success=False, error=reason
            )
            return Failed(reason)

        has_text = bool(response.content.strip())
        await self.query_logger.log_model_query(query, response.model, response.content, success=has_text)

        if not has_text:
            return Empty()

        logger.info("Model: Got response from the model")
        return Found(response.content, response)

    async def _query_internet(self, query: str, options: QueryOptions) -> SourceResult:
        if self.search_provider is None:
            logger.warning("Search: no web search provider configured")
            return Empty()

        logger.info(f"Search: Searching the web: {query}")
        try:
            results = await self._call(self.search_provider.search(query))
        except Exception as e:
            reason = self._describe(e)
            logger.error(f"Internet query failed: {reason}")
            await self.query_logger.log_search_query(query, [], success=False, error=reason)
            return Failed(reason)

        # Top results in provider ranking order
        top_results = list(results)[:MAX_SEARCH_RESULTS]
        await self.query_logger.log_search_query(query, top_results, success=bool(top_results))

        if not top_results:
            logger.info("Search: No results")
            return Empty()

        logger.info(f"Search: Got {len(top_results)} results")
        return Found(format_search_results(top_results), top_results)

    async def _call(self, awaitable: Awaitable[T]) -> T:
        if self.call_timeout is None:
            return await awaitable
        return await asyncio.wait_for(awaitable, timeout=self.call_timeout)

    def _describe(self, error: Exception) -> str:
        if isinstance(error, asyncio.TimeoutError):
            return f"timed out after {self.call_timeout}s"
        return str(error) or type(error).__name__

    def _model_name(self) -> str:
        config = getattr(self.completer, "config", None)
        return getattr(config, "model", None) or type(self.completer).__name__
