"""Query processing pipeline: normalise, resolve context, synthesize."""

import asyncio
import logging
import time
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from answer_engine.errors import BadRequestError

from .formatter import normalize_query
from .models import QueryOptions, QueryResult
from .orchestrator import QueryOrchestrator
from .synthesizer import AnswerSynthesizer

logger = logging.getLogger(__name__)


class QueryProcessor:
    """Handles a question from raw text to final answer."""

    def __init__(self, orchestrator: QueryOrchestrator, synthesizer: AnswerSynthesizer):
        """Initialize query processor.

        Args:
            orchestrator: Resolves context through the source cascade
            synthesizer: Produces the answer from resolved context
        """
        self.orchestrator = orchestrator
        self.synthesizer = synthesizer

    async def process_query(
        self,
        query: str | None,
        options: QueryOptions | Mapping[str, Any] | None = None,
    ) -> QueryResult:
        """Answer a question.

        Args:
            query: Raw user question
            options: Per-query overrides of the cascade options

        Returns:
            Complete query result

        Raises:
            BadRequestError: If the query is missing or blank, or options are invalid
            NotFoundError: If no source yields an answer
        """
        start_time = time.time()

        cleaned_query = normalize_query(query) if isinstance(query, str) else ""
        if not cleaned_query:
            raise BadRequestError("Field query cannot be empty or missing")

        try:
            options = self.orchestrator.default_options.merged(options)
        except ValidationError as e:
            errors = e.errors(include_url=False, include_context=False, include_input=False)
            raise BadRequestError("Invalid query options", data=errors)

        logger.info(f"Processing query: {cleaned_query}")

        resolved = await self.orchestrator.resolve_context(cleaned_query, options)
        answer = await self.synthesizer.synthesize(resolved, cleaned_query)

        processing_time = time.time() - start_time
        logger.info(
            f"Query answered from {resolved.context_source.value} in {processing_time:.2f}s"
        )

        return QueryResult(
            query=cleaned_query,
            answer=answer,
            context_source=resolved.context_source,
            processing_time=processing_time,
            failed_sources=resolved.failed_sources,
        )

    async def health_check(self) -> dict[str, bool]:
        """Check health of query processing components.

        Returns:
            Health status dictionary
        """
        orchestrator = self.orchestrator
        checks: dict[str, Any] = {
            "embedder": orchestrator.embedder.health_check(),
            "vector_index": orchestrator.vector_index.health_check(),
            "completer": orchestrator.completer.health_check(),
            "query_log": orchestrator.query_logger.sink.health_check(),
        }
        if orchestrator.search_provider is not None:
            checks["web_search"] = orchestrator.search_provider.health_check()

        results = await asyncio.gather(*checks.values(), return_exceptions=True)
        health = {name: result is True for name, result in zip(checks, results)}
        health["overall"] = all(health.values())
        return health

    async def aclose(self) -> None:
        """Close provider clients and the query log store."""
        orchestrator = self.orchestrator
        closed: set[int] = set()
        for provider in (orchestrator.embedder, orchestrator.completer, orchestrator.search_provider):
            # embedder and completer may be one instance
            if provider is None or id(provider) in closed:
                continue
            closed.add(id(provider))
            await provider.aclose()
        orchestrator.query_logger.sink.close()
