"""Record per-source query attempts in the query log sink."""

import logging
from collections.abc import Sequence
from typing import Any

from .models import BaseLogEntry, KnowledgeBaseLogEntry, LogEntry, ModelLogEntry, SearchLogEntry
from .sink import QueryLogSink

logger = logging.getLogger(__name__)


class QueryLogger:
    """Builds log entries for each source attempt and appends them to a sink.

    Sink failures are logged and swallowed: a broken log store must never
    change the answer a caller gets.
    """

    def __init__(self, sink: QueryLogSink) -> None:
        self.sink = sink

    async def log_knowledge_base_query(
        self,
        query_text: str,
        chunks: Sequence[Any],
        min_score: float,
        success: bool = True,
        error: str | None = None,
    ) -> None:
        """Log a knowledge base lookup.

        Args:
            query_text: Normalised query
            chunks: Matches that survived the threshold (``VectorMatch`` or dicts)
            min_score: Threshold the matches were filtered with
            success: Whether usable context came back
            error: Failure reason, if the lookup raised
        """
        await self._append(
            KnowledgeBaseLogEntry,
            query_text=query_text,
            retrieved_chunks=chunks,
            min_score=min_score,
            success=success,
            error_message=error,
        )

    async def log_model_query(
        self,
        query_text: str,
        model_name: str,
        response_text: str,
        success: bool = True,
        error: str | None = None,
    ) -> None:
        await self._append(
            ModelLogEntry,
            query_text=query_text,
            model_name=model_name,
            response_text=response_text,
            success=success,
            error_message=error,
        )

    async def log_search_query(
        self,
        query_text: str,
        search_results: Sequence[Any],
        success: bool = True,
        error: str | None = None,
    ) -> None:
        await self._append(
            SearchLogEntry,
            query_text=query_text,
            search_results=search_results,
            success=success,
            error_message=error,
        )

    async def get_logs(self, filters: dict[str, Any] | None = None, limit: int | None = None) -> list[LogEntry]:
        """Return logged entries, newest first."""
        return await self.sink.list(filters, limit)

    async def _append(self, entry_class: type[BaseLogEntry], **fields: Any) -> None:
        try:
            entry = entry_class(**fields)
            await self.sink.append(entry)
        except Exception as e:
            logger.error(f"Failed to write {entry_class.__name__} query log: {e}", exc_info=True)
