"""Append-only query log storage interface."""

import asyncio
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from .models import LogEntry

FILTERABLE_FIELDS = ("type", "success", "query_text")


class QueryLogSink(ABC):
    """Durable, append-only record of query attempts."""

    @abstractmethod
    async def append(self, entry: LogEntry) -> None:
        """Persist one log entry."""
        pass

    @abstractmethod
    async def list(
        self,
        filters: Mapping[str, Any] | None = None,
        limit: int | None = None,
    ) -> list[LogEntry]:
        """Return entries matching ``filters``, newest first.

        Args:
            filters: Equality filters on ``type``, ``success`` or ``query_text``
            limit: Maximum number of entries to return

        Raises:
            ValueError: If a filter names an unsupported field
        """
        pass

    async def health_check(self) -> bool:
        """Check if the store is reachable."""
        return True

    def close(self) -> None:
        """Release connections held by the store."""


def check_filters(filters: Mapping[str, Any] | None) -> dict[str, Any]:
    """Validate filter keys and drop ``None`` values."""
    filters = dict(filters or {})
    unknown = set(filters) - set(FILTERABLE_FIELDS)
    if unknown:
        raise ValueError(f"Unsupported log filter(s): {', '.join(sorted(unknown))}")
    return {key: value for key, value in filters.items() if value is not None}


class InMemoryQueryLogSink(QueryLogSink):
    """Process-local sink, handy for development and tests."""

    def __init__(self) -> None:
        self._entries: list[LogEntry] = []
        self._lock = asyncio.Lock()

    async def append(self, entry: LogEntry) -> None:
        async with self._lock:
            self._entries.append(entry)

    async def list(
        self,
        filters: Mapping[str, Any] | None = None,
        limit: int | None = None,
    ) -> list[LogEntry]:
        filters = check_filters(filters)
        async with self._lock:
            entries = list(reversed(self._entries))

        matched = [
            entry
            for entry in entries
            if all(getattr(entry, key) == value for key, value in filters.items())
        ]
        return matched[:limit] if limit is not None else matched
