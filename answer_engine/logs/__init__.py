"""Query log entries, sinks and the per-source query logger."""

from .logger import QueryLogger
from .models import (
    KnowledgeBaseLogEntry,
    LogEntry,
    ModelLogEntry,
    RetrievedChunk,
    SearchLogEntry,
    SearchResultRecord,
    log_entry_adapter,
)
from .sink import InMemoryQueryLogSink, QueryLogSink
from .store import SQLQueryLogSink

__all__ = [
    "InMemoryQueryLogSink",
    "KnowledgeBaseLogEntry",
    "LogEntry",
    "ModelLogEntry",
    "QueryLogSink",
    "QueryLogger",
    "RetrievedChunk",
    "SQLQueryLogSink",
    "SearchLogEntry",
    "SearchResultRecord",
    "log_entry_adapter",
]
