"""Query log entry shapes, one variant per knowledge source."""

from datetime import datetime, timezone
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RetrievedChunk(BaseModel):
    """Knowledge base chunk that survived the similarity threshold."""

    model_config = ConfigDict(frozen=True)

    content: str
    similarity: float
    metadata: dict[str, Any] = Field(default_factory=dict)


class SearchResultRecord(BaseModel):
    """Web search hit as stored in the log."""

    model_config = ConfigDict(frozen=True)

    url: str
    title: str
    description: str


def _as_chunk(item: Any) -> Any:
    """Accept vector index matches (``score``) as well as chunk dicts."""
    if isinstance(item, (RetrievedChunk, dict)):
        return item
    return {
        "content": getattr(item, "content", None) or "",
        "similarity": getattr(item, "score", 0.0),
        "metadata": dict(getattr(item, "metadata", None) or {}),
    }


def _as_search_record(item: Any) -> Any:
    if isinstance(item, (SearchResultRecord, dict)):
        return item
    return {field: getattr(item, field, None) or "" for field in ("url", "title", "description")}


class BaseLogEntry(BaseModel):
    """Fields shared by every log entry."""

    model_config = ConfigDict(frozen=True)

    query_text: str
    success: bool
    error_message: str | None = None
    created_at: datetime = Field(default_factory=_utcnow)


class KnowledgeBaseLogEntry(BaseLogEntry):
    type: Literal["knowledge_base"] = "knowledge_base"
    retrieved_chunks: list[RetrievedChunk] = Field(default_factory=list)
    min_score: float

    @field_validator("retrieved_chunks", mode="before")
    @classmethod
    def _chunks_from_matches(cls, value: Any) -> Any:
        return [_as_chunk(item) for item in value or ()]


class ModelLogEntry(BaseLogEntry):
    type: Literal["model_only"] = "model_only"
    model_name: str
    response_text: str = ""


class SearchLogEntry(BaseLogEntry):
    type: Literal["external_search"] = "external_search"
    search_results: list[SearchResultRecord] = Field(default_factory=list)

    @field_validator("search_results", mode="before")
    @classmethod
    def _records_from_results(cls, value: Any) -> Any:
        return [_as_search_record(item) for item in value or ()]


LogEntry = Annotated[
    Union[KnowledgeBaseLogEntry, ModelLogEntry, SearchLogEntry],
    Field(discriminator="type"),
]

log_entry_adapter: TypeAdapter[LogEntry] = TypeAdapter(LogEntry)

LOG_ENTRY_TYPES = ("knowledge_base", "model_only", "external_search")
