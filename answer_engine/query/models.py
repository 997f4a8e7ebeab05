"""Query processing models and data structures."""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Provenance(str, Enum):
    """Which source supplied the context an answer is built from."""

    VECTOR_DB = "vectorDB"
    LLM = "llm"
    INTERNET_SEARCH = "internetSearch"
    NONE = "none"


class QueryOptions(BaseModel):
    """Per-query switches and thresholds for the source cascade.

    Accepts both snake_case names and the camelCase names used on the wire
    (``useVectorStore``, ``minScore`` ...).
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    use_vector_store: bool = True
    use_internet: bool = True
    use_llm: bool = Field(default=True, alias="useLLM")
    min_score: float = 0.85
    top_k: int = Field(default=10, ge=1)

    def merged(self, overrides: "QueryOptions | Mapping[str, Any] | None" = None) -> "QueryOptions":
        """Return a copy with caller-supplied values overriding field by field."""
        if overrides is None:
            return self
        if not isinstance(overrides, QueryOptions):
            overrides = QueryOptions.model_validate(dict(overrides))
        update = overrides.model_dump(exclude_unset=True)
        return QueryOptions.model_validate({**self.model_dump(), **update})


@dataclass(frozen=True)
class ResolvedContext:
    """Context text handed to the synthesizer, tagged with its source."""

    context_text: str
    context_source: Provenance
    failed_sources: tuple[Provenance, ...] = ()


@dataclass(frozen=True)
class Found:
    """A source produced usable context."""

    content: str
    payload: Any = None


@dataclass(frozen=True)
class Empty:
    """A source answered but had nothing usable."""


@dataclass(frozen=True)
class Failed:
    """A source call raised or timed out."""

    reason: str


SourceResult = Union[Found, Empty, Failed]


@dataclass
class QueryResult:
    """Complete result of query processing."""

    query: str
    answer: str
    context_source: Provenance
    processing_time: float
    failed_sources: tuple[Provenance, ...] = ()
