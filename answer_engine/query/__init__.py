"""Query processing and source cascade module."""

from .models import Provenance, QueryOptions, QueryResult, ResolvedContext
from .orchestrator import QueryOrchestrator
from .processor import QueryProcessor
from .synthesizer import AnswerSynthesizer

__all__ = [
    "AnswerSynthesizer",
    "Provenance",
    "QueryOptions",
    "QueryOrchestrator",
    "QueryProcessor",
    "QueryResult",
    "ResolvedContext",
]
