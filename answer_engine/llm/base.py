"""Embedding and completion provider interface, plus the provider registry."""

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel


class CompletionConfig(BaseModel):
    """Settings shared by every provider's configuration."""

    model: str
    max_tokens: int = 512
    temperature: float = 0.2
    timeout: int = 30


class EmbeddingResult(BaseModel):
    """Vector for one embedded text."""

    embedding: list[float]
    model: str
    token_count: int | None = None


class ResponseResult(BaseModel):
    """Text of one completion."""

    content: str
    model: str
    token_count: int | None = None
    finish_reason: str | None = None


class LLMProvider(ABC):
    """A model backend used by the query pipeline.

    One provider plays two roles: it embeds queries for the vector index and
    it completes prompts for the yes/no gate, direct answers and the final
    synthesis. Concrete providers raise ``ProviderError`` when their backend
    fails.
    """

    config: CompletionConfig

    @abstractmethod
    async def generate_embedding(self, text: str) -> EmbeddingResult:
        """Embed ``text`` for a nearest-neighbour lookup."""
        pass

    @abstractmethod
    async def generate_response(
        self,
        prompt: str,
        *,
        max_tokens: int | None = None,
        temperature: float | None = None,
    ) -> ResponseResult:
        """Complete ``prompt``.

        Args:
            prompt: Full prompt text
            max_tokens: Output token cap, ``config.max_tokens`` when None
            temperature: Sampling temperature, ``config.temperature`` when None
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Return True when the backend answers."""
        pass

    async def aclose(self) -> None:
        """Release network clients held by the provider."""

    def completion_limits(self, max_tokens: int | None, temperature: float | None) -> tuple[int, float]:
        """Resolve per-call overrides against the configured defaults."""
        return (
            self.config.max_tokens if max_tokens is None else max_tokens,
            self.config.temperature if temperature is None else temperature,
        )


class LLMProviderFactory:
    """Registry mapping provider names to provider classes."""

    _providers: dict[str, type[LLMProvider]] = {}

    @classmethod
    def register(cls, name: str, provider_class: type[LLMProvider]) -> None:
        cls._providers[name] = provider_class

    @classmethod
    def create(cls, name: str, **kwargs: Any) -> LLMProvider:
        """Instantiate the provider registered under ``name``.

        Raises:
            ValueError: If provider name is not registered
        """
        if name not in cls._providers:
            available = ", ".join(cls._providers.keys())
            raise ValueError(f"Unknown provider '{name}'. Available: {available}")

        return cls._providers[name](**kwargs)

    @classmethod
    def list_providers(cls) -> list[str]:
        return list(cls._providers.keys())
