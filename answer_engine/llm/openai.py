"""OpenAI chat and embedding provider."""

import logging
from typing import Any

import openai

from answer_engine.errors import ProviderError
from answer_engine.llm.base import CompletionConfig, EmbeddingResult, LLMProvider, ResponseResult

logger = logging.getLogger(__name__)


class OpenAIConfig(CompletionConfig):
    api_key: str
    model: str = "gpt-4o-mini"
    embedding_model: str = "text-embedding-3-small"
    max_retries: int = 3


class OpenAIProvider(LLMProvider):
    """Embeds with an OpenAI embedding model and completes with a chat model."""

    def __init__(self, config: OpenAIConfig | None = None, **kwargs: Any) -> None:
        self.config = config or OpenAIConfig(**kwargs)
        self.client = openai.AsyncOpenAI(
            api_key=self.config.api_key,
            timeout=self.config.timeout,
            max_retries=self.config.max_retries,
        )

    async def generate_embedding(self, text: str) -> EmbeddingResult:
        try:
            response = await self.client.embeddings.create(model=self.config.embedding_model, input=text)
        except openai.OpenAIError as e:
            logger.error(f"OpenAI embedding with {self.config.embedding_model} failed: {e}")
            raise ProviderError(f"Failed to generate embedding: {e}")

        return EmbeddingResult(
            embedding=response.data[0].embedding,
            model=self.config.embedding_model,
            token_count=response.usage.total_tokens if response.usage else None,
        )

    async def generate_response(
        self,
        prompt: str,
        *,
        max_tokens: int | None = None,
        temperature: float | None = None,
    ) -> ResponseResult:
        """Send ``prompt`` as a single user message."""
        max_tokens, temperature = self.completion_limits(max_tokens, temperature)
        try:
            completion = await self.client.chat.completions.create(
                model=self.config.model,
                messages=[{"role": "user", "content": prompt}],
                max_tokens=max_tokens,
                temperature=temperature,
            )
        except openai.OpenAIError as e:
            logger.error(f"OpenAI completion with {self.config.model} failed: {e}")
            raise ProviderError(f"Failed to generate response: {e}")

        choice = completion.choices[0]
        return ResponseResult(
            content=choice.message.content or "",
            model=self.config.model,
            token_count=completion.usage.total_tokens if completion.usage else None,
            finish_reason=choice.finish_reason,
        )

    async def health_check(self) -> bool:
        """Listing models is free and proves the key works."""
        try:
            await self.client.models.list()
            return True
        except Exception as e:
            logger.warning(f"OpenAI health check failed: {e}")
            return False

    async def aclose(self) -> None:
        await self.client.close()
