"""Anthropic Claude completion provider."""

import logging
from typing import Any

import anthropic

from answer_engine.errors import ProviderError
from answer_engine.llm.base import CompletionConfig, EmbeddingResult, LLMProvider, ResponseResult

logger = logging.getLogger(__name__)


class AnthropicConfig(CompletionConfig):
    api_key: str
    model: str = "claude-3-5-haiku-20241022"


class AnthropicProvider(LLMProvider):
    """Completions only; ``create_embedding_provider`` pairs it with another embedder."""

    def __init__(self, config: AnthropicConfig | None = None, **kwargs: Any) -> None:
        self.config = config or AnthropicConfig(**kwargs)
        self.client = anthropic.AsyncAnthropic(api_key=self.config.api_key, timeout=self.config.timeout)

    async def generate_embedding(self, text: str) -> EmbeddingResult:
        raise ProviderError("Anthropic has no embeddings endpoint; configure OpenAI or Ollama for embeddings")

    async def generate_response(
        self,
        prompt: str,
        *,
        max_tokens: int | None = None,
        temperature: float | None = None,
    ) -> ResponseResult:
        max_tokens, temperature = self.completion_limits(max_tokens, temperature)
        try:
            message = await self.client.messages.create(
                model=self.config.model,
                max_tokens=max_tokens,
                temperature=temperature,
                messages=[{"role": "user", "content": prompt}],
            )
        except anthropic.AnthropicError as e:
            logger.error(f"Anthropic completion with {self.config.model} failed: {e}")
            raise ProviderError(f"Failed to generate response: {e}")

        return ResponseResult(
            content="".join(block.text for block in message.content if block.type == "text"),
            model=self.config.model,
            token_count=message.usage.input_tokens + message.usage.output_tokens,
            finish_reason=message.stop_reason,
        )

    async def health_check(self) -> bool:
        try:
            await self.client.models.list(limit=1)
            return True
        except Exception as e:
            logger.warning(f"Anthropic health check failed: {e}")
            return False

    async def aclose(self) -> None:
        await self.client.close()
