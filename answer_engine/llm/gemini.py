"""Google Gemini provider."""

import asyncio
import logging
from typing import Any

import google.generativeai as genai

from answer_engine.errors import ProviderError
from answer_engine.llm.base import CompletionConfig, EmbeddingResult, LLMProvider, ResponseResult

logger = logging.getLogger(__name__)


class GeminiConfig(CompletionConfig):
    api_key: str
    model: str = "gemini-1.5-flash"
    embedding_model: str = "models/text-embedding-004"


class GeminiProvider(LLMProvider):
    """Completes with a Gemini model and embeds with ``embed_content``."""

    def __init__(self, config: GeminiConfig | None = None, **kwargs: Any) -> None:
        self.config = config or GeminiConfig(**kwargs)
        genai.configure(api_key=self.config.api_key)
        self.model = genai.GenerativeModel(self.config.model)

    async def _embed(self, text: str, task_type: str) -> list[float]:
        # The SDK only offers a blocking embed call
        result = await asyncio.to_thread(
            genai.embed_content,
            model=self.config.embedding_model,
            content=text,
            task_type=task_type,
        )
        return result["embedding"]

    async def generate_embedding(self, text: str) -> EmbeddingResult:
        try:
            embedding = await self._embed(text, "retrieval_query")
        except Exception as e:
            logger.error(f"Gemini embedding with {self.config.embedding_model} failed: {e}")
            raise ProviderError(f"Failed to generate embedding: {e}")
        return EmbeddingResult(embedding=embedding, model=self.config.embedding_model)

    async def generate_response(
        self,
        prompt: str,
        *,
        max_tokens: int | None = None,
        temperature: float | None = None,
    ) -> ResponseResult:
        max_tokens, temperature = self.completion_limits(max_tokens, temperature)
        generation_config = genai.types.GenerationConfig(max_output_tokens=max_tokens, temperature=temperature)
        try:
            response = await self.model.generate_content_async(prompt, generation_config=generation_config)
            text = response.text
        except Exception as e:
            logger.error(f"Gemini completion with {self.config.model} failed: {e}")
            raise ProviderError(f"Failed to generate response: {e}")

        usage = response.usage_metadata
        return ResponseResult(
            content=text,
            model=self.config.model,
            token_count=usage.total_token_count if usage else None,
            finish_reason=response.candidates[0].finish_reason.name if response.candidates else None,
        )

    async def health_check(self) -> bool:
        try:
            await self._embed("health check", "retrieval_query")
            return True
        except Exception as e:
            logger.warning(f"Gemini health check failed: {e}")
            return False
