"""Ollama provider talking to a local or remote Ollama server over HTTP."""

import logging
from typing import Any

import httpx

from answer_engine.errors import ProviderError
from answer_engine.llm.base import CompletionConfig, EmbeddingResult, LLMProvider, ResponseResult

logger = logging.getLogger(__name__)


class OllamaConfig(CompletionConfig):
    host: str = "http://localhost:11434"
    model: str = "llama3.2"
    embedding_model: str = "nomic-embed-text"
    # Seconds allowed for /api/generate
    generate_timeout: float = 180.0


class OllamaProvider(LLMProvider):
    """Uses ``/api/embed`` for embeddings and ``/api/generate`` for completions."""

    def __init__(self, config: OllamaConfig | None = None, **kwargs: Any) -> None:
        self.config = config or OllamaConfig(**kwargs)
        self.client = httpx.AsyncClient(base_url=self.config.host, timeout=self.config.timeout)

    async def _post(self, path: str, payload: dict[str, Any], **kwargs: Any) -> dict[str, Any]:
        try:
            response = await self.client.post(path, json=payload, **kwargs)
            response.raise_for_status()
        except httpx.TimeoutException as e:
            logger.error(f"Ollama {path} timed out (model {payload['model']}): {e}")
            raise ProviderError(f"Ollama request timed out: {e}")
        except httpx.HTTPStatusError as e:
            logger.error(f"Ollama {path} returned {e.response.status_code}: {e}")
            raise ProviderError(f"Ollama API error: {e}", data={"status": e.response.status_code})
        except httpx.RequestError as e:
            logger.error(f"Ollama {path} unreachable at {self.config.host}: {e}")
            raise ProviderError(f"Ollama request failed: {e}")
        return response.json()

    async def generate_embedding(self, text: str) -> EmbeddingResult:
        data = await self._post("/api/embed", {"model": self.config.embedding_model, "input": text})
        # One vector per input
        embeddings = data.get("embeddings") or [[]]
        return EmbeddingResult(embedding=embeddings[0], model=self.config.embedding_model)

    async def generate_response(
        self,
        prompt: str,
        *,
        max_tokens: int | None = None,
        temperature: float | None = None,
    ) -> ResponseResult:
        max_tokens, temperature = self.completion_limits(max_tokens, temperature)
        logger.debug(f"Ollama generate with {self.config.model}, prompt of {len(prompt)} characters")

        data = await self._post(
            "/api/generate",
            {
                "model": self.config.model,
                "prompt": prompt,
                "stream": False,
                "options": {"num_predict": max_tokens, "temperature": temperature},
            },
            timeout=self.config.generate_timeout,
        )
        return ResponseResult(
            content=data.get("response", ""),
            model=self.config.model,
            token_count=data.get("eval_count"),
            finish_reason=data.get("done_reason"),
        )

    async def health_check(self) -> bool:
        try:
            response = await self.client.get("/api/tags")
            return response.status_code == 200
        except Exception as e:
            logger.warning(f"Ollama health check failed: {e}")
            return False

    async def aclose(self) -> None:
        await self.client.aclose()
