"""LLM providers module."""

from answer_engine.llm.anthropic import AnthropicConfig, AnthropicProvider
from answer_engine.llm.base import EmbeddingResult, LLMProvider, LLMProviderFactory, ResponseResult
from answer_engine.llm.factory import create_embedding_provider, create_llm_provider
from answer_engine.llm.gemini import GeminiConfig, GeminiProvider
from answer_engine.llm.ollama import OllamaConfig, OllamaProvider
from answer_engine.llm.openai import OpenAIConfig, OpenAIProvider

# Register all providers
LLMProviderFactory.register("ollama", OllamaProvider)
LLMProviderFactory.register("openai", OpenAIProvider)
LLMProviderFactory.register("gemini", GeminiProvider)
LLMProviderFactory.register("anthropic", AnthropicProvider)

__all__ = [
    "AnthropicConfig",
    "AnthropicProvider",
    "EmbeddingResult",
    "GeminiConfig",
    "GeminiProvider",
    "LLMProvider",
    "LLMProviderFactory",
    "OllamaConfig",
    "OllamaProvider",
    "OpenAIConfig",
    "OpenAIProvider",
    "ResponseResult",
    "create_embedding_provider",
    "create_llm_provider",
]
