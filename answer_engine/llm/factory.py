"""Factory for creating LLM providers from configuration."""

from answer_engine.config import LLMProvider as LLMProviderEnum
from answer_engine.config import get_settings
from answer_engine.llm.base import LLMProvider, LLMProviderFactory


def create_llm_provider(provider_name: str | None = None) -> LLMProvider:
    """Create LLM provider from configuration.

    Args:
        provider_name: Override provider name, defaults to settings.llm_provider

    Returns:
        Configured LLM provider instance

    Raises:
        ValueError: If provider configuration is invalid
    """
    settings = get_settings()
    provider_name = provider_name or settings.llm_provider
    defaults = {
        "max_tokens": settings.completion_max_tokens,
        "temperature": settings.completion_temperature,
    }

    # Build provider-specific config
    if provider_name == LLMProviderEnum.OLLAMA:
        from answer_engine.llm.ollama import OllamaConfig

        config = OllamaConfig(
            host=settings.ollama_host,
            model=settings.ollama_model,
            embedding_model=settings.ollama_embedding_model,
            **defaults,
        )
        return LLMProviderFactory.create("ollama", config=config)

    elif provider_name == LLMProviderEnum.OPENAI:
        from answer_engine.llm.openai import OpenAIConfig

        if not settings.openai_api_key:
            raise ValueError("OpenAI API key is required")

        config = OpenAIConfig(
            api_key=settings.openai_api_key,
            model=settings.openai_model,
            embedding_model=settings.openai_embedding_model,
            **defaults,
        )
        return LLMProviderFactory.create("openai", config=config)

    elif provider_name == LLMProviderEnum.GEMINI:
        from answer_engine.llm.gemini import GeminiConfig

        if not settings.gemini_api_key:
            raise ValueError("Gemini API key is required")

        config = GeminiConfig(api_key=settings.gemini_api_key, model=settings.gemini_model, **defaults)
        return LLMProviderFactory.create("gemini", config=config)

    elif provider_name == LLMProviderEnum.ANTHROPIC:
        from answer_engine.llm.anthropic import AnthropicConfig

        if not settings.anthropic_api_key:
            raise ValueError("Anthropic API key is required")

        config = AnthropicConfig(api_key=settings.anthropic_api_key, **defaults)
        return LLMProviderFactory.create("anthropic", config=config)

    else:
        raise ValueError(f"Unknown LLM provider: {provider_name}")


def create_embedding_provider(provider_name: str | None = None) -> LLMProvider:
    """Create LLM provider specifically for embeddings.

    Note: Anthropic doesn't provide embeddings, so this will fallback to OpenAI
    or Ollama for embeddings even if Anthropic is selected for completions.

    Args:
        provider_name: Override provider name, defaults to settings.llm_provider

    Returns:
        Configured LLM provider instance suitable for embeddings
    """
    settings = get_settings()
    provider_name = provider_name or settings.llm_provider

    if provider_name == LLMProviderEnum.ANTHROPIC:
        if settings.openai_api_key:
            return create_llm_provider(LLMProviderEnum.OPENAI)
        else:
            return create_llm_provider(LLMProviderEnum.OLLAMA)

    # For other providers, use the same provider for embeddings
    return create_llm_provider(provider_name)
