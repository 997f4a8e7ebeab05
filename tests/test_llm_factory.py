"""Tests for LLM factory functions."""

from unittest.mock import patch

import pytest

from answer_engine.config import LLMProvider as LLMProviderEnum
from answer_engine.config import Settings
from answer_engine.llm.factory import create_embedding_provider, create_llm_provider
from answer_engine.llm.ollama import OllamaProvider
from answer_engine.llm.openai import OpenAIProvider


def settings_for(provider: LLMProviderEnum, **overrides) -> Settings:
    return Settings(_env_file=None, llm_provider=provider, **overrides)


class TestLLMFactory:
    """Test LLM factory functions."""

    @patch("answer_engine.llm.factory.get_settings")
    def test_create_ollama_provider(self, mock_get_settings):
        """Test creating Ollama provider."""
        mock_get_settings.return_value = settings_for(
            LLMProviderEnum.OLLAMA,
            ollama_host="http://test:11434",
            ollama_model="llama3.2",
        )

        provider = create_llm_provider()
        assert isinstance(provider, OllamaProvider)
        assert provider.config.host == "http://test:11434"
        assert provider.config.model == "llama3.2"

    @patch("answer_engine.llm.factory.get_settings")
    def test_create_openai_provider(self, mock_get_settings):
        """Test creating OpenAI provider."""
        mock_get_settings.return_value = settings_for(
            LLMProviderEnum.OPENAI,
            openai_api_key="test-key",
            completion_max_tokens=256,
            completion_temperature=0.1,
        )

        provider = create_llm_provider()
        assert isinstance(provider, OpenAIProvider)
        assert provider.config.api_key == "test-key"
        assert provider.config.max_tokens == 256
        assert provider.config.temperature == 0.1

    @patch("answer_engine.llm.factory.get_settings")
    def test_create_openai_provider_missing_key(self, mock_get_settings):
        """Test creating OpenAI provider without API key."""
        mock_get_settings.return_value = settings_for(LLMProviderEnum.OPENAI, openai_api_key=None)

        with pytest.raises(ValueError, match="OpenAI API key is required"):
            create_llm_provider()

    @patch("answer_engine.llm.factory.get_settings")
    def test_provider_name_override(self, mock_get_settings):
        """Test an explicit provider name wins over settings."""
        mock_get_settings.return_value = settings_for(LLMProviderEnum.OPENAI, openai_api_key=None)

        provider = create_llm_provider("ollama")
        assert isinstance(provider, OllamaProvider)

    @patch("answer_engine.llm.factory.get_settings")
    def test_create_embedding_provider_anthropic_fallback(self, mock_get_settings):
        """Test embedding provider fallback for Anthropic."""
        mock_get_settings.return_value = settings_for(
            LLMProviderEnum.ANTHROPIC,
            anthropic_api_key="anthropic-key",
            openai_api_key="test-key",
        )

        provider = create_embedding_provider()
        assert isinstance(provider, OpenAIProvider)

    @patch("answer_engine.llm.factory.get_settings")
    def test_create_embedding_provider_anthropic_fallback_ollama(self, mock_get_settings):
        """Test embedding provider fallback to Ollama for Anthropic."""
        mock_get_settings.return_value = settings_for(
            LLMProviderEnum.ANTHROPIC,
            anthropic_api_key="anthropic-key",
            openai_api_key=None,
            ollama_host="http://test:11434",
        )

        provider = create_embedding_provider()
        assert isinstance(provider, OllamaProvider)
        assert provider.config.host == "http://test:11434"
