"""Configuration management using pydantic-settings."""

from enum import Enum
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LLMProvider(str, Enum):
    """Supported LLM providers."""

    OLLAMA = "ollama"
    OPENAI = "openai"
    GEMINI = "gemini"
    ANTHROPIC = "anthropic"


class Environment(str, Enum):
    """Application environments."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # LLM Provider Configuration
    llm_provider: LLMProvider = Field(
        default=LLMProvider.OPENAI,
        description="LLM provider to use for embeddings and completions",
    )

    # Ollama Configuration
    ollama_host: str = Field(
        default="http://localhost:11434",
        description="Ollama API host URL",
    )
    ollama_model: str = Field(
        default="llama3.2",
        description="Ollama model to use",
    )
    ollama_embedding_model: str = Field(
        default="nomic-embed-text",
        description="Ollama embedding model to use",
    )

    # OpenAI Configuration
    openai_api_key: str | None = Field(
        default=None,
        description="OpenAI API key",
    )
    openai_model: str = Field(
        default="gpt-4o-mini",
        description="OpenAI chat model to use",
    )
    openai_embedding_model: str = Field(
        default="text-embedding-3-small",
        description="OpenAI embedding model to use",
    )

    # Google Gemini Configuration
    gemini_api_key: str | None = Field(
        default=None,
        description="Google Gemini API key",
    )
    gemini_model: str = Field(
        default="gemini-1.5-flash",
        description="Google Gemini model to use",
    )

    # Anthropic Configuration
    anthropic_api_key: str | None = Field(
        default=None,
        description="Anthropic API key",
    )

    # ChromaDB Configuration
    chroma_host: str = Field(
        default="localhost",
        description="ChromaDB host",
    )
    chroma_port: int = Field(
        default=8000,
        description="ChromaDB port",
    )
    chroma_collection: str = Field(
        default="knowledge-base",
        description="ChromaDB collection holding the knowledge base",
    )

    # Brave Search Configuration
    brave_search_api_key: str | None = Field(
        default=None,
        description="Brave Search API subscription token",
    )
    brave_search_url: str = Field(
        default="https://api.search.brave.com/res/v1/web/search",
        description="Brave Search web endpoint",
    )

    # Query Defaults
    query_use_vector_store: bool = Field(
        default=True,
        description="Try the knowledge base first",
    )
    query_use_llm: bool = Field(
        default=True,
        description="Let the model answer directly when it can",
    )
    query_use_internet: bool = Field(
        default=True,
        description="Fall back to web search",
    )
    query_min_score: float = Field(
        default=0.85,
        description="Similarity a knowledge base match must exceed",
    )
    query_top_k: int = Field(
        default=10,
        ge=1,
        description="Nearest neighbours requested from the vector index",
    )

    # Completion Configuration
    completion_max_tokens: int = Field(
        default=512,
        description="Output token cap for completion calls",
    )
    completion_temperature: float = Field(
        default=0.2,
        description="Sampling temperature for completion calls",
    )
    provider_timeout: float | None = Field(
        default=60.0,
        description="Seconds before a provider call in the cascade is abandoned",
    )

    # Query Log Configuration
    query_log_database_url: str = Field(
        default="sqlite:///query_logs.db",
        description="SQLAlchemy URL of the query log store",
    )

    # Application Configuration
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    log_file: Path | None = Field(
        default=Path("app.log"),
        description="File that receives a copy of the application log",
    )
    server_host: str = Field(
        default="0.0.0.0",
        description="HTTP bind address",
    )
    server_port: int = Field(
        default=3000,
        description="HTTP port",
    )
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment",
    )

    @property
    def chroma_url(self) -> str:
        """Get the full ChromaDB URL."""
        return f"http://{self.chroma_host}:{self.chroma_port}"

    def validate_provider_config(self) -> None:
        """Validate that required API keys are set for the selected providers."""
        if self.llm_provider == LLMProvider.OPENAI and not self.openai_api_key:
            raise ValueError("OpenAI API key is required when using OpenAI provider")
        elif self.llm_provider == LLMProvider.GEMINI and not self.gemini_api_key:
            raise ValueError("Gemini API key is required when using Gemini provider")
        elif self.llm_provider == LLMProvider.ANTHROPIC and not self.anthropic_api_key:
            raise ValueError("Anthropic API key is required when using Anthropic provider")

        if self.query_use_internet and not self.brave_search_api_key:
            raise ValueError("Brave Search API key is required when internet search is enabled")


# Global settings instance - lazy loaded
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
