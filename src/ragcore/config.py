"""
Configuration management using Pydantic Settings.

All configuration is loaded from environment variables with sensible defaults.
Use a .env file for local development. Components take explicit constructor
arguments; these settings only supply the defaults.

Environment Variables:
    LLM_ENDPOINT_URL: OpenAI-compatible chat completions endpoint
    LLM_MODEL: Model identifier sent to the completion provider
    LLM_API_KEY: Bearer token for the completion endpoint (optional)
    CHUNK_SIZE: Character budget for recursive chunks
    CHUNK_OVERLAP: Character overlap between recursive chunks
    TOKEN_CHUNK_SIZE: Token budget for sentence-aware chunks
    CHARS_PER_TOKEN: Characters counted as one token
    NUM_QUERIES: Paraphrases requested by the multi-query generator
    LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)
"""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # Completion Provider
    # ==========================================================================
    use_custom_endpoint: bool = Field(
        default=True,
        description="Use an OpenAI-compatible endpoint instead of HuggingFace",
    )
    llm_endpoint_url: str = Field(
        default="http://localhost:8080/v1/chat/completions",
        description="OpenAI-compatible chat completions URL",
    )
    llm_model: str = Field(
        default="Qwen/Qwen2.5-3B-Instruct",
        description="Model identifier passed to the completion provider",
    )
    llm_api_key: Optional[SecretStr] = Field(
        default=None,
        description="Bearer token for the custom endpoint (optional)",
    )
    hf_api_key: Optional[SecretStr] = Field(
        default=None,
        description="HuggingFace API key (optional, for the HF Inference API)",
    )
    llm_temperature: float = Field(
        default=0.1,
        ge=0.0,
        le=2.0,
        description="Temperature for LLM generation (lower = more deterministic)",
    )
    llm_max_tokens: int = Field(
        default=1024,
        ge=1,
        le=8192,
        description="Default maximum tokens for LLM responses",
    )
    llm_timeout: int = Field(
        default=60,
        ge=1,
        description="Request timeout in seconds",
    )
    llm_max_retries: int = Field(
        default=1,
        ge=1,
        le=10,
        description="Attempts per completion call (1 = no retry)",
    )

    # ==========================================================================
    # Chunking Configuration
    # ==========================================================================
    chunk_size: int = Field(
        default=1000,
        ge=1,
        description="Character budget for recursive chunks",
    )
    chunk_overlap: int = Field(
        default=200,
        ge=0,
        description="Character overlap between consecutive recursive chunks",
    )
    token_chunk_size: int = Field(
        default=512,
        ge=1,
        description="Token budget for sentence-aware chunks",
    )
    token_chunk_overlap: int = Field(
        default=50,
        ge=0,
        description="Token overlap between consecutive sentence-aware chunks",
    )
    chars_per_token: int = Field(
        default=4,
        ge=1,
        description="Characters approximated as one token",
    )

    # ==========================================================================
    # Retrieval and Reranking
    # ==========================================================================
    retrieval_top_k: int = Field(
        default=5,
        ge=1,
        le=100,
        description="Number of results returned by search and rerank",
    )
    keyword_weight: float = Field(default=1.0, description="Keyword density weight")
    exact_match_weight: float = Field(default=2.0, description="Exact query match weight")
    title_weight: float = Field(default=1.5, description="Per-keyword source match weight")
    recency_weight: float = Field(default=0.5, description="Recency weight")
    recency_window_days: int = Field(
        default=365,
        ge=1,
        description="Days over which the recency signal decays to zero",
    )
    rerank_default_score: float = Field(
        default=5.0,
        ge=0.0,
        le=10.0,
        description="Neutral score used when an LLM relevance call fails",
    )
    rerank_max_tokens: int = Field(
        default=10,
        ge=1,
        description="Token budget for a single relevance rating",
    )

    # ==========================================================================
    # Query Transformation
    # ==========================================================================
    num_queries: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Paraphrases requested by the multi-query generator",
    )
    transform_max_tokens: int = Field(
        default=512,
        ge=1,
        description="Token budget for decomposition, paraphrasing and HyDE",
    )

    # ==========================================================================
    # Observability Configuration
    # ==========================================================================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging level",
    )

    # ==========================================================================
    # Validators
    # ==========================================================================
    @field_validator("chunk_overlap")
    @classmethod
    def validate_chunk_overlap(cls, v: int, info) -> int:
        """Ensure overlap is less than chunk size."""
        chunk_size = info.data.get("chunk_size", 1000)
        if v >= chunk_size:
            raise ValueError(f"chunk_overlap ({v}) must be less than chunk_size ({chunk_size})")
        return v

    @field_validator("token_chunk_overlap")
    @classmethod
    def validate_token_chunk_overlap(cls, v: int, info) -> int:
        """Ensure token overlap is less than token chunk size."""
        chunk_size = info.data.get("token_chunk_size", 512)
        if v >= chunk_size:
            raise ValueError(
                f"token_chunk_overlap ({v}) must be less than token_chunk_size ({chunk_size})"
            )
        return v

    # ==========================================================================
    # Computed Properties
    # ==========================================================================
    @property
    def llm_api_key_value(self) -> Optional[str]:
        """Get the actual endpoint key value (use sparingly)."""
        if self.llm_api_key:
            return self.llm_api_key.get_secret_value()
        return None

    @property
    def hf_api_key_value(self) -> Optional[str]:
        """Get the actual HuggingFace key value (use sparingly)."""
        if self.hf_api_key:
            return self.hf_api_key.get_secret_value()
        return None


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses LRU cache to ensure settings are only loaded once.
    Call `get_settings.cache_clear()` to reload settings.

    Returns:
        Settings: Application settings instance
    """
    return Settings()


# Convenience alias
settings = get_settings()
