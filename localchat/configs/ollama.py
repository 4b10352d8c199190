"""
Model backend configuration settings.

Settings for the Ollama HTTP API: base URL, per-call
timeouts and the response cache bound.

Dependencies: pydantic, pydantic_settings
System role: Model gateway configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class OllamaSettings(BaseSettings):
    """Ollama backend configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="OLLAMA_",
        case_sensitive=False,
        extra="ignore",
    )

    base_url: str = Field(
        default="http://localhost:11434/api",
        description="Ollama API base URL (including the /api suffix)",
    )
    health_timeout: float = Field(
        default=5.0,
        description="Timeout in seconds for health and model listing calls",
    )
    generate_timeout: float = Field(
        default=30.0,
        description="Timeout in seconds for generation calls",
    )
    cache_size: int = Field(
        default=100,
        description="Maximum number of cached responses (FIFO eviction)",
    )
