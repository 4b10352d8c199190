"""
HTTP server configuration settings.

Dependencies: pydantic, pydantic_settings
System role: uvicorn bind configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServerSettings(BaseSettings):
    """uvicorn bind address."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="SERVER_",
        case_sensitive=False,
        extra="ignore",
    )

    host: str = Field(default="127.0.0.1", description="Listening interface")
    port: int = Field(default=3000, description="Listening port")
