"""
Chat memory configuration settings.

Controls how much history is folded into prompts and how long idle
sessions survive.

Dependencies: pydantic, pydantic_settings
System role: Conversation-context assembly configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ChatSettings(BaseSettings):
    """Conversation memory configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="CHAT_",
        case_sensitive=False,
        extra="ignore",
    )

    history_window: int = Field(
        default=20,
        description="Number of most recent messages rendered into the system prompt",
    )
    session_ttl_hours: int = Field(
        default=24,
        description="Sessions idle for longer than this are swept",
    )

    @property
    def session_ttl_ms(self) -> int:
        """Session TTL in milliseconds."""
        return self.session_ttl_hours * 60 * 60 * 1000
