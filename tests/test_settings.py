"""
Test suite for configuration settings.

System role: Verification of environment-driven configuration
"""

import pytest

from localchat.configs import Settings
from localchat.configs.chat import ChatSettings
from localchat.configs.database import DatabaseSettings
from localchat.configs.ollama import OllamaSettings


class TestSettingsDefaults:
    """Test suite for default values."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for var in ("OLLAMA_BASE_URL", "DATABASE_PATH", "CHAT_SESSION_TTL_HOURS", "SERVER_PORT"):
            monkeypatch.delenv(var, raising=False)

        settings = Settings(_env_file=None)

        assert settings.server.port == 3000
        assert settings.ollama.base_url == "http://localhost:11434/api"
        assert settings.ollama.cache_size == 100
        assert settings.chat.history_window == 20
        assert settings.chat.session_ttl_ms == 24 * 60 * 60 * 1000


class TestEnvironmentOverrides:
    """Test suite for prefixed environment variables."""

    def test_prefixed_variables_apply(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("OLLAMA_BASE_URL", "http://gpu-box:11434/api")
        monkeypatch.setenv("CHAT_SESSION_TTL_HOURS", "1")

        assert OllamaSettings().base_url == "http://gpu-box:11434/api"
        assert ChatSettings().session_ttl_ms == 60 * 60 * 1000


class TestDatabaseUrl:
    """Test suite for DatabaseSettings.async_database_url."""

    def test_file_path(self) -> None:
        assert DatabaseSettings(path="data/chat.sqlite").async_database_url == (
            "sqlite+aiosqlite:///data/chat.sqlite"
        )

    def test_memory(self) -> None:
        assert DatabaseSettings(path=":memory:").async_database_url == "sqlite+aiosqlite:///:memory:"
