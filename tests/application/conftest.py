"""
Application-layer fixtures.

Provides: Model gateway and chat service wired to the in-memory database
and the fake Ollama backend
"""

import pytest

from localchat.application.services.chat_service import ChatService
from localchat.core.model_gateway import ModelGateway
from localchat.core.response_cache import ResponseCache

DAY_MS = 24 * 60 * 60 * 1000


@pytest.fixture
def gateway(ollama_client) -> ModelGateway:
    """Provide a gateway over the fake backend."""
    return ModelGateway(ollama_client, ResponseCache())


@pytest.fixture
def chat_service(test_async_db, gateway, fallback_store) -> ChatService:
    """Provide ChatService with a 24h TTL."""
    return ChatService(
        db=test_async_db,
        gateway=gateway,
        fallback=fallback_store,
        history_window=20,
        ttl_ms=DAY_MS,
    )
