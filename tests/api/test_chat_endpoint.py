"""
Test suite for chat API endpoints.

Tests POST /api/chat and GET /api/history with FastAPI TestClient.

System role: Verification of chat HTTP API endpoints
"""

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from localchat.api.deps import get_chat_service
from localchat.boundary.ollama import ErrorKind
from localchat.core.model_gateway import GenerationResult


@pytest.fixture
def mock_chat_service(client: TestClient) -> AsyncMock:
    """Install an AsyncMock ChatService."""
    service = AsyncMock()
    service.process_chat.return_value = GenerationResult(content="Hi there!", context=[1])
    client.app.dependency_overrides[get_chat_service] = lambda: service
    return service


class TestChatEndpoint:
    """Test suite for POST /api/chat."""

    def test_chat_returns_reply(self, client: TestClient, mock_chat_service: AsyncMock) -> None:
        response = client.post(
            "/api/chat",
            json={"message": "Hello", "sessionId": "s1", "model": "phi:latest", "memoryEnabled": True},
        )

        assert response.status_code == 200
        assert response.json() == {"response": "Hi there!"}
        mock_chat_service.process_chat.assert_awaited_once_with(
            session_id="s1", message="Hello", model_name="phi:latest", memory_enabled=True
        )

    def test_memory_defaults_to_off(self, client: TestClient, mock_chat_service: AsyncMock) -> None:
        client.post("/api/chat", json={"message": "Hello", "sessionId": "s1", "model": "phi"})

        assert mock_chat_service.process_chat.await_args.kwargs["memory_enabled"] is False

    def test_backend_failure_is_still_200(self, client: TestClient, mock_chat_service: AsyncMock) -> None:
        mock_chat_service.process_chat.return_value = GenerationResult(
            content="I cannot connect to the Ollama service.", error=ErrorKind.CONNECTION_REFUSED
        )

        response = client.post("/api/chat", json={"message": "Hello", "sessionId": "s1", "model": "phi"})

        assert response.status_code == 200
        assert response.json()["response"].startswith("I cannot connect")

    @pytest.mark.parametrize(
        "payload",
        [
            {"sessionId": "s1", "model": "phi"},
            {"message": "", "sessionId": "s1", "model": "phi"},
            {"message": "Hello", "model": "phi"},
        ],
    )
    def test_missing_message_or_session_is_400(
        self, client: TestClient, mock_chat_service: AsyncMock, payload: dict
    ) -> None:
        response = client.post("/api/chat", json=payload)

        assert response.status_code == 400
        assert response.json()["error"] == "Message and sessionId are required"
        assert response.json()["success"] is False
        mock_chat_service.process_chat.assert_not_awaited()

    def test_missing_model_is_400(self, client: TestClient, mock_chat_service: AsyncMock) -> None:
        response = client.post("/api/chat", json={"message": "Hello", "sessionId": "s1"})

        assert response.status_code == 400
        assert response.json()["error"] == "Model selection is required"


class TestHistoryEndpoint:
    """Test suite for GET /api/history."""

    def test_history_returns_messages(self, client: TestClient, mock_chat_service: AsyncMock) -> None:
        mock_chat_service.get_history.return_value = [
            {"role": "user", "content": "Hello", "timestamp": 1},
            {"role": "assistant", "content": "Hi!", "timestamp": 2},
        ]

        response = client.get("/api/history", params={"sessionId": "s1"})

        assert response.status_code == 200
        assert [m["role"] for m in response.json()["history"]] == ["user", "assistant"]
        mock_chat_service.get_history.assert_awaited_once_with("s1")

    def test_history_without_session_is_400(self, client: TestClient, mock_chat_service: AsyncMock) -> None:
        response = client.get("/api/history")

        assert response.status_code == 400
