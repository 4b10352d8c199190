"""
Test suite for reference context API endpoints.

System role: Verification of /api/reference routes
"""

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from localchat.api.deps import get_reference_service
from localchat.core.exceptions import ReferenceNotFoundError


@pytest.fixture
def mock_reference_service(client: TestClient) -> AsyncMock:
    service = AsyncMock()
    client.app.dependency_overrides[get_reference_service] = lambda: service
    return service


class TestAddAndList:
    """Test suite for POST/GET /api/reference."""

    def test_add_returns_id_and_timestamp(
        self, client: TestClient, mock_reference_service: AsyncMock
    ) -> None:
        mock_reference_service.add_reference.return_value = {"id": 4, "timestamp": 1700000000000}

        response = client.post(
            "/api/reference", json={"sessionId": "s1", "title": "Trip", "content": "Paris"}
        )

        assert response.status_code == 200
        assert response.json() == {"id": 4, "timestamp": 1700000000000}
        mock_reference_service.add_reference.assert_awaited_once_with("s1", "Trip", "Paris")

    def test_add_requires_all_fields(self, client: TestClient, mock_reference_service: AsyncMock) -> None:
        response = client.post("/api/reference", json={"sessionId": "s1", "title": "Trip"})

        assert response.status_code == 400
        assert response.json()["error"] == "SessionId, title, and content are required"

    def test_list_references(self, client: TestClient, mock_reference_service: AsyncMock) -> None:
        mock_reference_service.list_references.return_value = [
            {"id": 1, "title": "T", "content": "C", "timestamp": 5, "is_active": True}
        ]

        response = client.get("/api/reference", params={"sessionId": "s1"})

        assert response.status_code == 200
        assert response.json()[0]["is_active"] is True

    def test_list_requires_session(self, client: TestClient, mock_reference_service: AsyncMock) -> None:
        assert client.get("/api/reference").status_code == 400


class TestMutations:
    """Test suite for toggle, update and delete."""

    def test_toggle(self, client: TestClient, mock_reference_service: AsyncMock) -> None:
        response = client.post("/api/reference/toggle", json={"id": 1, "isActive": False, "sessionId": "s1"})

        assert response.json() == {"success": True}
        mock_reference_service.toggle_reference.assert_awaited_once_with(1, False, "s1")

    def test_update(self, client: TestClient, mock_reference_service: AsyncMock) -> None:
        response = client.post("/api/reference/update", json={"id": 1, "title": "N", "content": "B"})

        assert response.status_code == 200
        mock_reference_service.update_reference.assert_awaited_once_with(1, "N", "B", None)

    def test_update_requires_fields(self, client: TestClient, mock_reference_service: AsyncMock) -> None:
        assert client.post("/api/reference/update", json={"id": 1, "title": "N"}).status_code == 400

    def test_delete_without_id_is_400(self, client: TestClient, mock_reference_service: AsyncMock) -> None:
        assert client.post("/api/reference/delete", json={}).status_code == 400

    def test_unknown_reference_is_404(self, client: TestClient, mock_reference_service: AsyncMock) -> None:
        mock_reference_service.delete_reference.side_effect = ReferenceNotFoundError(9, "s1")

        response = client.post("/api/reference/delete", json={"id": 9, "sessionId": "s1"})

        assert response.status_code == 404
        assert response.json()["success"] is False
