"""
Test suite for the Ollama transport client.

System role: Verification of transport-level failure classification
"""

import httpx
import pytest

from localchat.boundary.ollama import ErrorKind, OllamaClient
from localchat.boundary.ollama.client import classify_exception, classify_response


class TestClassifyException:
    """Test suite for classify_exception()."""

    def test_connect_error_is_connection_refused(self) -> None:
        assert classify_exception(httpx.ConnectError("refused")) == ErrorKind.CONNECTION_REFUSED

    def test_connect_timeout_is_timeout(self) -> None:
        assert classify_exception(httpx.ConnectTimeout("slow")) == ErrorKind.TIMEOUT

    def test_read_timeout_is_timeout(self) -> None:
        assert classify_exception(httpx.ReadTimeout("slow")) == ErrorKind.TIMEOUT

    def test_other_errors_are_unknown(self) -> None:
        assert classify_exception(httpx.RemoteProtocolError("bad")) == ErrorKind.UNKNOWN


class TestClassifyResponse:
    """Test suite for classify_response()."""

    @pytest.mark.parametrize(
        "status,body,expected",
        [
            (500, '{"error":"context length exceeded"}', ErrorKind.CONTEXT_TOO_LONG),
            (404, '{"error":"model \'x\' not found"}', ErrorKind.MODEL_NOT_FOUND),
            (500, '{"error":"model not found, try pulling it first"}', ErrorKind.MODEL_NOT_FOUND),
            (503, "", ErrorKind.SERVICE_UNAVAILABLE),
            (500, '{"error":"boom"}', ErrorKind.BACKEND_ERROR),
        ],
    )
    def test_should_classify(self, status: int, body: str, expected: ErrorKind) -> None:
        assert classify_response(status, body) == expected


class TestOllamaClient:
    """Test suite for OllamaClient against the fake backend."""

    @pytest.mark.asyncio
    async def test_check_health_success(self, ollama_client: OllamaClient) -> None:
        result = await ollama_client.check_health()

        assert result.ok
        assert result.data == {"version": "0.5.0"}

    @pytest.mark.asyncio
    async def test_check_health_error_status_is_service_unavailable(
        self, ollama_client: OllamaClient, fake_ollama
    ) -> None:
        fake_ollama.version_status = 500

        result = await ollama_client.check_health()

        assert result.error == ErrorKind.SERVICE_UNAVAILABLE
        assert result.status_code == 500

    @pytest.mark.asyncio
    async def test_list_models_returns_models_array(self, ollama_client: OllamaClient) -> None:
        result = await ollama_client.list_models()

        assert result.ok
        assert [m["name"] for m in result.data] == ["phi:latest", "llama3"]

    @pytest.mark.asyncio
    async def test_generate_posts_non_streaming_request(
        self, ollama_client: OllamaClient, fake_ollama
    ) -> None:
        result = await ollama_client.generate("llama3", "Hi", "sys", None)

        assert result.data == {"content": "Hello! How can I help?", "context": [1, 2, 3]}
        request = fake_ollama.requests[-1]
        assert request.method == "POST"
        assert str(request.url) == "http://ollama.test/api/generate"
        assert fake_ollama.generate_payloads[-1]["context"] == []
        assert fake_ollama.generate_payloads[-1]["stream"] is False

    @pytest.mark.asyncio
    async def test_transport_errors_never_raise(self, ollama_client: OllamaClient, fake_ollama) -> None:
        fake_ollama.raise_on["generate"] = httpx.ConnectError("refused")

        result = await ollama_client.generate("llama3", "Hi", "sys", [1])

        assert not result.ok
        assert result.error == ErrorKind.CONNECTION_REFUSED
        assert result.status_code is None

    @pytest.mark.asyncio
    async def test_invalid_json_is_unknown(self) -> None:
        transport = httpx.MockTransport(lambda request: httpx.Response(200, text="not json"))
        client = OllamaClient("http://ollama.test/api", transport=transport)

        result = await client.check_health()
        await client.aclose()

        assert result.error == ErrorKind.UNKNOWN

    @pytest.mark.asyncio
    async def test_check_health_timeout_is_connection_refused(
        self, ollama_client: OllamaClient, fake_ollama
    ) -> None:
        fake_ollama.raise_on["version"] = httpx.ConnectTimeout("timed out")

        result = await ollama_client.check_health()

        assert result.error == ErrorKind.CONNECTION_REFUSED
        assert result.status_code is None
