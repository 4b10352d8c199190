"""
Shared test fixtures and configuration for entire test suite.

Provides: In-memory database session, fake Ollama backend over
httpx.MockTransport, in-memory fallback store
Dependencies: pytest, sqlalchemy, httpx
System role: Test infrastructure and fixture management
"""

import json

import httpx
import pytest

FAKE_OLLAMA_URL = "http://ollama.test/api"


class FakeOllama:
    """
    Scriptable stand-in for the Ollama HTTP API.

    Attributes mirror the knobs tests need: health status, listed models,
    reply text/context, models whose generate call fails, and exceptions
    to raise per endpoint.
    """

    def __init__(self) -> None:
        self.version_status = 200
        self.models: list[dict] = [{"name": "phi:latest"}, {"name": "llama3"}]
        self.reply = "Hello! How can I help?"
        self.context: list | None = [1, 2, 3]
        self.failing_models: dict[str, tuple[int, str]] = {}
        self.raise_on: dict[str, Exception] = {}
        self.requests: list[httpx.Request] = []
        self.generate_payloads: list[dict] = []

    def endpoint_calls(self, name: str) -> int:
        return sum(1 for r in self.requests if r.url.path.endswith(f"/{name}"))

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        name = request.url.path.rsplit("/", 1)[-1]
        if name in self.raise_on:
            raise self.raise_on[name]

        if name == "version":
            return httpx.Response(self.version_status, json={"version": "0.5.0"})
        if name == "tags":
            return httpx.Response(200, json={"models": self.models})
        if name == "generate":
            payload = json.loads(request.content)
            self.generate_payloads.append(payload)
            if payload["model"] in self.failing_models:
                status, error = self.failing_models[payload["model"]]
                return httpx.Response(status, json={"error": error})
            return httpx.Response(
                200,
                json={"model": payload["model"], "response": self.reply, "context": self.context, "done": True},
            )
        return httpx.Response(404, json={"error": "unknown endpoint"})

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def fake_ollama() -> FakeOllama:
    """Provide a fresh fake Ollama backend."""
    return FakeOllama()


@pytest.fixture
async def ollama_client(fake_ollama: FakeOllama):
    """Provide an OllamaClient wired to the fake backend."""
    from localchat.boundary.ollama import OllamaClient

    client = OllamaClient(FAKE_OLLAMA_URL, transport=fake_ollama.transport())
    yield client
    await client.aclose()


@pytest.fixture
async def test_engine():
    """
    Create in-memory SQLite async engine with all tables.

    Yields:
        AsyncEngine: Engine with the SQLite transaction hooks installed
    """
    from localchat.boundary.db.connection import create_all_tables, get_async_engine

    engine = get_async_engine(url="sqlite+aiosqlite:///:memory:")
    await create_all_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
async def test_async_db(test_engine):
    """
    Create in-memory SQLite async database session for testing.

    Yields:
        AsyncSession: Test database session
    """
    from localchat.boundary.db.connection import get_async_session_factory

    SessionFactory = get_async_session_factory(test_engine)
    async with SessionFactory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def fallback_store():
    """Provide an empty in-memory session store."""
    from localchat.core.fallback_store import InMemorySessionStore

    return InMemorySessionStore()
