"""
API test fixtures.

Provides: FastAPI app with every API router and the exception handlers,
but no lifespan, so services are supplied through dependency overrides
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from localchat.api.main import register_exception_handlers
from localchat.api.routers import (
    backend_router,
    chat_router,
    references_router,
    sessions_router,
)


@pytest.fixture
def app() -> FastAPI:
    """Create FastAPI test application with the API routers."""
    app = FastAPI()
    register_exception_handlers(app)
    for router in (backend_router, chat_router, references_router, sessions_router):
        app.include_router(router, prefix="/api")
    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Provide TestClient for the FastAPI app."""
    return TestClient(app)
