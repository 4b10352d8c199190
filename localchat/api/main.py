"""
FastAPI application with assembled routers.

Initializes the FastAPI app: lifespan-managed AppState, exception
handlers, observability middleware and routers.

Dependencies: fastapi, localchat.api.routers, localchat.api.deps
System role: API entry point with router assembly
"""

import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from localchat.api.deps.dependencies import AppState
from localchat.application.services.maintenance import run_startup_maintenance
from localchat.boundary.db import create_all_tables
from localchat.configs import Settings, get_settings
from localchat.core.exceptions import (
    LocalChatException,
    ReferenceNotFoundError,
    SessionNotFoundError,
    StorageError,
    ValidationError,
)
from localchat.models.common import ErrorResponse
from localchat.observability import configure_logging
from localchat.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

from .routers import (
    backend_router,
    chat_router,
    references_router,
    sessions_router,
    ui_router,
)

logger = logging.getLogger(__name__)


def _error_response(status_code: int, exc: LocalChatException) -> JSONResponse:
    body = ErrorResponse(error=exc.message, details=exc.details or None)
    return JSONResponse(status_code=status_code, content=body.model_dump())


def register_exception_handlers(app: FastAPI) -> None:
    """Map the LocalChatException hierarchy and request validation to ErrorResponse."""

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        return _error_response(400, exc)

    @app.exception_handler(SessionNotFoundError)
    async def session_not_found_handler(request: Request, exc: SessionNotFoundError):
        return _error_response(404, exc)

    @app.exception_handler(ReferenceNotFoundError)
    async def reference_not_found_handler(request: Request, exc: ReferenceNotFoundError):
        return _error_response(404, exc)

    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError):
        logger.error(f"{__name__}:storage_error_handler - {request.method} {request.url.path}: {exc}")
        return _error_response(500, exc)

    @app.exception_handler(LocalChatException)
    async def local_chat_error_handler(request: Request, exc: LocalChatException):
        logger.error(f"{__name__}:local_chat_error_handler - {request.method} {request.url.path}: {exc}")
        return _error_response(500, exc)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        body = ErrorResponse(error="Invalid request", details={"errors": jsonable_errors(exc)})
        return JSONResponse(status_code=400, content=body.model_dump())


def jsonable_errors(exc: RequestValidationError) -> list[dict]:
    """Reduce pydantic errors to JSON-safe location/message pairs."""
    return [
        {"loc": [str(part) for part in error.get("loc", ())], "msg": str(error.get("msg", ""))}
        for error in exc.errors()
    ]


def create_app(
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Args:
        settings: Application settings (defaults to get_settings())
        transport: Optional httpx transport for the backend client (tests)

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Application lifespan context manager.

        Builds the AppState container, prepares the schema and purges
        contaminated history on startup; releases resources on shutdown.
        """
        state = AppState.build(settings, transport=transport)
        app.state.container = state
        await create_all_tables(state.engine)
        await run_startup_maintenance(state.session_factory)
        logger.info(
            f"{__name__}:lifespan - Ready (database={settings.database.path}, "
            f"backend={settings.ollama.base_url})"
        )

        yield

        await state.close()

    app = FastAPI(
        title="Local Chat Assistant",
        description="Chat front-end for a locally running Ollama server with persistent memory",
        version="0.1.0",
        lifespan=lifespan,
    )

    register_exception_handlers(app)

    # Add observability middleware
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    app.include_router(ui_router)
    app.include_router(backend_router, prefix="/api")
    app.include_router(chat_router, prefix="/api")
    app.include_router(references_router, prefix="/api")
    app.include_router(sessions_router, prefix="/api")

    return app
