"""
Dependency injection container.

AppState holds the process-scoped resources built by the application
lifespan; factory functions expose them and the request-scoped services
to FastAPI routes.

Dependencies: localchat.configs, localchat.application, localchat.boundary, localchat.core
System role: DI container for service injection
"""

import logging

import httpx
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from localchat.application.services import ChatService, ReferenceService, SessionService
from localchat.boundary.db import get_async_db, get_async_engine, get_async_session_factory
from localchat.boundary.ollama import OllamaClient
from localchat.configs import Settings
from localchat.core.fallback_store import InMemorySessionStore
from localchat.core.model_gateway import ModelGateway
from localchat.core.response_cache import ResponseCache

logger = logging.getLogger(__name__)


class AppState:
    """
    Container for process-scoped instances.

    Built once in the application lifespan and stored on app.state.container.
    """

    def __init__(
        self,
        settings: Settings,
        engine: AsyncEngine,
        session_factory: async_sessionmaker[AsyncSession],
        ollama_client: OllamaClient,
        gateway: ModelGateway,
        fallback_store: InMemorySessionStore,
    ) -> None:
        self.settings = settings
        self.engine = engine
        self.session_factory = session_factory
        self.ollama_client = ollama_client
        self.gateway = gateway
        self.fallback_store = fallback_store

    @property
    def response_cache(self) -> ResponseCache:
        return self.gateway.cache

    @classmethod
    def build(
        cls,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "AppState":
        """
        Wire every process-scoped resource from settings.

        Args:
            settings: Application settings
            transport: Optional httpx transport for the backend client (tests)

        Returns:
            AppState: Ready container (tables not yet created)
        """
        engine = get_async_engine(db_config=settings.database)
        client = OllamaClient(
            base_url=settings.ollama.base_url,
            health_timeout=settings.ollama.health_timeout,
            generate_timeout=settings.ollama.generate_timeout,
            transport=transport,
        )
        gateway = ModelGateway(client, ResponseCache(max_entries=settings.ollama.cache_size))
        return cls(
            settings=settings,
            engine=engine,
            session_factory=get_async_session_factory(engine),
            ollama_client=client,
            gateway=gateway,
            fallback_store=InMemorySessionStore(),
        )

    async def close(self) -> None:
        """Release the HTTP client, the engine and the in-memory store."""
        await self.ollama_client.aclose()
        await self.engine.dispose()
        self.fallback_store.clear()
        self.gateway.cache.clear()
        logger.info(f"{__name__}:close - Application resources released")


def get_app_state(request: Request) -> AppState:
    """Get the container built by the lifespan."""
    return request.app.state.container


def get_model_gateway(state: AppState = Depends(get_app_state)) -> ModelGateway:
    """Get the process-scoped model gateway."""
    return state.gateway


def get_session_service(
    db: AsyncSession = Depends(get_async_db),
    state: AppState = Depends(get_app_state),
) -> SessionService:
    """
    Get session service instance.

    Args:
        db: Async database session (injected via Depends)
        state: Application container

    Returns:
        SessionService: Service instance with database session
    """
    return SessionService(
        db=db,
        ttl_ms=state.settings.chat.session_ttl_ms,
        fallback=state.fallback_store,
    )


def get_reference_service(db: AsyncSession = Depends(get_async_db)) -> ReferenceService:
    """Get reference service instance."""
    return ReferenceService(db=db)


def get_chat_service(
    db: AsyncSession = Depends(get_async_db),
    state: AppState = Depends(get_app_state),
) -> ChatService:
    """
    Get chat service instance.

    Args:
        db: Async database session (injected via Depends)
        state: Application container

    Returns:
        ChatService: Service wired to the shared gateway and fallback store
    """
    return ChatService(
        db=db,
        gateway=state.gateway,
        fallback=state.fallback_store,
        history_window=state.settings.chat.history_window,
        ttl_ms=state.settings.chat.session_ttl_ms,
    )
