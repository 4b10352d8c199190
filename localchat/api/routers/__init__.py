"""API routers."""

from .backend import router as backend_router
from .chat import router as chat_router
from .references import router as references_router
from .sessions import router as sessions_router
from .ui import router as ui_router

__all__ = [
    "backend_router",
    "chat_router",
    "references_router",
    "sessions_router",
    "ui_router",
]
