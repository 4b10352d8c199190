"""Service orchestrators."""

from .chat_service import ChatService
from .reference_service import ReferenceService
from .session_service import SessionService

__all__ = ["ChatService", "ReferenceService", "SessionService"]
