"""API-specific dependencies."""

# Re-export common dependencies
from .dependencies import (
    AppState,
    get_app_state,
    get_chat_service,
    get_model_gateway,
    get_reference_service,
    get_session_service,
)

__all__ = [
    "AppState",
    "get_app_state",
    "get_chat_service",
    "get_model_gateway",
    "get_reference_service",
    "get_session_service",
]
