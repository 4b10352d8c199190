"""
Chat API endpoints.

Routes:
- POST /chat - Send a message and receive the assistant reply
- GET /history - Full message history of a session

Dependencies: localchat.application.services.chat_service, localchat.models.chat
System role: Chat HTTP API
"""

import logging

from fastapi import APIRouter, Depends, Query

from localchat.api.deps import get_chat_service
from localchat.application.services.chat_service import ChatService
from localchat.core.exceptions import ValidationError
from localchat.models.chat import (
    ChatHistoryResponse,
    ChatMessageResponse,
    ChatRequest,
    ChatResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["chat"])


@router.post("/chat", response_model=ChatResponse)
async def chat(
    request: ChatRequest,
    chat_service: ChatService = Depends(get_chat_service),
) -> ChatResponse:
    """
    Process one chat turn.

    Backend failures are not errors here: the reply then carries a
    canned explanation.

    Args:
        request: ChatRequest with message, sessionId, model, memoryEnabled
        chat_service: Injected ChatService

    Returns:
        ChatResponse: Assistant reply

    Raises:
        ValidationError(400): Missing or empty message, sessionId or model
    """
    if not request.message or not request.session_id:
        raise ValidationError("Message and sessionId are required", field="message")
    if not request.model:
        raise ValidationError("Model selection is required", field="model")

    result = await chat_service.process_chat(
        session_id=request.session_id,
        message=request.message,
        model_name=request.model,
        memory_enabled=request.memory_enabled,
    )
    return ChatResponse(response=result.content)


@router.get("/history", response_model=ChatHistoryResponse)
async def get_history(
    session_id: str | None = Query(default=None, alias="sessionId"),
    chat_service: ChatService = Depends(get_chat_service),
) -> ChatHistoryResponse:
    """
    Get chat history for a session.

    Raises:
        ValidationError(400): Missing sessionId
    """
    if not session_id:
        raise ValidationError("SessionId is required", field="sessionId")

    messages = await chat_service.get_history(session_id)
    return ChatHistoryResponse(history=[ChatMessageResponse(**m) for m in messages])
