"""
Chat domain models and schemas.

Request/response schemas for chat operations. Required fields are
optional at the schema level so that missing and empty values produce
the same 400 from the router.

Dependencies: pydantic
System role: Chat API contracts
"""

from pydantic import BaseModel, ConfigDict, Field


class ChatRequest(BaseModel):
    """Request schema for chat messages."""

    model_config = ConfigDict(populate_by_name=True)

    message: str | None = Field(default=None, description="User message")
    session_id: str | None = Field(default=None, alias="sessionId")
    model: str | None = Field(default=None, description="Model name as listed by the backend")
    memory_enabled: bool = Field(default=False, alias="memoryEnabled")


class ChatResponse(BaseModel):
    """Response schema for chat messages."""

    response: str


class ChatMessageResponse(BaseModel):
    """Single chat message in history."""

    role: str = Field(description="Message role: 'user' or 'assistant'")
    content: str = Field(description="Message content")
    timestamp: int = Field(description="Epoch milliseconds")


class ChatHistoryResponse(BaseModel):
    """Response schema for chat history."""

    history: list[ChatMessageResponse]
