"""
Session domain models and schemas.

Request/response schemas for session operations.

Dependencies: pydantic
System role: Session API contracts
"""

from pydantic import BaseModel, ConfigDict, Field


class CreateSessionRequest(BaseModel):
    """Request schema for creating (or fetching) a session."""

    model_config = ConfigDict(populate_by_name=True)

    session_id: str | None = Field(default=None, alias="sessionId")
    title: str | None = None


class RenameSessionRequest(BaseModel):
    """Request schema for renaming a session."""

    title: str | None = None


class SessionMessage(BaseModel):
    """Stored message as returned with a session."""

    id: int | None = Field(default=None, description="None for messages held only in memory")
    role: str
    content: str
    timestamp: int


class SessionDetailResponse(BaseModel):
    """Session with its messages and continuation context."""

    id: str
    title: str
    created_at: int
    last_activity: int
    messages: list[SessionMessage]
    context: list | None = None


class CreateSessionResponse(BaseModel):
    """Response schema for session creation."""

    success: bool = True
    session: SessionDetailResponse


class SessionSummary(BaseModel):
    """Session list entry."""

    id: str
    title: str
    created_at: int
    last_activity: int
    message_count: int


class ImportResponse(BaseModel):
    """Response schema for session import."""

    success: bool = True
    imported: int
