"""
Reference context models and schemas.

Dependencies: pydantic
System role: Reference context API contracts
"""

from pydantic import BaseModel, ConfigDict, Field


class AddReferenceRequest(BaseModel):
    """Request schema for adding a reference."""

    model_config = ConfigDict(populate_by_name=True)

    session_id: str | None = Field(default=None, alias="sessionId")
    title: str | None = None
    content: str | None = None


class AddReferenceResponse(BaseModel):
    id: int
    timestamp: int


class ToggleReferenceRequest(BaseModel):
    """Request schema for activating or deactivating a reference."""

    model_config = ConfigDict(populate_by_name=True)

    id: int | None = None
    is_active: bool = Field(default=False, alias="isActive")
    session_id: str | None = Field(default=None, alias="sessionId")


class UpdateReferenceRequest(BaseModel):
    """Request schema for editing a reference."""

    model_config = ConfigDict(populate_by_name=True)

    id: int | None = None
    title: str | None = None
    content: str | None = None
    session_id: str | None = Field(default=None, alias="sessionId")


class DeleteReferenceRequest(BaseModel):
    """Request schema for deleting a reference."""

    model_config = ConfigDict(populate_by_name=True)

    id: int | None = None
    session_id: str | None = Field(default=None, alias="sessionId")


class ReferenceResponse(BaseModel):
    """Reference list entry."""

    id: int
    title: str
    content: str
    timestamp: int
    is_active: bool
