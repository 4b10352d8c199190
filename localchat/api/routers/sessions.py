"""
Session API endpoints.

Routes:
- GET /sessions - List all sessions
- POST /sessions - Create (or fetch) a session
- GET /sessions/export - Export every session
- POST /sessions/import - Import an export document
- GET /sessions/{id} - Session with messages and context (create-or-fetch)
- PUT /sessions/{id} - Rename
- DELETE /sessions/{id} - Delete with all dependent rows

The export route is declared before /sessions/{id} so it is not captured
as a session id.

Dependencies: localchat.application.services.session_service, localchat.models
System role: Session management HTTP API
"""

import logging

from fastapi import APIRouter, Body, Depends

from localchat.api.deps import get_session_service
from localchat.application.services.session_service import DEFAULT_TITLE, SessionService
from localchat.core.exceptions import ValidationError
from localchat.models.common import SuccessResponse
from localchat.models.session import (
    CreateSessionRequest,
    CreateSessionResponse,
    ImportResponse,
    RenameSessionRequest,
    SessionDetailResponse,
    SessionSummary,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sessions", tags=["sessions"])


@router.get("", response_model=list[SessionSummary])
async def list_sessions(
    session_service: SessionService = Depends(get_session_service),
) -> list[SessionSummary]:
    """List all sessions with message counts, most recently active first."""
    sessions = await session_service.list_sessions()
    return [SessionSummary(**s) for s in sessions]


@router.post("", response_model=CreateSessionResponse)
async def create_session(
    request: CreateSessionRequest,
    session_service: SessionService = Depends(get_session_service),
) -> CreateSessionResponse:
    """
    Create a session, or fetch it when the id already exists.

    Raises:
        ValidationError(400): Missing sessionId
    """
    if not request.session_id:
        raise ValidationError("SessionId is required", field="sessionId")

    session = await session_service.get_or_create_session(
        request.session_id, title=request.title or DEFAULT_TITLE
    )
    return CreateSessionResponse(session=SessionDetailResponse(**session))


@router.get("/export")
async def export_sessions(
    session_service: SessionService = Depends(get_session_service),
) -> dict:
    """Export every session with messages, context and user facts."""
    return await session_service.export_sessions()


@router.post("/import", response_model=ImportResponse)
async def import_sessions(
    document: dict = Body(...),
    session_service: SessionService = Depends(get_session_service),
) -> ImportResponse:
    """
    Import an export document.

    Raises:
        ValidationError(400): `sessions` missing or not a list
    """
    imported = await session_service.import_sessions(document)
    return ImportResponse(imported=imported)


@router.get("/{session_id}", response_model=SessionDetailResponse)
async def get_session(
    session_id: str,
    session_service: SessionService = Depends(get_session_service),
) -> SessionDetailResponse:
    """Fetch a session with messages and context, creating it if missing."""
    session = await session_service.get_or_create_session(session_id)
    return SessionDetailResponse(**session)


@router.put("/{session_id}", response_model=SuccessResponse)
async def rename_session(
    session_id: str,
    request: RenameSessionRequest,
    session_service: SessionService = Depends(get_session_service),
) -> SuccessResponse:
    """
    Rename a session.

    Raises:
        ValidationError(400): Missing title
        SessionNotFoundError(404): Unknown session
    """
    if not request.title:
        raise ValidationError("SessionId and title are required", field="title")

    await session_service.rename_session(session_id, request.title)
    return SuccessResponse()


@router.delete("/{session_id}", response_model=SuccessResponse)
async def delete_session(
    session_id: str,
    session_service: SessionService = Depends(get_session_service),
) -> SuccessResponse:
    """
    Delete a session with messages, context, facts and references.

    Raises:
        SessionNotFoundError(404): Unknown session
    """
    await session_service.delete_session(session_id)
    return SuccessResponse()
