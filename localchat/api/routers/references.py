"""
Reference context API endpoints.

Routes:
- POST /reference - Add a reference to a session
- GET /reference - List references of a session
- POST /reference/toggle - Activate or deactivate
- POST /reference/update - Edit title and content
- POST /reference/delete - Remove

Dependencies: localchat.application.services.reference_service, localchat.models.reference
System role: Reference context HTTP API
"""

from fastapi import APIRouter, Depends, Query

from localchat.api.deps import get_reference_service
from localchat.application.services.reference_service import ReferenceService
from localchat.core.exceptions import ValidationError
from localchat.models.common import SuccessResponse
from localchat.models.reference import (
    AddReferenceRequest,
    AddReferenceResponse,
    DeleteReferenceRequest,
    ReferenceResponse,
    ToggleReferenceRequest,
    UpdateReferenceRequest,
)

router = APIRouter(prefix="/reference", tags=["references"])


@router.post("", response_model=AddReferenceResponse)
async def add_reference(
    request: AddReferenceRequest,
    reference_service: ReferenceService = Depends(get_reference_service),
) -> AddReferenceResponse:
    """Add an active reference to a session (created if missing)."""
    if not request.session_id or not request.title or not request.content:
        raise ValidationError("SessionId, title, and content are required")

    created = await reference_service.add_reference(request.session_id, request.title, request.content)
    return AddReferenceResponse(**created)


@router.get("", response_model=list[ReferenceResponse])
async def list_references(
    session_id: str | None = Query(default=None, alias="sessionId"),
    reference_service: ReferenceService = Depends(get_reference_service),
) -> list[ReferenceResponse]:
    """List references of a session, newest first."""
    if not session_id:
        raise ValidationError("SessionId is required", field="sessionId")

    refs = await reference_service.list_references(session_id)
    return [ReferenceResponse(**r) for r in refs]


@router.post("/toggle", response_model=SuccessResponse)
async def toggle_reference(
    request: ToggleReferenceRequest,
    reference_service: ReferenceService = Depends(get_reference_service),
) -> SuccessResponse:
    """Set the active flag of a reference."""
    if request.id is None:
        raise ValidationError("Reference context ID is required", field="id")

    await reference_service.toggle_reference(request.id, request.is_active, request.session_id)
    return SuccessResponse()


@router.post("/update", response_model=SuccessResponse)
async def update_reference(
    request: UpdateReferenceRequest,
    reference_service: ReferenceService = Depends(get_reference_service),
) -> SuccessResponse:
    """Replace title and content of a reference."""
    if request.id is None or not request.title or not request.content:
        raise ValidationError("ID, title, and content are required")

    await reference_service.update_reference(
        request.id, request.title, request.content, request.session_id
    )
    return SuccessResponse()


@router.post("/delete", response_model=SuccessResponse)
async def delete_reference(
    request: DeleteReferenceRequest,
    reference_service: ReferenceService = Depends(get_reference_service),
) -> SuccessResponse:
    """Delete a reference."""
    if request.id is None:
        raise ValidationError("Reference context ID is required", field="id")

    await reference_service.delete_reference(request.id, request.session_id)
    return SuccessResponse()
