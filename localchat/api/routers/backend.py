"""
Model backend API endpoints.

Routes: GET /models, GET /status

Dependencies: localchat.core.model_gateway, localchat.models.backend
System role: Backend reachability and model listing HTTP API
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from localchat.api.deps import get_model_gateway
from localchat.core.model_gateway import ModelGateway
from localchat.models.backend import ModelsResponse, StatusResponse

router = APIRouter(tags=["backend"])


@router.get("/models", response_model=ModelsResponse)
async def list_models(gateway: ModelGateway = Depends(get_model_gateway)) -> ModelsResponse:
    """List installed models; empty when the backend is unreachable."""
    return ModelsResponse(models=await gateway.list_models())


@router.get(
    "/status",
    response_model=StatusResponse,
    response_model_exclude_none=True,
    responses={503: {"model": StatusResponse}},
)
async def backend_status(gateway: ModelGateway = Depends(get_model_gateway)):
    """
    Report backend reachability.

    Returns:
        200 {"status": "connected"}, or 503 with "disconnected" / "error"
    """
    status = await gateway.status()
    if status.connected:
        return StatusResponse(status=status.status)
    return JSONResponse(
        status_code=503,
        content=StatusResponse(status=status.status, message=status.message).model_dump(exclude_none=True),
    )
