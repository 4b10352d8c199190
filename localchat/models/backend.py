"""
Model backend schemas.

Dependencies: pydantic
System role: Backend status and model listing API contracts
"""

from pydantic import BaseModel


class ModelsResponse(BaseModel):
    """Installed models as listed by the backend (passed through as-is)."""

    models: list[dict]


class StatusResponse(BaseModel):
    """Backend reachability."""

    status: str
    message: str | None = None
