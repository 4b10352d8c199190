"""
Typed transport results for the Ollama boundary.

Failures are classified once, when the HTTP call completes, so callers
switch on ErrorKind instead of inspecting exceptions.

Dependencies: dataclasses, enum
System role: Transport result contract
"""

import enum
from dataclasses import dataclass
from typing import Any


class ErrorKind(str, enum.Enum):
    """Failure classes of a backend call."""

    CONNECTION_REFUSED = "connection_refused"
    SERVICE_UNAVAILABLE = "service_unavailable"
    TIMEOUT = "timeout"
    MODEL_NOT_FOUND = "model_not_found"
    CONTEXT_TOO_LONG = "context_too_long"
    BACKEND_ERROR = "backend_error"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class TransportResult:
    """
    Outcome of a single backend call.

    Attributes:
        data: Decoded JSON payload on success
        error: Failure class, None on success
        detail: Short diagnostic text for logs (never shown to users)
        status_code: HTTP status when a response was received
    """

    data: Any = None
    error: ErrorKind | None = None
    detail: str = ""
    status_code: int | None = None

    @property
    def ok(self) -> bool:
        """True when the call succeeded."""
        return self.error is None

    @classmethod
    def success(cls, data: Any, status_code: int = 200) -> "TransportResult":
        return cls(data=data, status_code=status_code)

    @classmethod
    def failure(
        cls,
        error: ErrorKind,
        detail: str = "",
        status_code: int | None = None,
    ) -> "TransportResult":
        return cls(error=error, detail=detail, status_code=status_code)
