"""
Ollama API client.

Thin async transport over the Ollama HTTP API. Every method returns a
TransportResult and never raises for network or HTTP failures.

Dependencies: httpx, localchat.boundary.ollama.schemas
System role: Model backend transport
"""

import logging
from typing import Any

import httpx

from localchat.boundary.ollama.schemas import ErrorKind, TransportResult

logger = logging.getLogger(__name__)


def classify_exception(exc: Exception) -> ErrorKind:
    """
    Map a transport exception to an ErrorKind.

    Args:
        exc: Exception raised by httpx

    Returns:
        ErrorKind: TIMEOUT, CONNECTION_REFUSED or UNKNOWN
    """
    # ConnectTimeout is a TimeoutException, so check timeouts first
    if isinstance(exc, httpx.TimeoutException):
        return ErrorKind.TIMEOUT
    if isinstance(exc, httpx.ConnectError):
        return ErrorKind.CONNECTION_REFUSED
    return ErrorKind.UNKNOWN


def classify_response(status_code: int, body: str) -> ErrorKind:
    """
    Map a non-2xx backend response to an ErrorKind.

    Args:
        status_code: HTTP status code
        body: Raw response body

    Returns:
        ErrorKind for the failed response
    """
    lowered = body.lower()
    if "context length" in lowered or "context window" in lowered:
        return ErrorKind.CONTEXT_TOO_LONG
    if status_code == 404 or "not found" in lowered:
        return ErrorKind.MODEL_NOT_FOUND
    if status_code in (502, 503, 504):
        return ErrorKind.SERVICE_UNAVAILABLE
    return ErrorKind.BACKEND_ERROR


class OllamaClient:
    """
    Async client for the Ollama API.

    Holds a single httpx.AsyncClient for the process; per-call timeouts
    come from the constructor.
    """

    def __init__(
        self,
        base_url: str,
        health_timeout: float = 5.0,
        generate_timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            base_url: API base URL including the /api suffix
            health_timeout: Timeout for /version and /tags calls (seconds)
            generate_timeout: Timeout for /generate calls (seconds)
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self.base_url = base_url.rstrip("/")
        self.health_timeout = health_timeout
        self.generate_timeout = generate_timeout
        self._http = httpx.AsyncClient(transport=transport)

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._http.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        timeout: float,
        payload: dict[str, Any] | None = None,
    ) -> TransportResult:
        url = f"{self.base_url}{path}"
        try:
            response = await self._http.request(method, url, json=payload, timeout=timeout)
        except httpx.HTTPError as e:
            kind = classify_exception(e)
            logger.warning(f"{__name__}:_request - {method} {path} failed: {kind.value} ({type(e).__name__}: {e})")
            return TransportResult.failure(kind, detail=f"{type(e).__name__}: {e}")

        if response.status_code >= 400:
            body = response.text
            kind = classify_response(response.status_code, body)
            logger.warning(f"{__name__}:_request - {method} {path} returned {response.status_code}: {kind.value}")
            return TransportResult.failure(kind, detail=body[:500], status_code=response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            logger.warning(f"{__name__}:_request - {method} {path} returned invalid JSON: {e}")
            return TransportResult.failure(
                ErrorKind.UNKNOWN,
                detail="invalid JSON",
                status_code=response.status_code,
            )
        return TransportResult.success(data, status_code=response.status_code)

    async def check_health(self) -> TransportResult:
        """
        Check GET /version.

        A response with an error status is reported as SERVICE_UNAVAILABLE;
        a request that times out is reported as CONNECTION_REFUSED, since no
        model is involved yet.

        Returns:
            TransportResult with the version payload on success
        """
        result = await self._request("GET", "/version", self.health_timeout)
        if not result.ok and result.status_code is not None and result.status_code >= 400:
            return TransportResult.failure(
                ErrorKind.SERVICE_UNAVAILABLE,
                detail=result.detail,
                status_code=result.status_code,
            )
        if not result.ok and result.error == ErrorKind.TIMEOUT:
            return TransportResult.failure(ErrorKind.CONNECTION_REFUSED, detail=result.detail)
        return result

    async def list_models(self) -> TransportResult:
        """
        Fetch GET /tags.

        Returns:
            TransportResult whose data is the list of model dicts
        """
        result = await self._request("GET", "/tags", self.health_timeout)
        if not result.ok:
            return result
        models = result.data.get("models") if isinstance(result.data, dict) else None
        return TransportResult.success(models or [], status_code=result.status_code or 200)

    async def generate(
        self,
        model: str,
        prompt: str,
        system: str,
        context: list | None = None,
    ) -> TransportResult:
        """
        Call POST /generate without streaming.

        Args:
            model: Model name as listed by /tags
            prompt: Literal prompt (already reference-enhanced)
            system: System prompt
            context: Continuation token from the previous turn

        Returns:
            TransportResult whose data is {"content": str, "context": list | None}
        """
        payload = {
            "model": model,
            "prompt": prompt,
            "system": system,
            "context": context or [],
            "stream": False,
        }
        result = await self._request("POST", "/generate", self.generate_timeout, payload)
        if not result.ok:
            return result
        body = result.data if isinstance(result.data, dict) else {}
        if "error" in body and "response" not in body:
            error_text = str(body["error"])
            return TransportResult.failure(
                classify_response(result.status_code or 200, error_text),
                detail=error_text,
                status_code=result.status_code,
            )
        return TransportResult.success(
            {"content": body.get("response", ""), "context": body.get("context")},
            status_code=result.status_code or 200,
        )
