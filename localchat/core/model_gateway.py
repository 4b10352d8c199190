"""
Model gateway.

Wraps the Ollama transport with the request flow used by the chat path:
health check, response cache, reference injection, model listing check,
generation with a single simplified-name fallback. Every failure becomes a
canned assistant message; generate() never raises.

Dependencies: localchat.boundary.ollama, localchat.core.reference_filter,
    localchat.core.response_cache
System role: Single entry point to the language model backend
"""

import logging
from dataclasses import dataclass
from typing import Any, Sequence

from localchat.boundary.ollama import ErrorKind, OllamaClient, TransportResult
from localchat.core.reference_filter import Reference, apply_references
from localchat.core.response_cache import ResponseCache

logger = logging.getLogger(__name__)

STATUS_CONNECTED = "connected"
STATUS_DISCONNECTED = "disconnected"
STATUS_ERROR = "error"


@dataclass(frozen=True)
class GenerationResult:
    """
    Result of a gateway generation.

    Attributes:
        content: Model reply, or a canned explanation on failure
        context: Continuation token to persist (the prior one on failure)
        error: Failure class, None on success
        cached: True when served from the response cache
    """

    content: str
    context: list | None = None
    error: ErrorKind | None = None
    cached: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class BackendStatus:
    """Backend reachability as reported to the UI."""

    status: str
    message: str | None = None

    @property
    def connected(self) -> bool:
        return self.status == STATUS_CONNECTED


def simplified_model_name(model_name: str) -> str:
    """Return the part of a model name before the first colon."""
    return model_name.split(":")[0]


def error_message(kind: ErrorKind, model_name: str) -> str:
    """
    Build the user-facing message for a failure class.

    Args:
        kind: Classified failure
        model_name: Model the caller asked for

    Returns:
        Canned explanation, with simplified-name hints for colon-qualified names
    """
    qualified = ":" in model_name
    simple = simplified_model_name(model_name)

    if kind == ErrorKind.TIMEOUT:
        return (
            f"The {model_name} model is taking too long to respond (timeout). "
            "This model might be slow to load or having issues. Try using a different "
            'model like "phi:latest" or "mistral:7b" which may be more responsive.'
        )
    if kind == ErrorKind.CONNECTION_REFUSED:
        if qualified:
            return (
                f'I\'m having trouble connecting to the model "{model_name}". '
                "This may be due to special characters in the model name. Try using a "
                f'simplified model name without colons (e.g., "{simple}") or run '
                f'"ollama pull {simple}" to download a model without special characters.'
            )
        return (
            "I cannot connect to the Ollama service. Please make sure Ollama is running "
            "on your computer by opening the Ollama application first, then refresh this "
            "page and try again."
        )
    if kind == ErrorKind.SERVICE_UNAVAILABLE:
        return (
            "I'm having trouble connecting to the Ollama service. "
            "Please make sure Ollama is running and try again."
        )
    if kind == ErrorKind.MODEL_NOT_FOUND:
        if qualified:
            return (
                f'The model "{model_name}" was not found or is unavailable. '
                "This may be due to special characters in the model name. Try using a "
                f'simplified model name (e.g., "{simple}") or run "ollama pull {simple}" '
                "to download a model without special characters."
            )
        return (
            f'The model "{model_name}" was not found or is unavailable. '
            f'Please make sure it\'s downloaded using "ollama pull {model_name}" and try again.'
        )
    if kind == ErrorKind.CONTEXT_TOO_LONG:
        return (
            f"The conversation is too long for the {model_name} model. Please try clearing "
            "the chat history or using a model with larger context window."
        )
    if kind == ErrorKind.BACKEND_ERROR:
        if qualified:
            return (
                f"I encountered an error while using the {model_name} model. This might be "
                "because the model name contains special characters. Try using a simplified "
                f'model name (e.g., "{simple}") or run "ollama pull {simple}" to download a '
                "model without special characters."
            )
        return (
            f"I encountered an error while using the {model_name} model. Please make sure "
            f'Ollama is running and you\'ve downloaded the model with "ollama pull {model_name}".'
        )
    return (
        "I encountered an unexpected error while processing your request. Please try again, "
        "and if the problem persists, check that Ollama is running properly."
    )


class ModelGateway:
    """
    Generation front door over an OllamaClient.

    Owns the process-scoped response cache.
    """

    def __init__(self, client: OllamaClient, cache: ResponseCache[GenerationResult] | None = None) -> None:
        self.client = client
        self.cache = cache if cache is not None else ResponseCache()

    def _failed(self, kind: ErrorKind, model_name: str, prior_context: list | None) -> GenerationResult:
        return GenerationResult(
            content=error_message(kind, model_name),
            context=prior_context,
            error=kind,
        )

    async def _model_is_listed(self, model_name: str) -> ErrorKind | None:
        result = await self.client.list_models()
        if not result.ok:
            # Listing failures other than timeouts or refused connections read as "not available"
            if result.error in (ErrorKind.TIMEOUT, ErrorKind.CONNECTION_REFUSED):
                return result.error
            return ErrorKind.MODEL_NOT_FOUND
        if not any(m.get("name") == model_name for m in result.data if isinstance(m, dict)):
            logger.info(f"{__name__}:_model_is_listed - Model {model_name} not in /tags listing")
            return ErrorKind.MODEL_NOT_FOUND
        return None

    async def _generate_with_fallback(
        self,
        model_name: str,
        prompt: str,
        system_prompt: str,
        prior_context: list | None,
    ) -> TransportResult:
        result = await self.client.generate(model_name, prompt, system_prompt, prior_context)
        if result.ok or ":" not in model_name:
            return result

        simple = simplified_model_name(model_name)
        logger.info(
            f"{__name__}:_generate_with_fallback - {model_name} failed ({result.error.value}), "
            f"retrying as {simple}"
        )
        return await self.client.generate(simple, prompt, system_prompt, prior_context)

    async def generate(
        self,
        prompt: str,
        prior_context: list | None,
        system_prompt: str,
        model_name: str,
        session_id: str | None = None,
        references: Sequence[Reference] = (),
    ) -> GenerationResult:
        """
        Produce a reply for one user turn.

        Args:
            prompt: Raw user message (also the cache key)
            prior_context: Continuation token from the previous turn
            system_prompt: Output of the prompt composer
            model_name: Requested model
            session_id: Session the turn belongs to (logging only)
            references: Reference contexts of the session

        Returns:
            GenerationResult; on failure content is a canned message and
            context is prior_context
        """
        logger.info(f"{__name__}:generate - Generating with model {model_name} for session {session_id}")

        health = await self.client.check_health()
        if not health.ok:
            logger.warning(f"{__name__}:generate - Health check failed: {health.error.value}")
            return self._failed(health.error, model_name, prior_context)

        cached = self.cache.get(model_name, prompt)
        if cached is not None:
            logger.info(f"{__name__}:generate - Cache hit for model {model_name}")
            return GenerationResult(content=cached.content, context=cached.context, cached=True)

        enhanced_prompt = apply_references(prompt, references)
        if enhanced_prompt != prompt:
            logger.info(f"{__name__}:generate - Prompt enhanced with reference contexts")

        listing_error = await self._model_is_listed(model_name)
        if listing_error is not None:
            return self._failed(listing_error, model_name, prior_context)

        result = await self._generate_with_fallback(model_name, enhanced_prompt, system_prompt, prior_context)
        if not result.ok:
            logger.error(
                f"{__name__}:generate - Generation failed for {model_name}: "
                f"{result.error.value} {result.detail[:200]}"
            )
            return self._failed(result.error, model_name, prior_context)

        generation = GenerationResult(content=result.data["content"], context=result.data["context"])
        self.cache.put(model_name, prompt, generation)
        return generation

    async def list_models(self) -> list[dict[str, Any]]:
        """
        List installed models.

        Returns:
            Model dicts from /tags, or [] when the backend fails
        """
        result = await self.client.list_models()
        if not result.ok:
            logger.warning(f"{__name__}:list_models - Listing failed: {result.error.value}")
            return []
        return result.data

    async def status(self) -> BackendStatus:
        """
        Check backend reachability.

        Returns:
            connected on success, disconnected on an error response,
            error with a message when no response was received
        """
        result = await self.client.check_health()
        if result.ok:
            return BackendStatus(STATUS_CONNECTED)
        if result.status_code is not None:
            return BackendStatus(STATUS_DISCONNECTED)
        return BackendStatus(STATUS_ERROR, message=result.detail or result.error.value)
