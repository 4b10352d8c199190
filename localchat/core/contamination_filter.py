"""
Contaminated-history filter.

Recognizes stored assistant turns that are really error-recovery text
(e.g. "I cannot connect to the Ollama service") so they are not replayed
into future prompts as genuine answers.

Two pattern sets:
  - HISTORY_ERROR_PATTERNS: applied per request, non-destructive
  - PURGE_ERROR_PATTERNS: applied once at startup, deletes rows

Dependencies: None
System role: History hygiene for prompt composition
"""

from typing import Iterable, Protocol

PURGE_ERROR_PATTERNS: tuple[str, ...] = (
    "having trouble connecting",
    "special characters in the model name",
    "connection refused",
    "ollama is not running",
    "model not found",
    "unable to connect",
    "try using a simplified model name",
    'run "ollama pull',
)

HISTORY_ERROR_PATTERNS: tuple[str, ...] = PURGE_ERROR_PATTERNS + (
    "timeout",
    "failed to",
    "error",
)


class HistoryMessage(Protocol):
    role: str
    content: str


def is_error_text(content: str, patterns: Iterable[str] = HISTORY_ERROR_PATTERNS) -> bool:
    """
    Check whether text contains any error signature.

    Args:
        content: Message text
        patterns: Lower-case substrings to look for

    Returns:
        True when any pattern occurs in the lower-cased text
    """
    lowered = content.lower()
    return any(pattern in lowered for pattern in patterns)


def is_contaminated(message: HistoryMessage, patterns: Iterable[str] = HISTORY_ERROR_PATTERNS) -> bool:
    """
    Check whether a stored message is an assistant error echo.

    User messages are never contaminated, whatever they contain.

    Args:
        message: Object with role and content attributes
        patterns: Lower-case substrings to look for

    Returns:
        True for assistant messages containing an error signature
    """
    return message.role == "assistant" and is_error_text(message.content, patterns)


def filter_contaminated(messages: Iterable[HistoryMessage]) -> list:
    """
    Drop contaminated assistant turns, preserving order.

    Args:
        messages: Messages in chronological order

    Returns:
        List of the retained messages
    """
    return [msg for msg in messages if not is_contaminated(msg)]
