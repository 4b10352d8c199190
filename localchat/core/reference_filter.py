"""
Reference relevance filter.

Decides whether stored reference text is topically relevant to the
incoming message and, if so, prepends all active references to the
literal prompt.

Matching is a case-insensitive substring test on space-separated words:
title words longer than 2 characters, content words longer than 3.

Dependencies: None
System role: Reference injection for the model gateway
"""

from typing import Iterable, Protocol, Sequence

REFERENCE_HEADER = "Here is some important reference information:\n\n"
REFERENCE_FOOTER = "Based on the above reference information, please answer: "

MIN_TITLE_WORD_LENGTH = 3
MIN_CONTENT_WORD_LENGTH = 4


class Reference(Protocol):
    title: str
    content: str
    is_active: bool


def _words(text: str) -> list[str]:
    return text.lower().split(" ")


def is_relevant(reference: Reference, prompt: str) -> bool:
    """
    Check whether a single reference plausibly relates to the prompt.

    Args:
        reference: Object with title and content
        prompt: Raw user message

    Returns:
        True when a long-enough title or content word occurs in the prompt
    """
    prompt_lower = prompt.lower()
    if any(
        len(word) >= MIN_TITLE_WORD_LENGTH and word in prompt_lower
        for word in _words(reference.title)
    ):
        return True
    return any(
        len(word) >= MIN_CONTENT_WORD_LENGTH and word in prompt_lower
        for word in _words(reference.content)
    )


def build_reference_block(references: Iterable[Reference]) -> str:
    """Render references as the block prepended to the prompt."""
    block = REFERENCE_HEADER
    for ref in references:
        block += f"[{ref.title}]\n{ref.content}\n\n"
    return block + REFERENCE_FOOTER


def apply_references(prompt: str, references: Sequence[Reference]) -> str:
    """
    Prepend reference material to the prompt when any of it is relevant.

    Once one active reference is relevant, every active reference is
    included, not just the matching ones.

    Args:
        prompt: Raw user message
        references: Reference contexts of the session (inactive ones are ignored)

    Returns:
        Enhanced prompt, or the prompt unchanged when nothing is relevant
    """
    active = [ref for ref in references if ref.is_active]
    if not active:
        return prompt
    if not any(is_relevant(ref, prompt) for ref in active):
        return prompt
    return build_reference_block(active) + prompt
