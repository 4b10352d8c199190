"""
User-fact extractor.

Opportunistically captures self-identification statements such as
"my name is Alex" or "I'm Alex". Intentionally a regex heuristic.

Dependencies: re
System role: User detail capture for prompt composition
"""

import re

NAME_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"my name is ([A-Za-z\s]+)", re.IGNORECASE),
    re.compile(r"i am ([A-Za-z\s]+)", re.IGNORECASE),
    re.compile(r"call me ([A-Za-z\s]+)", re.IGNORECASE),
    re.compile(r"i'm ([A-Za-z\s]+)", re.IGNORECASE),
)

# Phrases that follow "I am"/"I'm" without being a name
NON_NAME_WORDS: tuple[str, ...] = (
    "sorry",
    "just",
    "not sure",
    "wondering",
    "curious",
    "interested",
    "looking",
)

NAME_KEY = "name"


def is_plausible_name(candidate: str) -> bool:
    """
    Reject captures that are too short or contain a known non-name word.

    Args:
        candidate: Trimmed capture group

    Returns:
        True when the candidate should be stored
    """
    if len(candidate) <= 1:
        return False
    lowered = candidate.lower()
    return not any(word in lowered for word in NON_NAME_WORDS)


def extract_name(message: str) -> str | None:
    """
    Extract a self-reported name from a message.

    Patterns are tried in order; the first accepted capture wins and no
    further patterns are checked.

    Args:
        message: Raw user message

    Returns:
        The name, or None when no pattern produced an acceptable capture
    """
    for pattern in NAME_PATTERNS:
        match = pattern.search(message)
        if not match or not match.group(1):
            continue
        candidate = match.group(1).strip()
        if is_plausible_name(candidate):
            return candidate
    return None


def extract_user_facts(message: str) -> dict[str, str]:
    """
    Extract every supported fact from a message.

    Args:
        message: Raw user message

    Returns:
        Mapping of fact key to value (empty when nothing matched)
    """
    facts: dict[str, str] = {}
    name = extract_name(message)
    if name:
        facts[NAME_KEY] = name
    return facts
