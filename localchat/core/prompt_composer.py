"""
System prompt composer.

Turns stored conversation rows and user facts into the system prompt sent
with every generation. Rendering functions are pure; PromptComposer only
loads the rows and hands them over.

Dependencies: localchat.core.contamination_filter
System role: Conversation-context assembly
"""

import logging
from typing import Awaitable, Callable, Mapping, Sequence

from localchat.core.contamination_filter import HistoryMessage, filter_contaminated

logger = logging.getLogger(__name__)

PERSONA_WITH_MEMORY = (
    "You are a helpful and friendly AI assistant. Be conversational, natural, and "
    "personable in your responses. Maintain memory of past interactions and reference "
    "relevant context when appropriate. Feel free to be casual and engaging while still "
    "being informative and helpful."
)
PERSONA_WITHOUT_MEMORY = (
    "You are a helpful and friendly AI assistant. Be conversational, natural, and "
    "personable in your responses. Feel free to be casual and engaging while still "
    "being informative and helpful."
)
CLOSING_INSTRUCTION = (
    "Please respond in a natural, conversational manner. Remember and use the user's "
    "name and personal details when available."
)

DEFAULT_HISTORY_WINDOW = 20
FALLBACK_USER_TURNS = 3
MIN_CLEAN_MESSAGES = 2

HistoryLoader = Callable[[str, int], Awaitable[Sequence[HistoryMessage]]]
FactsLoader = Callable[[str], Awaitable[Mapping[str, str]]]


def model_line(model_name: str) -> str:
    return f"You are running locally using Ollama with the {model_name} model."


def render_history(window: Sequence[HistoryMessage]) -> str:
    """
    Render the recent-message window as Human/Assistant lines.

    Contaminated assistant turns are dropped. When fewer than two
    messages survive from a non-empty window, only the last three user
    messages of the window are rendered.

    Args:
        window: Most recent messages, chronological

    Returns:
        Turns joined by a blank line
    """
    survivors = filter_contaminated(window)
    dropped = len(window) - len(survivors)
    if dropped:
        logger.debug(f"{__name__}:render_history - Filtered {dropped} contaminated messages")

    if len(survivors) < MIN_CLEAN_MESSAGES and window:
        user_turns = [msg for msg in window if msg.role == "user"][-FALLBACK_USER_TURNS:]
        return "\n\n".join(f"Human: {msg.content}" for msg in user_turns)

    return "\n\n".join(
        f"{'Human' if msg.role == 'user' else 'Assistant'}: {msg.content}" for msg in survivors
    )


def render_facts(facts: Mapping[str, str]) -> str:
    """Render user facts as the must-remember block (empty when there are none)."""
    if not facts:
        return ""
    block = "Important user information you MUST remember:\n"
    for key, value in facts.items():
        block += f"- User's {key}: {value}\n"
    return block + "\n"


def compose_memory_prompt(
    model_name: str,
    window: Sequence[HistoryMessage],
    facts: Mapping[str, str],
) -> str:
    """
    Assemble the memory-on system prompt.

    Args:
        model_name: Model the reply will come from
        window: Most recent messages, chronological
        facts: User facts in insertion order

    Returns:
        Full system prompt
    """
    return (
        f"{PERSONA_WITH_MEMORY}\n\n"
        f"{model_line(model_name)}\n\n"
        f"{render_facts(facts)}"
        "Here is the recent conversation history for context:\n\n"
        f"{render_history(window)}\n\n"
        f"{CLOSING_INSTRUCTION}"
    )


def compose_stateless_prompt(model_name: str) -> str:
    """Assemble the memory-off system prompt."""
    return f"{PERSONA_WITHOUT_MEMORY}\n\n{model_line(model_name)}"


class PromptComposer:
    """
    Loads history and facts for a session and composes the system prompt.

    Loaders are injected so the composer stays independent of storage.
    """

    def __init__(
        self,
        history_loader: HistoryLoader,
        facts_loader: FactsLoader,
        history_window: int = DEFAULT_HISTORY_WINDOW,
    ) -> None:
        self.history_loader = history_loader
        self.facts_loader = facts_loader
        self.history_window = history_window

    async def compose(self, session_id: str, model_name: str, memory_enabled: bool) -> str:
        """
        Build the system prompt for one turn.

        Args:
            session_id: Session whose rows are used
            model_name: Model the reply will come from
            memory_enabled: When False, no storage is read

        Returns:
            System prompt
        """
        if not memory_enabled:
            return compose_stateless_prompt(model_name)

        window = await self.history_loader(session_id, self.history_window)
        facts = await self.facts_loader(session_id)
        logger.debug(
            f"{__name__}:compose - Session {session_id}: {len(window)} messages, {len(facts)} facts"
        )
        return compose_memory_prompt(model_name, window, facts)
