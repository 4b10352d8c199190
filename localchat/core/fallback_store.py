"""
In-memory fallback session store.

Serves chat-path reads and writes when the database fails. Created at
application startup, cleared at shutdown, never persisted.

Dependencies: dataclasses, localchat.core.clock
System role: Degraded-mode session storage
"""

from dataclasses import dataclass, field

from localchat.core.clock import now_ms


@dataclass
class FallbackMessage:
    """Chat turn held in memory."""

    role: str
    content: str
    timestamp: int


@dataclass
class FallbackSession:
    """Session held in memory."""

    id: str
    title: str = "New Chat"
    messages: list[FallbackMessage] = field(default_factory=list)
    context: list | None = None
    created_at: int = field(default_factory=now_ms)
    last_activity: int = field(default_factory=now_ms)


class InMemorySessionStore:
    """Process-scoped map of session id to FallbackSession."""

    def __init__(self) -> None:
        self._sessions: dict[str, FallbackSession] = {}

    def get_or_create(self, session_id: str, title: str = "New Chat") -> FallbackSession:
        session = self._sessions.get(session_id)
        if session is None:
            session = FallbackSession(id=session_id, title=title)
            self._sessions[session_id] = session
        return session

    def get(self, session_id: str) -> FallbackSession | None:
        return self._sessions.get(session_id)

    def add_message(self, session_id: str, role: str, content: str) -> FallbackMessage:
        session = self.get_or_create(session_id)
        message = FallbackMessage(role=role, content=content, timestamp=now_ms())
        session.messages.append(message)
        session.last_activity = message.timestamp
        return message

    def get_messages(self, session_id: str) -> list[FallbackMessage]:
        session = self._sessions.get(session_id)
        return list(session.messages) if session else []

    def get_context(self, session_id: str) -> list | None:
        session = self._sessions.get(session_id)
        return session.context if session else None

    def set_context(self, session_id: str, context: list | None) -> None:
        session = self.get_or_create(session_id)
        session.context = context
        session.last_activity = now_ms()

    def sweep(self, cutoff: int) -> int:
        """
        Drop sessions idle since before the cutoff.

        Args:
            cutoff: Epoch ms

        Returns:
            Number of sessions dropped
        """
        expired = [sid for sid, s in self._sessions.items() if s.last_activity < cutoff]
        for sid in expired:
            del self._sessions[sid]
        return len(expired)

    def clear(self) -> None:
        self._sessions.clear()

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)
