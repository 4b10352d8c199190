"""
Chat history adapter.

High-level business logic for chat history management on the chat path.
Provides simple interface for adding/retrieving messages by role and for
the session's continuation context. When storage raises, the transaction
is rolled back and the operation is served by the in-memory store.

Dependencies: localchat.boundary.db.CRUD, localchat.core.fallback_store
System role: Chat history business logic adapter
"""

import logging
from typing import Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from localchat.application.lifecycle import sweep_expired_sessions
from localchat.boundary.db.CRUD.context_crud import context_crud
from localchat.boundary.db.CRUD.message_crud import message_crud
from localchat.boundary.db.CRUD.session_crud import session_crud
from localchat.boundary.db.models.message_model import MessageRole
from localchat.core.fallback_store import InMemorySessionStore

logger = logging.getLogger(__name__)


class ChatHistoryAdapter:
    """
    High-level adapter for chat history operations.

    Provides business logic layer on top of the message, context and
    session CRUDs. Every write commits; every message insert is followed
    by the idle-session sweep.
    """

    def __init__(
        self,
        session_id: str,
        db: AsyncSession,
        fallback: InMemorySessionStore,
        ttl_ms: int | None = None,
    ) -> None:
        """
        Initialize chat history adapter.

        Args:
            session_id: Session id for chat history scope
            db: AsyncSession for database operations
            fallback: In-memory store used when storage fails
            ttl_ms: Idle TTL for the post-insert sweep (None disables it)
        """
        self.session_id = session_id
        self.db = db
        self.fallback = fallback
        self.ttl_ms = ttl_ms

    async def _recover(self, operation: str, error: SQLAlchemyError) -> None:
        logger.error(
            f"{__name__}:{operation} - Storage failed for session {self.session_id}, "
            f"using in-memory store: {type(error).__name__}: {error}"
        )
        try:
            await self.db.rollback()
        except SQLAlchemyError as e:
            logger.error(f"{__name__}:{operation} - Rollback failed: {e}")

    async def ensure_session(self) -> None:
        """Create the session if it does not exist yet."""
        try:
            await session_crud.get_or_create(self.db, self.session_id)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self._recover("ensure_session", e)
            self.fallback.get_or_create(self.session_id)

    async def add_message(self, role: str, content: str) -> None:
        """
        Add message to chat history by role.

        Args:
            role: Message role ("user" or "assistant")
            content: Message content

        Raises:
            ValueError: If role is not "user" or "assistant"
        """
        if role not in (MessageRole.USER.value, MessageRole.ASSISTANT.value):
            raise ValueError(f"Invalid role: {role}. Must be 'user' or 'assistant'")

        try:
            await session_crud.get_or_create(self.db, self.session_id)
            message = await message_crud.add(self.db, self.session_id, role, content)
            await session_crud.touch(self.db, self.session_id, at=message.timestamp)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self._recover("add_message", e)
            self.fallback.add_message(self.session_id, role, content)
            return

        if self.ttl_ms is not None:
            await sweep_expired_sessions(self.db, self.ttl_ms, self.fallback)

    async def add_user_message(self, content: str) -> None:
        """Add user message to chat history."""
        await self.add_message(MessageRole.USER.value, content)

    async def add_assistant_message(self, content: str) -> None:
        """Add assistant message to chat history."""
        await self.add_message(MessageRole.ASSISTANT.value, content)

    async def get_messages(self, limit: int | None = None) -> Sequence:
        """
        Get chat messages for session.

        Args:
            limit: Maximum number of recent messages to return (None = all)

        Returns:
            Messages in chronological order (ORM rows, or in-memory
            messages when storage fails)
        """
        try:
            if limit is not None and limit > 0:
                return await message_crud.get_recent(self.db, self.session_id, limit)
            return await message_crud.get_for_session(self.db, self.session_id)
        except SQLAlchemyError as e:
            await self._recover("get_messages", e)
            messages = self.fallback.get_messages(self.session_id)
            if limit is not None and limit > 0:
                return messages[-limit:]
            return messages

    async def get_messages_as_dicts(self, limit: int | None = None) -> list[dict]:
        """
        Get chat messages as dictionaries for API responses.

        Returns:
            List of message dicts with keys: role, content, timestamp
        """
        messages = await self.get_messages(limit)
        return [
            {"role": msg.role, "content": msg.content, "timestamp": msg.timestamp}
            for msg in messages
        ]

    async def get_context(self) -> list | None:
        """Get the stored continuation context (None when never stored)."""
        try:
            return await context_crud.get(self.db, self.session_id)
        except SQLAlchemyError as e:
            await self._recover("get_context", e)
            return self.fallback.get_context(self.session_id)

    async def save_context(self, context: list | None) -> None:
        """Replace the continuation context and bump session activity."""
        try:
            await session_crud.get_or_create(self.db, self.session_id)
            await context_crud.upsert(self.db, self.session_id, context)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self._recover("save_context", e)
            self.fallback.set_context(self.session_id, context)
