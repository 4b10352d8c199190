"""
Message CRUD operations.

Append and read chat turns for a session in chronological order.

Dependencies: sqlalchemy, localchat.boundary.db.models
System role: Conversation history persistence operations
"""

from typing import Sequence

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from localchat.boundary.db.base import now_ms
from localchat.boundary.db.CRUD.base_crud import BaseCRUD
from localchat.boundary.db.models.message_model import MessageModel


class MessageCRUD(BaseCRUD[MessageModel]):
    """CRUD operations for MessageModel."""

    def __init__(self) -> None:
        """Initialize MessageCRUD with MessageModel."""
        super().__init__(MessageModel)

    async def add(
        self,
        session: AsyncSession,
        session_id: str,
        role: str,
        content: str,
        timestamp: int | None = None,
        id: int | None = None,
    ) -> MessageModel:
        """
        Append a message to a session.

        Args:
            session: Async database session
            session_id: Owning session id
            role: "user" or "assistant"
            content: Message text
            timestamp: Epoch ms (defaults to now)
            id: Explicit primary key (import only)

        Returns:
            Created MessageModel
        """
        fields = {
            "session_id": session_id,
            "role": role,
            "content": content,
            "timestamp": timestamp if timestamp is not None else now_ms(),
        }
        if id is not None:
            fields["id"] = id
        return await self.create(session, **fields)

    async def get_for_session(
        self,
        session: AsyncSession,
        session_id: str,
    ) -> Sequence[MessageModel]:
        """
        Retrieve every message of a session in insertion order.

        Args:
            session: Async database session
            session_id: Session id

        Returns:
            Messages ordered by (timestamp, id)
        """
        stmt = (
            select(MessageModel)
            .where(MessageModel.session_id == session_id)
            .order_by(MessageModel.timestamp, MessageModel.id)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def get_recent(
        self,
        session: AsyncSession,
        session_id: str,
        limit: int,
    ) -> list[MessageModel]:
        """
        Retrieve the last `limit` messages of a session, oldest first.

        Args:
            session: Async database session
            session_id: Session id
            limit: Maximum number of messages

        Returns:
            Up to `limit` messages in chronological order
        """
        stmt = (
            select(MessageModel)
            .where(MessageModel.session_id == session_id)
            .order_by(MessageModel.timestamp.desc(), MessageModel.id.desc())
            .limit(limit)
        )
        result = await session.execute(stmt)
        return list(reversed(result.scalars().all()))

    async def get_by_role(self, session: AsyncSession, role: str) -> Sequence[MessageModel]:
        """Retrieve all messages with the given role across sessions."""
        stmt = select(MessageModel).where(MessageModel.role == role).order_by(MessageModel.id)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def delete_for_session(self, session: AsyncSession, session_id: str) -> int:
        """
        Delete every message of a session.

        Returns:
            Number of rows deleted
        """
        result = await session.execute(
            delete(MessageModel).where(MessageModel.session_id == session_id)
        )
        return result.rowcount

    async def delete_ids(self, session: AsyncSession, ids: Sequence[int]) -> int:
        """
        Delete messages by primary key.

        Returns:
            Number of rows deleted
        """
        if not ids:
            return 0
        result = await session.execute(delete(MessageModel).where(MessageModel.id.in_(list(ids))))
        return result.rowcount


message_crud = MessageCRUD()
