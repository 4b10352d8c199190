"""
Context CRUD operations.

Read and upsert the backend continuation token of a session.

Dependencies: sqlalchemy, localchat.boundary.db.models
System role: Rolling model state persistence operations
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from localchat.boundary.db.models.context_model import ContextModel


class ContextCRUD:
    """CRUD operations for ContextModel (keyed by session id)."""

    async def get(self, session: AsyncSession, session_id: str) -> list | None:
        """
        Retrieve the stored context blob of a session.

        Args:
            session: Async database session
            session_id: Session id

        Returns:
            Deserialized context, or None when never stored
        """
        stmt = select(ContextModel.context).where(ContextModel.session_id == session_id)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def upsert(self, session: AsyncSession, session_id: str, context: list | None) -> None:
        """
        Insert or replace the context blob of a session.

        Args:
            session: Async database session
            session_id: Session id
            context: Continuation token returned by the backend
        """
        await session.merge(ContextModel(session_id=session_id, context=context))
        await session.flush()


context_crud = ContextCRUD()
