"""
Session CRUD operations.

Provides Create, Read, Update, Delete operations for SessionModel
with lifecycle-specific queries (idempotent create, activity bumps,
listing with message counts, bulk deletion with dependents).

Dependencies: sqlalchemy, localchat.boundary.db.models
System role: Session persistence operations
"""

from typing import Sequence

from sqlalchemy import Row, delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from localchat.boundary.db.base import now_ms
from localchat.boundary.db.CRUD.base_crud import BaseCRUD
from localchat.boundary.db.models.context_model import ContextModel
from localchat.boundary.db.models.message_model import MessageModel
from localchat.boundary.db.models.reference_model import ReferenceContextModel
from localchat.boundary.db.models.session_model import SessionModel
from localchat.boundary.db.models.user_fact_model import UserFactModel


class SessionCRUD(BaseCRUD[SessionModel]):
    """
    CRUD operations for SessionModel.

    Extends BaseCRUD with session lifecycle queries.
    """

    def __init__(self) -> None:
        """Initialize SessionCRUD with SessionModel."""
        super().__init__(SessionModel)

    async def get_or_create(
        self,
        session: AsyncSession,
        id: str,
        title: str = "New Chat",
    ) -> tuple[SessionModel, bool]:
        """
        Fetch a session, creating it when missing.

        An existing session keeps its created_at and title; only its
        last_activity is bumped.

        Args:
            session: Async database session
            id: Session id
            title: Title used only when the session is created

        Returns:
            Tuple of (SessionModel, created flag)
        """
        existing = await self.get_by_id(session, id)
        if existing is None:
            now = now_ms()
            created = await self.create(
                session,
                id=id,
                title=title,
                created_at=now,
                last_activity=now,
            )
            return created, True

        existing.last_activity = now_ms()
        await session.flush()
        return existing, False

    async def touch(self, session: AsyncSession, id: str, at: int | None = None) -> None:
        """
        Bump last_activity of a session.

        Args:
            session: Async database session
            id: Session id
            at: Activity time in epoch ms (defaults to now)
        """
        stmt = (
            update(SessionModel)
            .where(SessionModel.id == id)
            .values(last_activity=at if at is not None else now_ms())
            .execution_options(synchronize_session=False)
        )
        await session.execute(stmt)

    async def list_with_message_counts(self, session: AsyncSession) -> Sequence[Row]:
        """
        List every session with its message count, most recent first.

        Args:
            session: Async database session

        Returns:
            Rows with id, title, created_at, last_activity, message_count
        """
        stmt = (
            select(
                SessionModel.id,
                SessionModel.title,
                SessionModel.created_at,
                SessionModel.last_activity,
                func.count(MessageModel.id).label("message_count"),
            )
            .outerjoin(MessageModel, MessageModel.session_id == SessionModel.id)
            .group_by(
                SessionModel.id,
                SessionModel.title,
                SessionModel.created_at,
                SessionModel.last_activity,
            )
            .order_by(SessionModel.last_activity.desc())
        )
        result = await session.execute(stmt)
        return result.all()

    async def get_expired_ids(self, session: AsyncSession, cutoff: int) -> list[str]:
        """
        Find sessions idle since before the cutoff.

        Args:
            session: Async database session
            cutoff: Epoch ms; sessions with last_activity < cutoff are expired

        Returns:
            List of expired session ids
        """
        stmt = select(SessionModel.id).where(SessionModel.last_activity < cutoff)
        result = await session.execute(stmt)
        return list(result.scalars().all())

    async def delete_with_dependents(
        self,
        session: AsyncSession,
        ids: Sequence[str],
        include_references: bool = True,
    ) -> int:
        """
        Delete sessions and their dependent rows.

        Issues explicit deletes child-first so the result does not depend
        on the foreign key pragma. Does not commit.

        Args:
            session: Async database session
            ids: Session ids to delete
            include_references: Also delete reference contexts of these sessions

        Returns:
            Number of session rows deleted
        """
        if not ids:
            return 0
        ids = list(ids)
        await session.execute(delete(MessageModel).where(MessageModel.session_id.in_(ids)))
        await session.execute(delete(ContextModel).where(ContextModel.session_id.in_(ids)))
        await session.execute(delete(UserFactModel).where(UserFactModel.session_id.in_(ids)))
        if include_references:
            await session.execute(
                delete(ReferenceContextModel).where(ReferenceContextModel.session_id.in_(ids))
            )
        result = await session.execute(delete(SessionModel).where(SessionModel.id.in_(ids)))
        return result.rowcount

    async def upsert(
        self,
        session: AsyncSession,
        id: str,
        title: str,
        created_at: int,
        last_activity: int,
    ) -> SessionModel:
        """
        Insert or overwrite a session row with explicit timestamps (import).

        Args:
            session: Async database session
            id: Session id
            title: Session title
            created_at: Creation time (epoch ms)
            last_activity: Last activity (epoch ms)

        Returns:
            The persisted SessionModel
        """
        instance = await session.merge(
            SessionModel(
                id=id,
                title=title,
                created_at=created_at,
                last_activity=last_activity,
            )
        )
        await session.flush()
        return instance


session_crud = SessionCRUD()
