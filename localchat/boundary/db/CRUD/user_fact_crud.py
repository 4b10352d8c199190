"""
User fact CRUD operations.

Upsert and read key/value facts per session; latest write wins.

Dependencies: sqlalchemy, localchat.boundary.db.models
System role: Remembered user detail persistence operations
"""

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from localchat.boundary.db.base import now_ms
from localchat.boundary.db.models.user_fact_model import UserFactModel


class UserFactCRUD:
    """CRUD operations for UserFactModel (keyed by session id and key)."""

    async def upsert(
        self,
        session: AsyncSession,
        session_id: str,
        key: str,
        value: str,
        timestamp: int | None = None,
    ) -> None:
        """
        Insert or overwrite a single fact.

        Args:
            session: Async database session
            session_id: Session id
            key: Fact name
            value: Fact value
            timestamp: Write time in epoch ms (defaults to now)
        """
        await session.merge(
            UserFactModel(
                session_id=session_id,
                key=key,
                value=value,
                timestamp=timestamp if timestamp is not None else now_ms(),
            )
        )
        await session.flush()

    async def get_for_session(self, session: AsyncSession, session_id: str) -> dict[str, str]:
        """
        Retrieve all facts of a session.

        Args:
            session: Async database session
            session_id: Session id

        Returns:
            Mapping of key to value, in write order
        """
        stmt = (
            select(UserFactModel.key, UserFactModel.value)
            .where(UserFactModel.session_id == session_id)
            .order_by(UserFactModel.timestamp, UserFactModel.key)
        )
        result = await session.execute(stmt)
        return {key: value for key, value in result.all()}

    async def replace_for_session(
        self,
        session: AsyncSession,
        session_id: str,
        facts: dict[str, str],
    ) -> None:
        """
        Replace every fact of a session with the given mapping (import).

        Args:
            session: Async database session
            session_id: Session id
            facts: New facts
        """
        await session.execute(delete(UserFactModel).where(UserFactModel.session_id == session_id))
        now = now_ms()
        for key, value in facts.items():
            session.add(
                UserFactModel(session_id=session_id, key=key, value=str(value), timestamp=now)
            )
        await session.flush()


user_fact_crud = UserFactCRUD()
