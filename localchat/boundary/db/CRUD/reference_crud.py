"""
Reference context CRUD operations.

Every query is scoped by session id because the table has no foreign key
to sessions.

Dependencies: sqlalchemy, localchat.boundary.db.models
System role: Reference material persistence operations
"""

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from localchat.boundary.db.CRUD.base_crud import BaseCRUD
from localchat.boundary.db.models.reference_model import ReferenceContextModel


class ReferenceCRUD(BaseCRUD[ReferenceContextModel]):
    """CRUD operations for ReferenceContextModel."""

    def __init__(self) -> None:
        """Initialize ReferenceCRUD with ReferenceContextModel."""
        super().__init__(ReferenceContextModel)

    async def get_for_session(
        self,
        session: AsyncSession,
        session_id: str,
        active_only: bool = False,
    ) -> Sequence[ReferenceContextModel]:
        """
        Retrieve references of a session, newest first.

        Args:
            session: Async database session
            session_id: Session id
            active_only: Only return references with is_active set

        Returns:
            Sequence of ReferenceContextModel
        """
        stmt = select(ReferenceContextModel).where(ReferenceContextModel.session_id == session_id)
        if active_only:
            stmt = stmt.where(ReferenceContextModel.is_active.is_(True))
        stmt = stmt.order_by(ReferenceContextModel.timestamp.desc(), ReferenceContextModel.id.desc())
        result = await session.execute(stmt)
        return result.scalars().all()

    async def get_scoped(
        self,
        session: AsyncSession,
        id: int,
        session_id: str | None = None,
    ) -> ReferenceContextModel | None:
        """
        Retrieve a reference by id, optionally requiring it to belong to a session.

        Args:
            session: Async database session
            id: Reference id
            session_id: When given, the row must carry this session id

        Returns:
            ReferenceContextModel if found (and owned), None otherwise
        """
        stmt = select(ReferenceContextModel).where(ReferenceContextModel.id == id)
        if session_id:
            stmt = stmt.where(ReferenceContextModel.session_id == session_id)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()


reference_crud = ReferenceCRUD()
