"""
Reference context service.

Manages user-supplied reference material per session. Rows are scoped by
session id on every access; when a caller supplies a session id the row
must belong to it.

Dependencies: localchat.boundary.db.CRUD
System role: Reference context use case orchestration
"""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from localchat.boundary.db.CRUD.reference_crud import reference_crud
from localchat.boundary.db.CRUD.session_crud import session_crud
from localchat.boundary.db.models.reference_model import ReferenceContextModel
from localchat.core.exceptions import ReferenceNotFoundError, StorageError

logger = logging.getLogger(__name__)


def _reference_to_dict(ref: ReferenceContextModel) -> dict:
    return {
        "id": ref.id,
        "title": ref.title,
        "content": ref.content,
        "timestamp": ref.timestamp,
        "is_active": ref.is_active,
    }


class ReferenceService:
    """Reference context service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize reference service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    async def add_reference(self, session_id: str, title: str, content: str) -> dict:
        """
        Store a new active reference, creating the session if needed.

        Args:
            session_id: Owning session
            title: Short label
            content: Reference text

        Returns:
            dict: id and timestamp of the new reference

        Raises:
            StorageError: If the insert fails
        """
        try:
            await session_crud.get_or_create(self.db, session_id)
            ref = await reference_crud.create(
                self.db,
                session_id=session_id,
                title=title,
                content=content,
                is_active=True,
            )
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"{__name__}:add_reference - Failed for session {session_id}: {e}")
            raise StorageError("Failed to add reference context", operation="add_reference") from e

        logger.info(f"{__name__}:add_reference - Added reference {ref.id} to session {session_id}")
        return {"id": ref.id, "timestamp": ref.timestamp}

    async def list_references(self, session_id: str) -> list[dict]:
        """
        List every reference of a session, newest first.

        Raises:
            StorageError: If the query fails
        """
        try:
            refs = await reference_crud.get_for_session(self.db, session_id)
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"{__name__}:list_references - Failed for session {session_id}: {e}")
            raise StorageError("Failed to load reference contexts", operation="list_references") from e
        return [_reference_to_dict(r) for r in refs]

    async def get_active_references(self, session_id: str) -> list[ReferenceContextModel]:
        """
        Load active references for prompt injection.

        Storage failures yield an empty list.
        """
        try:
            return list(await reference_crud.get_for_session(self.db, session_id, active_only=True))
        except SQLAlchemyError as e:
            logger.error(f"{__name__}:get_active_references - Failed for session {session_id}: {e}")
            await self.db.rollback()
            return []

    async def _get_owned(self, reference_id: int, session_id: str | None) -> ReferenceContextModel:
        ref = await reference_crud.get_scoped(self.db, reference_id, session_id)
        if ref is None:
            raise ReferenceNotFoundError(reference_id, session_id)
        return ref

    async def _recover(self, operation: str, reference_id: int, error: SQLAlchemyError) -> None:
        await self.db.rollback()
        logger.error(f"{__name__}:{operation} - Failed for reference {reference_id}: {error}")

    async def toggle_reference(
        self,
        reference_id: int,
        is_active: bool,
        session_id: str | None = None,
    ) -> None:
        """
        Activate or deactivate a reference.

        Raises:
            ReferenceNotFoundError: If the reference is unknown or not owned by session_id
            StorageError: If storage fails
        """
        try:
            ref = await self._get_owned(reference_id, session_id)
            ref.is_active = is_active
            await self.db.commit()
        except SQLAlchemyError as e:
            await self._recover("toggle_reference", reference_id, e)
            raise StorageError("Failed to toggle reference context", operation="toggle_reference") from e

    async def update_reference(
        self,
        reference_id: int,
        title: str,
        content: str,
        session_id: str | None = None,
    ) -> None:
        """
        Replace title and content of a reference.

        Raises:
            ReferenceNotFoundError: If the reference is unknown or not owned by session_id
            StorageError: If storage fails
        """
        try:
            ref = await self._get_owned(reference_id, session_id)
            ref.title = title
            ref.content = content
            await self.db.commit()
        except SQLAlchemyError as e:
            await self._recover("update_reference", reference_id, e)
            raise StorageError("Failed to update reference context", operation="update_reference") from e

    async def delete_reference(self, reference_id: int, session_id: str | None = None) -> None:
        """
        Delete a reference.

        Raises:
            ReferenceNotFoundError: If the reference is unknown or not owned by session_id
            StorageError: If storage fails
        """
        try:
            ref = await self._get_owned(reference_id, session_id)
            await self.db.delete(ref)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self._recover("delete_reference", reference_id, e)
            raise StorageError("Failed to delete reference context", operation="delete_reference") from e
        logger.info(f"{__name__}:delete_reference - Deleted reference {reference_id}")
