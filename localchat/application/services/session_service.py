"""
Session service orchestrator.

Coordinates session lifecycle operations: create-or-fetch, rename, list,
delete, export, import and the idle-session sweep.

Dependencies: sqlalchemy, localchat.boundary.db.CRUD
System role: Session use case orchestration
"""

import logging
from datetime import datetime, timezone
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from localchat.application.lifecycle import sweep_expired_sessions
from localchat.boundary.db.CRUD.context_crud import context_crud
from localchat.boundary.db.CRUD.message_crud import message_crud
from localchat.boundary.db.CRUD.session_crud import session_crud
from localchat.boundary.db.CRUD.user_fact_crud import user_fact_crud
from localchat.boundary.db.models.message_model import MessageRole
from localchat.core.clock import now_ms
from localchat.core.exceptions import SessionNotFoundError, StorageError, ValidationError
from localchat.core.fallback_store import InMemorySessionStore

logger = logging.getLogger(__name__)

EXPORT_VERSION = "1.0"
DEFAULT_TITLE = "New Chat"

# Older exports label assistant turns "ai"
IMPORTED_ROLE_ALIASES = {"ai": MessageRole.ASSISTANT.value}


def _message_to_dict(message) -> dict[str, Any]:
    return {
        "id": message.id,
        "role": message.role,
        "content": message.content,
        "timestamp": message.timestamp,
    }


def _imported_role(role: Any) -> str:
    role = IMPORTED_ROLE_ALIASES.get(role, role)
    if role not in (MessageRole.USER.value, MessageRole.ASSISTANT.value):
        raise ValueError(f"invalid message role: {role!r}")
    return role


class SessionService:
    """Session service orchestrator."""

    def __init__(
        self,
        db: AsyncSession,
        ttl_ms: int | None = None,
        fallback: InMemorySessionStore | None = None,
    ) -> None:
        """
        Initialize session service with async database session.

        Args:
            db: Async SQLAlchemy session
            ttl_ms: Idle TTL used by sweep_expired_sessions (None disables the sweep)
            fallback: In-memory store evicted alongside storage and served when it fails
        """
        self.db = db
        self.ttl_ms = ttl_ms
        self.fallback = fallback

    async def get_or_create_session(self, session_id: str, title: str = DEFAULT_TITLE) -> dict:
        """
        Fetch a session with its messages and context, creating it when missing.

        Fetching bumps last_activity; created_at and title never change here.
        When storage fails the session is served from the in-memory store.

        Args:
            session_id: Session id
            title: Title used only when the session is created

        Returns:
            dict: id, title, created_at, last_activity, messages, context

        Raises:
            StorageError: If storage fails and no in-memory store is configured
        """
        try:
            session, created = await session_crud.get_or_create(self.db, session_id, title=title)
            messages = [] if created else await message_crud.get_for_session(self.db, session_id)
            context = None if created else await context_crud.get(self.db, session_id)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"{__name__}:get_or_create_session - Storage failed for {session_id}: {e}")
            if self.fallback is None:
                raise StorageError("Failed to load session", operation="get_or_create") from e
            return self._from_fallback(session_id, title)

        if created:
            logger.info(f"{__name__}:get_or_create_session - Created session {session_id}")

        return {
            "id": session.id,
            "title": session.title or DEFAULT_TITLE,
            "created_at": session.created_at,
            "last_activity": session.last_activity,
            "messages": [_message_to_dict(m) for m in messages],
            "context": context,
        }

    def _from_fallback(self, session_id: str, title: str) -> dict:
        session = self.fallback.get_or_create(session_id, title=title)
        session.last_activity = now_ms()
        return {
            "id": session.id,
            "title": session.title,
            "created_at": session.created_at,
            "last_activity": session.last_activity,
            "messages": [
                {"id": None, "role": m.role, "content": m.content, "timestamp": m.timestamp}
                for m in session.messages
            ],
            "context": session.context,
        }

    async def rename_session(self, session_id: str, title: str) -> None:
        """
        Change the title of a session.

        Raises:
            SessionNotFoundError: If the session does not exist
            StorageError: If the update fails
        """
        try:
            updated = await session_crud.update_by_id(self.db, session_id, title=title)
            if updated is None:
                await self.db.rollback()
                raise SessionNotFoundError(session_id)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"{__name__}:rename_session - Failed for {session_id}: {e}")
            raise StorageError("Failed to rename session", operation="rename") from e

    async def list_sessions(self) -> list[dict]:
        """
        List every session with its message count, most recent activity first.

        Returns:
            list[dict]: id, title, created_at, last_activity, message_count

        Raises:
            StorageError: If the query fails
        """
        try:
            rows = await session_crud.list_with_message_counts(self.db)
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"{__name__}:list_sessions - Query failed: {e}")
            raise StorageError("Failed to list sessions", operation="list") from e
        return [
            {
                "id": row.id,
                "title": row.title,
                "created_at": row.created_at,
                "last_activity": row.last_activity,
                "message_count": row.message_count,
            }
            for row in rows
        ]

    async def delete_session(self, session_id: str) -> None:
        """
        Delete a session with its messages, context, facts and references.

        Raises:
            SessionNotFoundError: If the session does not exist
            StorageError: If the delete fails
        """
        try:
            deleted = await session_crud.delete_with_dependents(self.db, [session_id])
            if not deleted:
                await self.db.rollback()
                raise SessionNotFoundError(session_id)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"{__name__}:delete_session - Failed for {session_id}: {e}")
            raise StorageError("Failed to delete session", operation="delete") from e

        logger.info(f"{__name__}:delete_session - Deleted session {session_id}")

    async def export_sessions(self) -> dict:
        """
        Serialize every session to the export document.

        Returns:
            dict: {exportDate, version, sessions: [...]}
        """
        try:
            sessions = await session_crud.get_all(self.db)
            exported = []
            for session in sessions:
                messages = await message_crud.get_for_session(self.db, session.id)
                exported.append(
                    {
                        "id": session.id,
                        "title": session.title,
                        "created_at": session.created_at,
                        "last_activity": session.last_activity,
                        "messages": [_message_to_dict(m) for m in messages],
                        "context": await context_crud.get(self.db, session.id),
                        "userInfo": await user_fact_crud.get_for_session(self.db, session.id),
                    }
                )
        except SQLAlchemyError as e:
            logger.error(f"{__name__}:export_sessions - Export failed: {e}")
            raise StorageError("Failed to export sessions", operation="export") from e

        logger.info(f"{__name__}:export_sessions - Exported {len(exported)} sessions")
        return {
            "exportDate": datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "version": EXPORT_VERSION,
            "sessions": exported,
        }

    async def _import_one(self, data: dict) -> None:
        session_id = data.get("id")
        if not isinstance(session_id, str) or not session_id:
            raise ValueError("session id missing")

        now = now_ms()
        created_at = data.get("created_at") or now
        await session_crud.upsert(
            self.db,
            id=session_id,
            title=data.get("title") or DEFAULT_TITLE,
            created_at=created_at,
            last_activity=data.get("last_activity") or created_at,
        )

        await message_crud.delete_for_session(self.db, session_id)
        for message in data.get("messages") or []:
            message_id = message.get("id")
            if message_id is not None and await message_crud.exists(self.db, message_id):
                message_id = None
            await message_crud.add(
                self.db,
                session_id=session_id,
                role=_imported_role(message.get("role")),
                content=message["content"],
                timestamp=message.get("timestamp") or now,
                id=message_id,
            )

        if "context" in data:
            context = data["context"]
            if context is None or isinstance(context, list):
                await context_crud.upsert(self.db, session_id, context)
            else:
                logger.warning(
                    f"{__name__}:_import_one - Ignored non-list context for session {session_id}"
                )

        user_info = data.get("userInfo")
        if isinstance(user_info, dict):
            await user_fact_crud.replace_for_session(self.db, session_id, user_info)

    async def import_sessions(self, document: dict) -> int:
        """
        Restore sessions from an export document.

        One outer transaction, one savepoint per session. A session that
        fails is rolled back to its savepoint, logged and skipped.

        Args:
            document: Export document

        Returns:
            int: Number of sessions imported

        Raises:
            ValidationError: If `sessions` is missing or not a list
            StorageError: If the outer commit fails
        """
        sessions = document.get("sessions") if isinstance(document, dict) else None
        if not isinstance(sessions, list):
            raise ValidationError("Invalid import data format", field="sessions")

        imported = 0
        for data in sessions:
            label = data.get("id") if isinstance(data, dict) else None
            try:
                async with self.db.begin_nested():
                    if not isinstance(data, dict):
                        raise ValueError("session entry is not an object")
                    await self._import_one(data)
                imported += 1
            except (SQLAlchemyError, ValueError, KeyError, TypeError, AttributeError) as e:
                logger.warning(
                    f"{__name__}:import_sessions - Skipped session {label}: {type(e).__name__}: {e}"
                )

        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"{__name__}:import_sessions - Commit failed: {e}")
            raise StorageError("Failed to import sessions", operation="import") from e

        logger.info(f"{__name__}:import_sessions - Imported {imported}/{len(sessions)} sessions")
        return imported

    async def sweep_expired_sessions(self) -> int:
        """Delete idle sessions; see module-level sweep_expired_sessions."""
        if self.ttl_ms is None:
            return 0
        return await sweep_expired_sessions(self.db, self.ttl_ms, self.fallback)
