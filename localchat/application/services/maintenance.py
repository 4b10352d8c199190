"""
Startup maintenance tasks.

Dependencies: sqlalchemy, localchat.boundary.db.CRUD, localchat.core.contamination_filter
System role: One-shot storage hygiene at process start
"""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from localchat.boundary.db.CRUD.message_crud import message_crud
from localchat.boundary.db.models.message_model import MessageRole
from localchat.core.contamination_filter import PURGE_ERROR_PATTERNS, is_error_text

logger = logging.getLogger(__name__)


async def purge_contaminated_messages(db: AsyncSession) -> int:
    """
    Delete stored assistant messages that are error-recovery text.

    Uses the narrow pattern list; irreversible. Failures are logged and
    never raised.

    Args:
        db: Async database session

    Returns:
        Number of messages deleted
    """
    logger.info(f"{__name__}:purge_contaminated_messages - Cleaning up contaminated conversation history")
    try:
        assistant_messages = await message_crud.get_by_role(db, MessageRole.ASSISTANT.value)
        contaminated = [
            msg.id for msg in assistant_messages if is_error_text(msg.content, PURGE_ERROR_PATTERNS)
        ]
        deleted = await message_crud.delete_ids(db, contaminated)
        await db.commit()
    except SQLAlchemyError as e:
        logger.error(f"{__name__}:purge_contaminated_messages - Cleanup failed: {e}")
        await db.rollback()
        return 0

    logger.info(f"{__name__}:purge_contaminated_messages - Removed {deleted} contaminated messages")
    return deleted


async def run_startup_maintenance(session_factory: async_sessionmaker[AsyncSession]) -> int:
    """Run the contamination purge in its own session."""
    async with session_factory() as db:
        return await purge_contaminated_messages(db)
