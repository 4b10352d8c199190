"""
Idle-session expiry.

Runs after every message insert and from SessionService.

Dependencies: sqlalchemy, localchat.boundary.db.CRUD, localchat.core.fallback_store
System role: Session TTL enforcement
"""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from localchat.core.clock import now_ms
from localchat.boundary.db.CRUD.session_crud import session_crud
from localchat.core.fallback_store import InMemorySessionStore

logger = logging.getLogger(__name__)


async def sweep_expired_sessions(
    db: AsyncSession,
    ttl_ms: int,
    fallback: InMemorySessionStore | None = None,
) -> int:
    """
    Delete sessions idle for longer than the TTL, with their messages,
    contexts and facts, in one transaction.

    Reference contexts are left in place. Failures are logged and never
    raised.

    Args:
        db: Async database session (no pending changes expected)
        ttl_ms: Maximum idle time in milliseconds
        fallback: In-memory store to evict from as well

    Returns:
        Number of sessions deleted from storage
    """
    cutoff = now_ms() - ttl_ms
    if fallback is not None:
        evicted = fallback.sweep(cutoff)
        if evicted:
            logger.info(f"{__name__}:sweep_expired_sessions - Evicted {evicted} in-memory sessions")

    try:
        expired = await session_crud.get_expired_ids(db, cutoff)
        if not expired:
            return 0
        deleted = await session_crud.delete_with_dependents(db, expired, include_references=False)
        await db.commit()
    except SQLAlchemyError as e:
        logger.error(f"{__name__}:sweep_expired_sessions - Sweep failed: {type(e).__name__}: {e}")
        await db.rollback()
        return 0

    logger.info(f"{__name__}:sweep_expired_sessions - Deleted {deleted} expired sessions")
    return deleted
