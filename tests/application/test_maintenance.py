"""
Test suite for startup maintenance.

System role: Verification of the contamination purge
"""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from localchat.application.services.maintenance import (
    purge_contaminated_messages,
    run_startup_maintenance,
)
from localchat.boundary.db.connection import get_async_session_factory
from localchat.boundary.db.CRUD import message_crud, session_crud


async def seed(db: AsyncSession) -> None:
    await session_crud.upsert(db, "s1", "Chat", created_at=1, last_activity=1)
    await message_crud.add(db, "s1", "user", "Is the server down? Connection refused here", timestamp=1)
    await message_crud.add(db, "s1", "assistant", "I am having trouble connecting to Ollama right now.", timestamp=2)
    await message_crud.add(db, "s1", "assistant", "The error in your code is a typo.", timestamp=3)
    await message_crud.add(db, "s1", "assistant", "Request timeout, try later", timestamp=4)
    await message_crud.add(db, "s1", "assistant", "Sure, here is the answer.", timestamp=5)
    await db.commit()


class TestPurgeContaminatedMessages:
    """Test suite for purge_contaminated_messages()."""

    @pytest.mark.asyncio
    async def test_removes_only_assistant_messages_matching_narrow_patterns(
        self, test_async_db: AsyncSession
    ) -> None:
        await seed(test_async_db)

        deleted = await purge_contaminated_messages(test_async_db)

        assert deleted == 1
        remaining = [m.content for m in await message_crud.get_for_session(test_async_db, "s1")]
        assert remaining == [
            "Is the server down? Connection refused here",
            "The error in your code is a typo.",
            "Request timeout, try later",
            "Sure, here is the answer.",
        ]

    @pytest.mark.asyncio
    async def test_clean_store_deletes_nothing(self, test_async_db: AsyncSession) -> None:
        assert await purge_contaminated_messages(test_async_db) == 0


class TestRunStartupMaintenance:
    """Test suite for run_startup_maintenance()."""

    @pytest.mark.asyncio
    async def test_runs_in_own_session(self, test_engine) -> None:
        factory = get_async_session_factory(test_engine)
        async with factory() as db:
            await seed(db)

        assert await run_startup_maintenance(factory) == 1
