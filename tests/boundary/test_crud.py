"""
Test suite for the SQLite CRUD layer.

Runs against an in-memory aiosqlite database.

System role: Verification of session, message, context, fact and reference persistence
"""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from localchat.boundary.db.CRUD import (
    context_crud,
    message_crud,
    reference_crud,
    session_crud,
    user_fact_crud,
)
from localchat.boundary.db.models import SessionModel


class TestSessionCRUD:
    """Test suite for SessionCRUD."""

    def test_init_should_set_model_to_session_model(self) -> None:
        assert session_crud.model == SessionModel

    @pytest.mark.asyncio
    async def test_get_or_create_is_idempotent(self, test_async_db: AsyncSession) -> None:
        first, created = await session_crud.get_or_create(test_async_db, "s1", title="Trip")
        original_created_at = first.created_at

        second, created_again = await session_crud.get_or_create(test_async_db, "s1", title="Other")

        assert created is True
        assert created_again is False
        assert second.title == "Trip"
        assert second.created_at == original_created_at
        assert len(await session_crud.get_all(test_async_db)) == 1

    @pytest.mark.asyncio
    async def test_list_with_message_counts_sorted_by_activity(self, test_async_db: AsyncSession) -> None:
        await session_crud.upsert(test_async_db, "old", "Old", created_at=1, last_activity=100)
        await session_crud.upsert(test_async_db, "new", "New", created_at=1, last_activity=200)
        await message_crud.add(test_async_db, "old", "user", "a")
        await message_crud.add(test_async_db, "old", "assistant", "b")

        rows = await session_crud.list_with_message_counts(test_async_db)

        assert [(r.id, r.message_count) for r in rows] == [("new", 0), ("old", 2)]

    @pytest.mark.asyncio
    async def test_get_expired_ids_uses_strict_cutoff(self, test_async_db: AsyncSession) -> None:
        await session_crud.upsert(test_async_db, "a", "A", created_at=1, last_activity=100)
        await session_crud.upsert(test_async_db, "b", "B", created_at=1, last_activity=500)

        assert await session_crud.get_expired_ids(test_async_db, 500) == ["a"]

    @pytest.mark.asyncio
    async def test_delete_with_dependents_can_keep_references(self, test_async_db: AsyncSession) -> None:
        await session_crud.get_or_create(test_async_db, "s1")
        await message_crud.add(test_async_db, "s1", "user", "hi")
        await context_crud.upsert(test_async_db, "s1", [1])
        await user_fact_crud.upsert(test_async_db, "s1", "name", "Alex")
        await reference_crud.create(test_async_db, session_id="s1", title="T", content="C")

        deleted = await session_crud.delete_with_dependents(test_async_db, ["s1"], include_references=False)

        assert deleted == 1
        assert await message_crud.get_for_session(test_async_db, "s1") == []
        assert await context_crud.get(test_async_db, "s1") is None
        assert await user_fact_crud.get_for_session(test_async_db, "s1") == {}
        assert len(await reference_crud.get_for_session(test_async_db, "s1")) == 1


class TestMessageCRUD:
    """Test suite for MessageCRUD."""

    @pytest.mark.asyncio
    async def test_messages_ordered_by_timestamp_then_id(self, test_async_db: AsyncSession) -> None:
        await session_crud.get_or_create(test_async_db, "s1")
        await message_crud.add(test_async_db, "s1", "user", "second", timestamp=20)
        await message_crud.add(test_async_db, "s1", "user", "first", timestamp=10)
        await message_crud.add(test_async_db, "s1", "assistant", "third", timestamp=20)

        messages = await message_crud.get_for_session(test_async_db, "s1")

        assert [m.content for m in messages] == ["first", "second", "third"]

    @pytest.mark.asyncio
    async def test_get_recent_returns_tail_in_chronological_order(self, test_async_db: AsyncSession) -> None:
        await session_crud.get_or_create(test_async_db, "s1")
        for i in range(5):
            await message_crud.add(test_async_db, "s1", "user", f"m{i}", timestamp=i)

        recent = await message_crud.get_recent(test_async_db, "s1", limit=2)

        assert [m.content for m in recent] == ["m3", "m4"]

    @pytest.mark.asyncio
    async def test_explicit_id_is_preserved(self, test_async_db: AsyncSession) -> None:
        await session_crud.get_or_create(test_async_db, "s1")

        message = await message_crud.add(test_async_db, "s1", "user", "hi", timestamp=5, id=42)

        assert message.id == 42


class TestContextAndFacts:
    """Test suite for ContextCRUD and UserFactCRUD."""

    @pytest.mark.asyncio
    async def test_context_upsert_replaces_blob(self, test_async_db: AsyncSession) -> None:
        await session_crud.get_or_create(test_async_db, "s1")
        await context_crud.upsert(test_async_db, "s1", [1, 2])
        await context_crud.upsert(test_async_db, "s1", [3])

        assert await context_crud.get(test_async_db, "s1") == [3]

    @pytest.mark.asyncio
    async def test_fact_upsert_latest_write_wins(self, test_async_db: AsyncSession) -> None:
        await session_crud.get_or_create(test_async_db, "s1")
        await user_fact_crud.upsert(test_async_db, "s1", "name", "Alex", timestamp=1)
        await user_fact_crud.upsert(test_async_db, "s1", "name", "Sam", timestamp=2)

        assert await user_fact_crud.get_for_session(test_async_db, "s1") == {"name": "Sam"}

    @pytest.mark.asyncio
    async def test_replace_for_session_drops_previous_facts(self, test_async_db: AsyncSession) -> None:
        await session_crud.get_or_create(test_async_db, "s1")
        await user_fact_crud.upsert(test_async_db, "s1", "name", "Alex")

        await user_fact_crud.replace_for_session(test_async_db, "s1", {"city": "Oslo"})

        assert await user_fact_crud.get_for_session(test_async_db, "s1") == {"city": "Oslo"}


class TestReferenceCRUD:
    """Test suite for ReferenceCRUD."""

    @pytest.mark.asyncio
    async def test_get_for_session_active_only(self, test_async_db: AsyncSession) -> None:
        await reference_crud.create(test_async_db, session_id="s1", title="A", content="a", timestamp=1)
        await reference_crud.create(
            test_async_db, session_id="s1", title="B", content="b", timestamp=2, is_active=False
        )
        await reference_crud.create(test_async_db, session_id="s2", title="C", content="c", timestamp=3)

        all_refs = await reference_crud.get_for_session(test_async_db, "s1")
        active = await reference_crud.get_for_session(test_async_db, "s1", active_only=True)

        assert [r.title for r in all_refs] == ["B", "A"]
        assert [r.title for r in active] == ["A"]

    @pytest.mark.asyncio
    async def test_get_scoped_rejects_other_session(self, test_async_db: AsyncSession) -> None:
        ref = await reference_crud.create(test_async_db, session_id="s1", title="A", content="a")

        assert await reference_crud.get_scoped(test_async_db, ref.id, "s2") is None
        assert (await reference_crud.get_scoped(test_async_db, ref.id, "s1")).id == ref.id
        assert (await reference_crud.get_scoped(test_async_db, ref.id)).id == ref.id
