"""Tests for SQLiteMessageRepository."""

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine

from pulsechat.domain.entities import ChatMessage, CollectionType
from pulsechat.infrastructure.persistence import DatabaseError, SQLiteMessageRepository
from pulsechat.infrastructure.persistence.models import MessageModel

BASE_TIME = 1705320000000


@pytest.fixture
def repository(session_factory) -> SQLiteMessageRepository:
    """Create test repository."""
    return SQLiteMessageRepository(session_factory)


def create_test_message(
    id: str,
    created_at: int,
    chat_id: str = "chat1",
    text: str = "hello",
    collection_type: CollectionType = CollectionType.CHATS,
) -> ChatMessage:
    """Create a test ChatMessage entity."""
    return ChatMessage(
        id=id,
        chat_id=chat_id,
        collection_type=collection_type,
        sender_id="u1",
        text=text,
        created_at=created_at,
    )


class TestSave:
    """save method tests."""

    async def test_save_updates_existing(
        self, repository: SQLiteMessageRepository
    ) -> None:
        await repository.save(create_test_message("m1", BASE_TIME, text="draft"))
        await repository.save(create_test_message("m1", BASE_TIME, text="final"))

        messages = await repository.find_before(
            "chat1", CollectionType.CHATS, before=BASE_TIME + 1
        )

        assert [m.text for m in messages] == ["final"]

    async def test_chat_and_group_with_same_ids_are_separate(
        self, repository: SQLiteMessageRepository
    ) -> None:
        await repository.save(create_test_message("m1", BASE_TIME, text="in chat"))
        await repository.save(
            create_test_message(
                "m1",
                BASE_TIME,
                text="in group",
                collection_type=CollectionType.GROUPS,
            )
        )

        chat_messages = await repository.find_before(
            "chat1", CollectionType.CHATS, before=BASE_TIME + 1
        )
        group_messages = await repository.find_before(
            "chat1", CollectionType.GROUPS, before=BASE_TIME + 1
        )

        assert [m.text for m in chat_messages] == ["in chat"]
        assert [m.text for m in group_messages] == ["in group"]

    async def test_write_failure_raises_database_error(
        self, repository: SQLiteMessageRepository, engine: AsyncEngine
    ) -> None:
        async with engine.begin() as conn:
            await conn.run_sync(MessageModel.__table__.drop)  # type: ignore[attr-defined]

        with pytest.raises(DatabaseError):
            await repository.save(create_test_message("m1", BASE_TIME))


class TestFindBefore:
    """find_before method tests."""

    async def test_newest_first_and_limited(
        self, repository: SQLiteMessageRepository
    ) -> None:
        for i in range(5):
            await repository.save(
                create_test_message(f"m{i}", BASE_TIME + i * 1000, text=f"msg {i}")
            )

        messages = await repository.find_before(
            "chat1", CollectionType.CHATS, before=BASE_TIME + 4000, limit=3
        )

        assert [m.id for m in messages] == ["m3", "m2", "m1"]

    async def test_strictly_before(self, repository: SQLiteMessageRepository) -> None:
        await repository.save(create_test_message("m1", BASE_TIME))

        messages = await repository.find_before(
            "chat1", CollectionType.CHATS, before=BASE_TIME
        )

        assert messages == []

    async def test_filters_by_chat_and_collection(
        self, repository: SQLiteMessageRepository
    ) -> None:
        await repository.save(create_test_message("m1", BASE_TIME, chat_id="chat1"))
        await repository.save(create_test_message("m2", BASE_TIME, chat_id="chat2"))
        await repository.save(
            create_test_message(
                "m3", BASE_TIME, chat_id="chat1", collection_type=CollectionType.GROUPS
            )
        )

        messages = await repository.find_before(
            "chat1", CollectionType.CHATS, before=BASE_TIME + 1
        )

        assert [m.id for m in messages] == ["m1"]


class TestFindRecent:
    """find_recent method tests."""

    async def test_latest_messages_oldest_first(
        self, repository: SQLiteMessageRepository
    ) -> None:
        for i in range(5):
            await repository.save(create_test_message(f"m{i}", BASE_TIME + i * 1000))

        messages = await repository.find_recent("chat1", CollectionType.CHATS, limit=3)

        assert [m.id for m in messages] == ["m2", "m3", "m4"]

    async def test_without_limit_returns_all(
        self, repository: SQLiteMessageRepository
    ) -> None:
        await repository.save(create_test_message("m2", BASE_TIME + 1000))
        await repository.save(create_test_message("m1", BASE_TIME))
        await repository.save(
            create_test_message(
                "m3", BASE_TIME, collection_type=CollectionType.GROUPS
            )
        )

        messages = await repository.find_recent("chat1", CollectionType.CHATS)

        assert [m.id for m in messages] == ["m1", "m2"]
