"""Tests for SQLiteCalendarRepository."""

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine

from pulsechat.domain.entities import CalendarEvent
from pulsechat.infrastructure.persistence import DatabaseError, SQLiteCalendarRepository
from pulsechat.infrastructure.persistence.models import CalendarEntryModel


@pytest.fixture
def repository(session_factory) -> SQLiteCalendarRepository:
    """Create test repository."""
    return SQLiteCalendarRepository(session_factory)


def create_event(
    index: int = 0,
    participants: list[str] | None = None,
    chat_id: str | None = "chat1",
) -> CalendarEvent:
    return CalendarEvent(
        id=f"event-m1-{index}",
        title=f"Event {index}",
        date=1705363200000,
        extracted_from="m1",
        description="Planning",
        time="15:00",
        participants=participants,
        chat_id=chat_id,
    )


class TestChatCalendar:
    """Chat calendar tests."""

    async def test_not_created(self, repository: SQLiteCalendarRepository) -> None:
        assert await repository.find_by_chat("chat1") is None

    async def test_append_batch(self, repository: SQLiteCalendarRepository) -> None:
        events = [create_event(0, ["Alice", "Bob"]), create_event(1, ["Alice"])]

        await repository.append_to_chat("chat1", events)

        found = await repository.find_by_chat("chat1")
        assert found is not None
        assert found.chat_id == "chat1"
        assert found.events == events

    async def test_preserves_missing_optional_fields(
        self, repository: SQLiteCalendarRepository
    ) -> None:
        event = CalendarEvent(
            id="event-m2-0", title="Launch", date=1, extracted_from="m2"
        )

        await repository.append_to_chat("chat1", [event])

        found = await repository.find_by_chat("chat1")
        assert found is not None
        assert found.events == [event]

    async def test_non_ascii_participants(
        self, repository: SQLiteCalendarRepository
    ) -> None:
        event = create_event(participants=["山田", "Zoë"])

        await repository.append_to_chat("chat1", [event])

        found = await repository.find_by_chat("chat1")
        assert found is not None
        assert found.events[0].participants == ["山田", "Zoë"]

    async def test_same_event_twice_is_kept_twice(
        self, repository: SQLiteCalendarRepository
    ) -> None:
        event = create_event()

        await repository.append_to_chat("chat1", [event])
        await repository.append_to_chat("chat1", [event])

        found = await repository.find_by_chat("chat1")
        assert found is not None
        assert found.events == [event, event]


class TestUserCalendar:
    """User calendar tests."""

    async def test_append_and_find(self, repository: SQLiteCalendarRepository) -> None:
        event = create_event(participants=["Alice"])

        await repository.append_to_user("u1", [event])

        found = await repository.find_by_user("u1")
        assert found is not None
        assert found.user_id == "u1"
        assert found.events == [event]

    async def test_not_created(self, repository: SQLiteCalendarRepository) -> None:
        assert await repository.find_by_user("u1") is None


class TestAppendFailure:
    """Write failure tests."""

    async def test_raises_database_error(
        self, repository: SQLiteCalendarRepository, engine: AsyncEngine
    ) -> None:
        async with engine.begin() as conn:
            await conn.run_sync(CalendarEntryModel.__table__.drop)  # type: ignore[attr-defined]

        with pytest.raises(DatabaseError):
            await repository.append_to_user("u1", [create_event()])
