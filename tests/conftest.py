"""Common fixtures."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from pulsechat.domain.entities import (
    ChatMetadata,
    CollectionType,
    CurrentMessageContext,
    EnrichedContext,
    MessageContext,
    ParticipantInfo,
)

# Register table models with SQLModel metadata
from pulsechat.infrastructure.persistence import models as _models  # noqa: F401

BASE_TIME = 1705320000000  # 2024-01-15T12:00:00.000Z


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create in-memory SQLite async engine."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine):
    """Create async session factory."""
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    @asynccontextmanager
    async def get_session() -> AsyncGenerator[AsyncSession, None]:
        async with factory() as session:
            yield session

    return get_session


def make_context(
    text: str = "Hello",
    previous: list[str] | None = None,
    participants: list[tuple[str, str]] | None = None,
    message_id: str = "m1",
    chat_id: str = "chat1",
    is_group: bool = False,
) -> EnrichedContext:
    """Build an EnrichedContext for tests."""
    previous_messages = tuple(
        MessageContext(
            sender_name="Bob",
            created_at=BASE_TIME - (len(previous or []) - i) * 60000,
            text=t,
        )
        for i, t in enumerate(previous or [])
    )
    if participants is None:
        participants = [("u1", "Alice"), ("u2", "Bob")]
    return EnrichedContext(
        current_message=CurrentMessageContext(
            sender_name="Alice",
            created_at=BASE_TIME,
            text=text,
            sender_id="u1",
            message_id=message_id,
        ),
        previous_messages=previous_messages,
        participants=tuple(ParticipantInfo(user_id=u, name=n) for u, n in participants),
        chat_metadata=ChatMetadata(
            chat_id=chat_id,
            collection_type=CollectionType.GROUPS if is_group else CollectionType.CHATS,
            is_group=is_group,
        ),
    )


@pytest.fixture
def context() -> EnrichedContext:
    """Default enriched context."""
    return make_context()


@pytest.fixture
def context_factory():
    """Factory for building EnrichedContext with custom fields."""
    return make_context
