"""Tests for ContextFetcher."""

from unittest.mock import AsyncMock, patch

import pytest

from pulsechat.application.services import ContextFetcher
from pulsechat.domain.entities import (
    Chat,
    ChatMessage,
    CollectionType,
    MessageContext,
    MessageData,
    ParticipantInfo,
    ProcessMessageParams,
    User,
)
from pulsechat.domain.exceptions import ChatNotFoundError

BASE_TIME = 1705320000000

USERS = {
    "u1": User(id="u1", display_name="Alice"),
    "u2": User(id="u2", email="bob@example.com"),
    "u3": User(id="u3"),
}


@pytest.fixture
def user_repository() -> AsyncMock:
    repository = AsyncMock()
    repository.find_by_id.side_effect = lambda user_id: USERS.get(user_id)
    return repository


@pytest.fixture
def chat_repository() -> AsyncMock:
    repository = AsyncMock()
    repository.find_by_id.return_value = Chat(
        id="g1",
        collection_type=CollectionType.GROUPS,
        member_ids=["u1", "u2", "u3", "ghost"],
    )
    return repository


@pytest.fixture
def message_repository() -> AsyncMock:
    repository = AsyncMock()
    repository.find_before.return_value = []
    return repository


@pytest.fixture
def fetcher(
    user_repository: AsyncMock,
    chat_repository: AsyncMock,
    message_repository: AsyncMock,
) -> ContextFetcher:
    return ContextFetcher(user_repository, chat_repository, message_repository)


def create_params(
    text: str | None = "Let's meet tomorrow",
    created_at: int | None = BASE_TIME,
    sender_id: str = "u1",
) -> ProcessMessageParams:
    return ProcessMessageParams(
        message_data=MessageData(sender_id=sender_id, text=text, created_at=created_at),
        message_id="m10",
        chat_id="g1",
        collection_type=CollectionType.GROUPS,
    )


def create_message(id: str, sender_id: str, text: str, offset: int) -> ChatMessage:
    return ChatMessage(
        id=id,
        chat_id="g1",
        collection_type=CollectionType.GROUPS,
        sender_id=sender_id,
        text=text,
        created_at=BASE_TIME - offset,
    )


class TestFetchEnrichedContext:
    """Tests for fetch_enriched_context."""

    async def test_current_message(self, fetcher: ContextFetcher) -> None:
        context = await fetcher.fetch_enriched_context(create_params())

        current = context.current_message
        assert current.sender_name == "Alice"
        assert current.sender_id == "u1"
        assert current.message_id == "m10"
        assert current.created_at == BASE_TIME
        assert current.text == "Let's meet tomorrow"

    async def test_chat_metadata(self, fetcher: ContextFetcher) -> None:
        context = await fetcher.fetch_enriched_context(create_params())

        assert context.chat_metadata.chat_id == "g1"
        assert context.chat_metadata.collection_type is CollectionType.GROUPS
        assert context.chat_metadata.is_group is True

    async def test_chat_not_found(
        self, fetcher: ContextFetcher, chat_repository: AsyncMock
    ) -> None:
        chat_repository.find_by_id.return_value = None

        with pytest.raises(ChatNotFoundError) as exc_info:
            await fetcher.fetch_enriched_context(create_params())
        assert exc_info.value.chat_id == "g1"

    async def test_unknown_sender(self, fetcher: ContextFetcher) -> None:
        context = await fetcher.fetch_enriched_context(create_params(sender_id="ghost"))

        assert context.current_message.sender_name == "Unknown"

    async def test_missing_text(self, fetcher: ContextFetcher) -> None:
        context = await fetcher.fetch_enriched_context(create_params(text=None))

        assert context.current_message.text == ""

    async def test_missing_created_at_uses_now(
        self, fetcher: ContextFetcher, message_repository: AsyncMock
    ) -> None:
        with patch(
            "pulsechat.application.services.context_fetcher.now_ms",
            return_value=BASE_TIME + 5000,
        ):
            context = await fetcher.fetch_enriched_context(create_params(created_at=None))

        assert context.current_message.created_at == BASE_TIME + 5000
        assert message_repository.find_before.await_args.kwargs["before"] == BASE_TIME + 5000

    async def test_history_chronological_without_blanks(
        self, fetcher: ContextFetcher, message_repository: AsyncMock
    ) -> None:
        # repository returns newest first
        message_repository.find_before.return_value = [
            create_message("m9", "u2", "see you there", 1000),
            create_message("m8", "u3", "   ", 2000),
            create_message("m7", "u1", "standup at 10?", 3000),
        ]

        context = await fetcher.fetch_enriched_context(create_params(), history_depth=3)

        assert context.previous_messages == (
            MessageContext(
                sender_name="Alice", created_at=BASE_TIME - 3000, text="standup at 10?"
            ),
            MessageContext(
                sender_name="bob", created_at=BASE_TIME - 1000, text="see you there"
            ),
        )
        message_repository.find_before.assert_awaited_once_with(
            "g1", CollectionType.GROUPS, before=BASE_TIME, limit=3
        )

    @pytest.mark.parametrize("depth", [0, -1])
    async def test_zero_depth_skips_query(
        self, fetcher: ContextFetcher, message_repository: AsyncMock, depth: int
    ) -> None:
        context = await fetcher.fetch_enriched_context(
            create_params(), history_depth=depth
        )

        assert context.previous_messages == ()
        message_repository.find_before.assert_not_awaited()

    async def test_sender_names_are_cached(
        self,
        fetcher: ContextFetcher,
        message_repository: AsyncMock,
        user_repository: AsyncMock,
        chat_repository: AsyncMock,
    ) -> None:
        chat_repository.find_by_id.return_value = Chat(
            id="g1", collection_type=CollectionType.GROUPS, member_ids=[]
        )
        message_repository.find_before.return_value = [
            create_message("m9", "u1", "three", 1000),
            create_message("m8", "u1", "two", 2000),
            create_message("m7", "u1", "one", 3000),
        ]

        await fetcher.fetch_enriched_context(create_params())

        assert user_repository.find_by_id.await_count == 1

    async def test_participants_drop_missing_profiles(
        self, fetcher: ContextFetcher
    ) -> None:
        context = await fetcher.fetch_enriched_context(create_params())

        assert context.participants == (
            ParticipantInfo(user_id="u1", name="Alice"),
            ParticipantInfo(user_id="u2", name="bob"),
            ParticipantInfo(user_id="u3", name="Unknown"),
        )
        assert context.participant_names == ["Alice", "bob", "Unknown"]


class TestLookupFailures:
    """History and roster lookups degrade to empty lists."""

    async def test_history_query_failure(
        self, fetcher: ContextFetcher, message_repository: AsyncMock
    ) -> None:
        message_repository.find_before.side_effect = RuntimeError("history query failed")

        context = await fetcher.fetch_enriched_context(create_params())

        assert context.previous_messages == ()
        assert [p.user_id for p in context.participants] == ["u1", "u2", "u3"]

    async def test_roster_lookup_failure(
        self, fetcher: ContextFetcher, user_repository: AsyncMock
    ) -> None:
        def find_by_id(user_id: str) -> User | None:
            if user_id == "u2":
                raise RuntimeError("user lookup failed")
            return USERS.get(user_id)

        user_repository.find_by_id.side_effect = find_by_id

        context = await fetcher.fetch_enriched_context(create_params())

        assert context.participants == ()
        assert context.current_message.sender_name == "Alice"
