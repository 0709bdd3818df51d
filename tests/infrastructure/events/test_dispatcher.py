"""Tests for EventDispatcher."""

from datetime import datetime, timezone

import pytest

from pulsechat.domain.entities import (
    CollectionType,
    MessageData,
    ProcessMessageParams,
)
from pulsechat.domain.entities.event import Event, EventType
from pulsechat.infrastructure.events.dispatcher import EventDispatcher, event_handler


@pytest.fixture
def event() -> Event:
    """Create a NEW_MESSAGE event."""
    params = ProcessMessageParams(
        message_data=MessageData(sender_id="u1", text="hi", created_at=1),
        message_id="m1",
        chat_id="chat1",
        collection_type=CollectionType.CHATS,
    )
    return Event(
        type=EventType.NEW_MESSAGE,
        payload={"params": params},
        created_at=datetime(2024, 1, 15, 12, 0, 0, tzinfo=timezone.utc),
    )


class TestEventHandler:
    """Tests for @event_handler decorator."""

    def test_decorator_sets_event_type(self) -> None:
        """Test that decorator sets _event_type attribute."""

        @event_handler(EventType.NEW_MESSAGE)
        async def handle_new_message(event: Event) -> None:
            pass

        assert handle_new_message._event_type == EventType.NEW_MESSAGE  # type: ignore[attr-defined]
        assert handle_new_message.__name__ == "handle_new_message"


class TestEventDispatcher:
    """Tests for EventDispatcher."""

    @pytest.fixture
    def dispatcher(self) -> EventDispatcher:
        """Create an EventDispatcher instance."""
        return EventDispatcher()

    async def test_register_and_dispatch(
        self, dispatcher: EventDispatcher, event: Event
    ) -> None:
        """Test registering a handler and dispatching an event."""
        received: list[Event] = []

        async def handler(e: Event) -> None:
            received.append(e)

        dispatcher.register(EventType.NEW_MESSAGE, handler)
        await dispatcher.dispatch(event)

        assert received == [event]
        assert dispatcher.has_handlers(EventType.NEW_MESSAGE)

    async def test_register_decorated_handler(
        self, dispatcher: EventDispatcher, event: Event
    ) -> None:
        received: list[Event] = []

        @event_handler(EventType.NEW_MESSAGE)
        async def handler(e: Event) -> None:
            received.append(e)

        dispatcher.register_handler(handler)
        await dispatcher.dispatch(event)

        assert received == [event]

    def test_register_undecorated_handler_raises(
        self, dispatcher: EventDispatcher
    ) -> None:
        async def handler(e: Event) -> None:
            pass

        with pytest.raises(ValueError, match="@event_handler"):
            dispatcher.register_handler(handler)

    async def test_no_handler(self, dispatcher: EventDispatcher, event: Event) -> None:
        """Test dispatching without handlers does nothing."""
        assert not dispatcher.has_handlers(EventType.NEW_MESSAGE)

        await dispatcher.dispatch(event)

    async def test_handler_error_is_isolated(
        self, dispatcher: EventDispatcher, event: Event
    ) -> None:
        """Test that a failing handler doesn't stop the others."""
        received: list[Event] = []

        async def failing(e: Event) -> None:
            raise RuntimeError("boom")

        async def working(e: Event) -> None:
            received.append(e)

        dispatcher.register(EventType.NEW_MESSAGE, failing)
        dispatcher.register(EventType.NEW_MESSAGE, working)

        await dispatcher.dispatch(event)

        assert received == [event]
