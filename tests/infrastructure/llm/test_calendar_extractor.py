"""Tests for LLMCalendarExtractor."""

from unittest.mock import AsyncMock

from pulsechat.domain.entities import ExtractedEvent
from pulsechat.infrastructure.llm import LLMCalendarExtractor
from pulsechat.infrastructure.llm.models import CalendarEventOutput, CalendarEventsOutput


class TestExtract:
    """Tests for LLMCalendarExtractor.extract."""

    async def test_events_extracted(self, context) -> None:
        client = AsyncMock()
        client.generate.return_value = CalendarEventsOutput(
            events=[
                CalendarEventOutput(
                    title="Design review",
                    date="2024-01-16",
                    time="15:00",
                    participants=["Alice"],
                ),
                CalendarEventOutput(title="Launch", date="2024-02-01"),
            ]
        )
        extractor = LLMCalendarExtractor(client)

        events = await extractor.extract(
            context.previous_messages, context.current_message, ["Alice", "Bob"]
        )

        assert events == [
            ExtractedEvent(
                title="Design review",
                date="2024-01-16",
                time="15:00",
                participants=["Alice"],
            ),
            ExtractedEvent(title="Launch", date="2024-02-01"),
        ]

    async def test_prompt_mentions_participants(self, context) -> None:
        client = AsyncMock()
        client.generate.return_value = CalendarEventsOutput(events=[])
        extractor = LLMCalendarExtractor(client)

        await extractor.extract(
            context.previous_messages, context.current_message, ["Alice", "Bob"]
        )

        prompt, output_model = client.generate.await_args.args
        assert output_model is CalendarEventsOutput
        assert "Conversation participants: Alice, Bob." in prompt
        assert "2024-01-15T12:00:00.000Z" in prompt

    async def test_prompt_without_participants(self, context) -> None:
        client = AsyncMock()
        client.generate.return_value = CalendarEventsOutput(events=[])
        extractor = LLMCalendarExtractor(client)

        await extractor.extract(context.previous_messages, context.current_message, [])

        prompt = client.generate.await_args.args[0]
        assert "Conversation participants:" not in prompt

    async def test_without_client(self, context) -> None:
        extractor = LLMCalendarExtractor(None)

        assert await extractor.extract((), context.current_message, []) == []

    async def test_error_returns_empty(self, context) -> None:
        client = AsyncMock()
        client.generate.side_effect = RuntimeError("boom")
        extractor = LLMCalendarExtractor(client)

        assert await extractor.extract((), context.current_message, ["Alice"]) == []

    async def test_no_output_returns_empty(self, context) -> None:
        client = AsyncMock()
        client.generate.return_value = None
        extractor = LLMCalendarExtractor(client)

        assert await extractor.extract((), context.current_message, ["Alice"]) == []
