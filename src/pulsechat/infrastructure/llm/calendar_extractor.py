"""LLM-based calendar event extraction."""

import logging

from pulsechat.domain.entities import (
    CurrentMessageContext,
    ExtractedEvent,
    MessageContext,
)
from pulsechat.domain.services.protocols import AIClient
from pulsechat.infrastructure.llm.models import CalendarEventsOutput
from pulsechat.infrastructure.llm.templates import create_jinja_env

logger = logging.getLogger(__name__)


class LLMCalendarExtractor:
    """Extracts meetings, deadlines and other dated events from a message."""

    def __init__(self, client: AIClient | None) -> None:
        """Initialize the extractor.

        Args:
            client: AI client. When None, no events are ever extracted.
        """
        self._client = client
        self._template = create_jinja_env().get_template("calendar_extraction.j2")

    async def extract(
        self,
        previous_messages: tuple[MessageContext, ...],
        current_message: CurrentMessageContext,
        participant_names: list[str],
    ) -> list[ExtractedEvent]:
        """Extract events from the current message.

        Args:
            previous_messages: Earlier messages, oldest first.
            current_message: Message to extract events from.
            participant_names: Names of everyone in the conversation.

        Returns:
            Raw extracted events; empty on any AI error.
        """
        if self._client is None:
            return []

        prompt = self._template.render(
            previous_messages=previous_messages,
            current_message=current_message,
            participant_names=participant_names,
        )

        try:
            output = await self._client.generate(prompt, CalendarEventsOutput)
        except Exception as e:
            logger.error("Calendar extraction error: %s", e)
            return []

        if output is None:
            return []

        return [
            ExtractedEvent(
                title=event.title,
                date=event.date,
                description=event.description,
                time=event.time,
                participants=event.participants,
            )
            for event in output.events
        ]
