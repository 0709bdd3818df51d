"""Calendar extraction action."""

import asyncio
import logging
from typing import Any

from pulsechat.domain.entities import (
    ActionName,
    ActionResult,
    CalendarEvent,
    EnrichedContext,
    ExtractedEvent,
    build_event_id,
)
from pulsechat.domain.repositories import CalendarRepository
from pulsechat.domain.services import CalendarExtractor, now_ms, parse_iso_date

logger = logging.getLogger(__name__)


class CalendarAction:
    """Stores events mentioned in a message in the chat and participant calendars."""

    name = ActionName.CALENDAR.value

    def __init__(
        self,
        extractor: CalendarExtractor,
        calendar_repository: CalendarRepository,
    ) -> None:
        """Initialize the action.

        Args:
            extractor: Calendar event extractor.
            calendar_repository: Repository for calendar projections.
        """
        self._extractor = extractor
        self._calendar_repository = calendar_repository

    async def handle(
        self,
        context: EnrichedContext,
        metadata: dict[str, Any] | None = None,
    ) -> ActionResult:
        """Extract events from the current message and store them.

        Args:
            context: Enriched context of the message.
            metadata: Execution metadata (unused).

        Returns:
            Action result. Errors are reported as a failed result.
        """
        try:
            return await self._handle(context)
        except Exception as e:
            logger.exception("Error in calendar action")
            return ActionResult.failure(self.name, str(e))

    async def _handle(self, context: EnrichedContext) -> ActionResult:
        current = context.current_message
        chat_id = context.chat_metadata.chat_id

        if not current.text or not current.text.strip():
            return ActionResult(
                action_name=self.name,
                success=True,
                data={"skipped": "no text content"},
            )

        participant_names = context.participant_names
        extracted = await self._extractor.extract(
            context.previous_messages, current, participant_names
        )
        if not extracted:
            logger.info("No calendar events found: message=%s", current.message_id)
            return ActionResult(action_name=self.name, success=True, data={"events": []})

        events = [
            self._to_event(item, index, current.message_id, chat_id, participant_names)
            for index, item in enumerate(extracted)
        ]

        await self._calendar_repository.append_to_chat(chat_id, events)

        await asyncio.gather(
            *(
                self._calendar_repository.append_to_user(participant.user_id, events)
                for participant in context.participants
            )
        )

        logger.info(
            "Calendar events extracted and stored: message=%s, count=%d",
            current.message_id,
            len(events),
        )

        return ActionResult(
            action_name=self.name,
            success=True,
            data={
                "event_count": len(events),
                "events": [{"id": e.id, "title": e.title} for e in events],
            },
        )

    def _to_event(
        self,
        item: ExtractedEvent,
        index: int,
        message_id: str,
        chat_id: str,
        participant_names: list[str],
    ) -> CalendarEvent:
        date = parse_iso_date(item.date)
        if date is None:
            logger.warning(
                "Unparsable event date %r for message %s, using current time",
                item.date,
                message_id,
            )
            date = now_ms()

        return CalendarEvent(
            id=build_event_id(message_id, index),
            title=item.title,
            date=date,
            extracted_from=message_id,
            description=item.description,
            time=item.time,
            participants=list(item.participants or participant_names),
            chat_id=chat_id,
        )
