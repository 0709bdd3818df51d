"""Priority detection action."""

import asyncio
import logging
from typing import Any

from pulsechat.domain.entities import (
    DEFAULT_PRIORITY_REASON,
    ActionName,
    ActionResult,
    EnrichedContext,
    Priority,
)
from pulsechat.domain.repositories import PriorityRepository
from pulsechat.domain.services import PriorityDetector

logger = logging.getLogger(__name__)


class PriorityAction:
    """Flags urgent messages in the chat and participant projections."""

    name = ActionName.PRIORITY.value

    def __init__(
        self,
        detector: PriorityDetector,
        priority_repository: PriorityRepository,
    ) -> None:
        """Initialize the action.

        Args:
            detector: Priority detector.
            priority_repository: Repository for priority projections.
        """
        self._detector = detector
        self._priority_repository = priority_repository

    async def handle(
        self,
        context: EnrichedContext,
        metadata: dict[str, Any] | None = None,
    ) -> ActionResult:
        """Detect the priority of the current message and store it.

        Args:
            context: Enriched context of the message.
            metadata: Execution metadata (unused).

        Returns:
            Action result. Errors are reported as a failed result.
        """
        try:
            return await self._handle(context)
        except Exception as e:
            logger.exception("Error in priority action")
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

        detection = await self._detector.detect(context.previous_messages, current)
        if not detection.is_priority or detection.level is None:
            logger.info("No priority detected: message=%s", current.message_id)
            return ActionResult(
                action_name=self.name,
                success=True,
                data={"is_priority": False},
            )

        priority = Priority(
            message_id=current.message_id,
            level=detection.level,
            reason=detection.reason or DEFAULT_PRIORITY_REASON,
            timestamp=current.created_at,
        )

        await self._priority_repository.append_to_chat(chat_id, [priority])

        with_chat = priority.with_chat(chat_id)
        await asyncio.gather(
            *(
                self._priority_repository.append_to_user(participant.user_id, [with_chat])
                for participant in context.participants
            )
        )

        logger.info(
            "Priority detected and stored: message=%s, level=%s",
            current.message_id,
            priority.level,
        )

        return ActionResult(
            action_name=self.name,
            success=True,
            data={"priority": priority.level, "reason": detection.reason},
        )
