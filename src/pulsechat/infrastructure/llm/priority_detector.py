"""LLM-based priority detection."""

import logging

from pulsechat.domain.entities import (
    CurrentMessageContext,
    MessageContext,
    PriorityDetection,
)
from pulsechat.domain.services.protocols import AIClient
from pulsechat.infrastructure.llm.models import PriorityOutput
from pulsechat.infrastructure.llm.templates import create_jinja_env

logger = logging.getLogger(__name__)


class LLMPriorityDetector:
    """Classifies a message as urgent, high priority, or neither."""

    def __init__(self, client: AIClient | None) -> None:
        """Initialize the detector.

        Args:
            client: AI client. When None, every message is non-priority.
        """
        self._client = client
        self._template = create_jinja_env().get_template("priority_detection.j2")

    async def detect(
        self,
        previous_messages: tuple[MessageContext, ...],
        current_message: CurrentMessageContext,
    ) -> PriorityDetection:
        """Detect the priority of the current message.

        Args:
            previous_messages: Earlier messages, oldest first.
            current_message: Message to classify.

        Returns:
            Detection result; negative on any AI error.
        """
        if self._client is None:
            return PriorityDetection(is_priority=False)

        prompt = self._template.render(
            previous_messages=previous_messages,
            current_message=current_message,
        )

        try:
            output = await self._client.generate(prompt, PriorityOutput)
        except Exception as e:
            logger.error("Priority detection error: %s", e)
            return PriorityDetection(is_priority=False)

        if output is None:
            return PriorityDetection(is_priority=False)

        return PriorityDetection(
            is_priority=output.is_priority,
            level=output.level,
            reason=output.reason,
        )
