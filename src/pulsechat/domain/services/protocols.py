"""Domain service protocols."""

from typing import Any, Protocol, TypeVar

from pydantic import BaseModel

from pulsechat.domain.entities import (
    ActionItem,
    ActionPlan,
    ActionResult,
    CurrentMessageContext,
    Decision,
    EnrichedContext,
    ExtractedEvent,
    MessageContext,
    PriorityDetection,
    SearchResult,
    TranscriptMessage,
)

OutputT = TypeVar("OutputT", bound=BaseModel)


class AIClient(Protocol):
    """Structured-output generation capability.

    Treated as unreliable: implementations may raise or return None
    when the model produced no structured output.
    """

    async def generate(self, prompt: str, output_model: type[OutputT]) -> OutputT | None:
        """Generate structured output for a prompt.

        Args:
            prompt: Prompt text.
            output_model: Pydantic model describing the output schema.

        Returns:
            Parsed output, or None if the model returned none.
        """
        ...


class ActionRouter(Protocol):
    """Decides which actions to run for a message."""

    async def analyze_message_and_route(self, context: EnrichedContext) -> ActionPlan:
        """Build an action plan for the context."""
        ...


class PriorityDetector(Protocol):
    """Detects urgent or high-priority messages."""

    async def detect(
        self,
        previous_messages: tuple[MessageContext, ...],
        current_message: CurrentMessageContext,
    ) -> PriorityDetection:
        """Classify the current message.

        Returns a negative detection instead of raising.
        """
        ...


class CalendarExtractor(Protocol):
    """Extracts calendar events from a message."""

    async def extract(
        self,
        previous_messages: tuple[MessageContext, ...],
        current_message: CurrentMessageContext,
        participant_names: list[str],
    ) -> list[ExtractedEvent]:
        """Extract events mentioned in the current message.

        Returns an empty list instead of raising.
        """
        ...


class ChatAnalyzer(Protocol):
    """Analyzes a whole chat transcript.

    Unlike the per-message detectors, AI errors propagate to the caller.
    """

    async def summarize(self, messages: list[TranscriptMessage]) -> str:
        """Summarize the transcript."""
        ...

    async def extract_action_items(
        self, messages: list[TranscriptMessage]
    ) -> list[ActionItem]:
        """Extract tasks and commitments."""
        ...

    async def extract_decisions(
        self, messages: list[TranscriptMessage], subject: str | None = None
    ) -> list[Decision]:
        """Extract decisions, optionally limited to one subject."""
        ...

    async def search(
        self, messages: list[TranscriptMessage], query: str
    ) -> list[SearchResult]:
        """Find the messages most relevant to the query."""
        ...


class ActionHandler(Protocol):
    """Pluggable unit of work run by the action executor."""

    name: str

    async def handle(
        self,
        context: EnrichedContext,
        metadata: dict[str, Any] | None = None,
    ) -> ActionResult:
        """Run the action for the context."""
        ...
