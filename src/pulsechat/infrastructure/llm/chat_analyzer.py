"""LLM-based analysis of whole chat transcripts."""

import logging

from pulsechat.domain.entities import (
    ActionItem,
    Decision,
    SearchResult,
    TranscriptMessage,
)
from pulsechat.domain.services import now_ms, parse_iso_date
from pulsechat.domain.services.protocols import AIClient
from pulsechat.infrastructure.llm.models import (
    ActionItemsOutput,
    DecisionsOutput,
    SearchResultsOutput,
    SummaryOutput,
)
from pulsechat.infrastructure.llm.templates import create_jinja_env

logger = logging.getLogger(__name__)

NO_SUMMARY = "No summary available"


class LLMChatAnalyzer:
    """Summarizes, extracts action items and decisions, and searches chats.

    AI errors are raised to the caller; a missing structured output is
    treated as an empty result.
    """

    def __init__(self, client: AIClient) -> None:
        self._client = client
        env = create_jinja_env()
        self._summary_template = env.get_template("summary.j2")
        self._action_items_template = env.get_template("action_items.j2")
        self._decisions_template = env.get_template("decisions.j2")
        self._search_template = env.get_template("search.j2")

    async def summarize(self, messages: list[TranscriptMessage]) -> str:
        """Summarize the transcript.

        Args:
            messages: Transcript, oldest first.

        Returns:
            Summary text, or a placeholder when the model returned nothing.
        """
        prompt = self._summary_template.render(messages=messages, now=now_ms())
        output = await self._client.generate(prompt, SummaryOutput)
        if output is None or not output.summary.strip():
            return NO_SUMMARY
        return output.summary.strip()

    async def extract_action_items(
        self, messages: list[TranscriptMessage]
    ) -> list[ActionItem]:
        """Extract action items from the transcript.

        Items without text are dropped. Unparseable due dates are left unset.
        """
        extracted_at = now_ms()
        prompt = self._action_items_template.render(
            messages=messages, now=extracted_at
        )
        output = await self._client.generate(prompt, ActionItemsOutput)
        if output is None:
            return []

        items = []
        for index, item in enumerate(output.items):
            if not item.text.strip():
                continue
            items.append(
                ActionItem(
                    id=f"action-{extracted_at}-{index}",
                    text=item.text.strip(),
                    status="done" if item.status == "done" else "pending",
                    assignee=item.assignee or None,
                    due_date=parse_iso_date(item.dueDate),
                )
            )
        logger.debug("Extracted %d action items", len(items))
        return items

    async def extract_decisions(
        self, messages: list[TranscriptMessage], subject: str | None = None
    ) -> list[Decision]:
        """Extract decisions from the transcript.

        Each decision is timestamped with the message it was made in, or
        with the extraction time when the model gave no valid message number.
        """
        extracted_at = now_ms()
        prompt = self._decisions_template.render(messages=messages, subject=subject)
        output = await self._client.generate(prompt, DecisionsOutput)
        if output is None:
            return []

        decisions = []
        for index, item in enumerate(output.decisions):
            timestamp = extracted_at
            if item.messageIndex is not None and 0 <= item.messageIndex < len(
                messages
            ):
                timestamp = messages[item.messageIndex].created_at
            decisions.append(
                Decision(
                    id=f"decision-{str(timestamp)[-8:]}{index:03d}",
                    subject=item.subject,
                    decision=item.decision,
                    timestamp=timestamp,
                )
            )
        logger.debug("Extracted %d decisions", len(decisions))
        return decisions

    async def search(
        self, messages: list[TranscriptMessage], query: str
    ) -> list[SearchResult]:
        """Find the messages most relevant to the query.

        Results pointing outside the transcript are dropped.
        """
        prompt = self._search_template.render(messages=messages, query=query)
        output = await self._client.generate(prompt, SearchResultsOutput)
        if output is None:
            return []

        results = []
        for hit in output.results:
            if not 0 <= hit.index < len(messages):
                logger.warning("Search result index %d out of range", hit.index)
                continue
            results.append(
                SearchResult(
                    message_id=messages[hit.index].message_id,
                    relevance=hit.relevance,
                    snippet=hit.snippet,
                )
            )
        return results
