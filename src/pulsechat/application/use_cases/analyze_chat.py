"""Chat analysis use case."""

import asyncio
import logging
from dataclasses import replace

from pulsechat.domain.entities import (
    ActionItem,
    ChatAnalysis,
    CollectionType,
    Decision,
    SearchResult,
    TranscriptMessage,
)
from pulsechat.domain.exceptions import AIUnavailableError
from pulsechat.domain.repositories import (
    ChatAnalysisRepository,
    MessageRepository,
    UserRepository,
)
from pulsechat.domain.services import ChatAnalyzer, now_ms

logger = logging.getLogger(__name__)

SUMMARY_MESSAGE_LIMIT = 300
ACTION_ITEMS_MESSAGE_LIMIT = 300
DECISIONS_MESSAGE_LIMIT = 100

NO_MESSAGES_SUMMARY = "No messages to summarize"


class AnalyzeChatUseCase:
    """On-demand analysis of a chat: summary, action items, decisions, search.

    Summaries and action items are cached per chat and returned from the
    cache unless a refresh is forced. Decisions are always recomputed and
    then cached. Search results are never cached.
    """

    def __init__(
        self,
        message_repository: MessageRepository,
        user_repository: UserRepository,
        analysis_repository: ChatAnalysisRepository,
        analyzer: ChatAnalyzer | None = None,
    ) -> None:
        """Initialize the use case.

        Args:
            message_repository: Source of the transcript.
            user_repository: Resolves sender names.
            analysis_repository: Cache of analysis results.
            analyzer: AI analyzer. When None, every operation raises
                AIUnavailableError.
        """
        self._message_repository = message_repository
        self._user_repository = user_repository
        self._analysis_repository = analysis_repository
        self._analyzer = analyzer

    async def generate_summary(
        self,
        chat_id: str,
        collection_type: CollectionType,
        force_refresh: bool = False,
    ) -> str:
        """Summarize the most recent messages of a chat.

        Raises:
            AIUnavailableError: No AI model is configured.
        """
        analyzer = self._require_analyzer()
        cached = await self._analysis_repository.find_by_chat(chat_id, collection_type)
        if cached is not None and cached.summary and not force_refresh:
            logger.debug("Using cached summary for %s", chat_id)
            return cached.summary

        messages = await self._load_transcript(
            chat_id, collection_type, SUMMARY_MESSAGE_LIMIT
        )
        if not messages:
            return NO_MESSAGES_SUMMARY

        summary = await analyzer.summarize(messages)
        analysis = self._base(cached, chat_id, collection_type)
        await self._analysis_repository.save(
            replace(
                analysis,
                summary=summary,
                message_count=len(messages),
                message_count_at_summary=len(messages),
                last_updated=now_ms(),
            )
        )
        logger.info("Generated summary for %s from %d messages", chat_id, len(messages))
        return summary

    async def extract_action_items(
        self,
        chat_id: str,
        collection_type: CollectionType,
        force_refresh: bool = False,
    ) -> list[ActionItem]:
        """Extract action items from the most recent messages of a chat.

        An empty cached list does not count as a cache hit.

        Raises:
            AIUnavailableError: No AI model is configured.
        """
        analyzer = self._require_analyzer()
        cached = await self._analysis_repository.find_by_chat(chat_id, collection_type)
        if cached is not None and cached.action_items and not force_refresh:
            logger.debug("Using cached action items for %s", chat_id)
            return cached.action_items

        messages = await self._load_transcript(
            chat_id, collection_type, ACTION_ITEMS_MESSAGE_LIMIT
        )
        if not messages:
            return []

        items = await analyzer.extract_action_items(messages)
        analysis = self._base(cached, chat_id, collection_type)
        await self._analysis_repository.save(
            replace(
                analysis,
                action_items=items,
                message_count=len(messages),
                message_count_at_action_items=len(messages),
                last_updated=now_ms(),
            )
        )
        return items

    async def extract_decisions(
        self,
        chat_id: str,
        collection_type: CollectionType,
        subject: str | None = None,
    ) -> list[Decision]:
        """Extract decisions from the most recent messages of a chat.

        Raises:
            AIUnavailableError: No AI model is configured.
        """
        analyzer = self._require_analyzer()
        messages = await self._load_transcript(
            chat_id, collection_type, DECISIONS_MESSAGE_LIMIT
        )
        if not messages:
            return []

        decisions = await analyzer.extract_decisions(messages, subject=subject)
        cached = await self._analysis_repository.find_by_chat(chat_id, collection_type)
        analysis = self._base(cached, chat_id, collection_type)
        await self._analysis_repository.save(
            replace(
                analysis,
                decisions=decisions,
                message_count=len(messages),
                last_updated=now_ms(),
            )
        )
        return decisions

    async def search_messages(
        self,
        chat_id: str,
        collection_type: CollectionType,
        query: str,
    ) -> list[SearchResult]:
        """Search every message of a chat.

        Raises:
            AIUnavailableError: No AI model is configured.
            ValueError: The query is blank.
        """
        analyzer = self._require_analyzer()
        if not query.strip():
            raise ValueError("Search query is required")

        messages = await self._load_transcript(chat_id, collection_type, None)
        if not messages:
            return []
        return await analyzer.search(messages, query.strip())

    def _require_analyzer(self) -> ChatAnalyzer:
        if self._analyzer is None:
            raise AIUnavailableError("AI analysis is not configured")
        return self._analyzer

    def _base(
        self,
        cached: ChatAnalysis | None,
        chat_id: str,
        collection_type: CollectionType,
    ) -> ChatAnalysis:
        if cached is not None:
            return cached
        return ChatAnalysis(chat_id=chat_id, collection_type=collection_type)

    async def _load_transcript(
        self,
        chat_id: str,
        collection_type: CollectionType,
        limit: int | None,
    ) -> list[TranscriptMessage]:
        messages = await self._message_repository.find_recent(
            chat_id, collection_type, limit=limit
        )
        sender_ids = sorted({m.sender_id for m in messages})
        users = await asyncio.gather(
            *(self._user_repository.find_by_id(user_id) for user_id in sender_ids)
        )
        names = {
            user_id: user.resolved_name if user is not None else user_id
            for user_id, user in zip(sender_ids, users)
        }
        return [
            TranscriptMessage(
                message_id=m.id,
                sender_name=names[m.sender_id],
                created_at=m.created_at,
                text=m.text,
            )
            for m in messages
        ]
