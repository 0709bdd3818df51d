"""Builds the enriched context of an incoming message."""

import asyncio
import logging

from pulsechat.domain.entities import (
    UNKNOWN_USER_NAME,
    ChatMessage,
    ChatMetadata,
    CurrentMessageContext,
    EnrichedContext,
    MessageContext,
    ParticipantInfo,
    ProcessMessageParams,
)
from pulsechat.domain.exceptions import ChatNotFoundError
from pulsechat.domain.repositories import (
    ChatRepository,
    MessageRepository,
    UserRepository,
)
from pulsechat.domain.services import now_ms

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_DEPTH = 5


class ContextFetcher:
    """Assembles the context shared by routing and every action.

    Only reads from the repositories.
    """

    def __init__(
        self,
        user_repository: UserRepository,
        chat_repository: ChatRepository,
        message_repository: MessageRepository,
    ) -> None:
        """Initialize the fetcher.

        Args:
            user_repository: Repository for user profiles.
            chat_repository: Repository for chats and groups.
            message_repository: Repository for message history.
        """
        self._user_repository = user_repository
        self._chat_repository = chat_repository
        self._message_repository = message_repository

    async def fetch_enriched_context(
        self,
        params: ProcessMessageParams,
        history_depth: int = DEFAULT_HISTORY_DEPTH,
    ) -> EnrichedContext:
        """Fetch the enriched context of a message.

        Args:
            params: The incoming message and where it was posted.
            history_depth: Maximum number of previous messages to include.

        Returns:
            Enriched context.

        Raises:
            ChatNotFoundError: If the chat or group does not exist.
        """
        chat = await self._chat_repository.find_by_id(
            params.chat_id, params.collection_type
        )
        if chat is None:
            raise ChatNotFoundError(params.chat_id, params.collection_type.value)

        name_cache: dict[str, str] = {}
        message_data = params.message_data
        created_at = (
            message_data.created_at
            if message_data.created_at is not None
            else now_ms()
        )

        current_message = CurrentMessageContext(
            sender_name=await self._resolve_name(message_data.sender_id, name_cache),
            created_at=created_at,
            text=message_data.text or "",
            sender_id=message_data.sender_id,
            message_id=params.message_id,
        )

        previous_messages = await self._fetch_previous_messages(
            params, created_at, history_depth, name_cache
        )
        participants = await self._fetch_participants(chat.member_ids)

        logger.debug(
            "Fetched context for %s/%s: %d previous messages, %d participants",
            params.collection_type.value,
            params.chat_id,
            len(previous_messages),
            len(participants),
        )

        return EnrichedContext(
            current_message=current_message,
            previous_messages=tuple(previous_messages),
            participants=tuple(participants),
            chat_metadata=ChatMetadata(
                chat_id=params.chat_id,
                collection_type=params.collection_type,
                is_group=chat.is_group,
            ),
        )

    async def _fetch_previous_messages(
        self,
        params: ProcessMessageParams,
        before: int,
        history_depth: int,
        name_cache: dict[str, str],
    ) -> list[MessageContext]:
        if history_depth <= 0:
            return []

        try:
            # newest first
            messages: list[ChatMessage] = await self._message_repository.find_before(
                params.chat_id,
                params.collection_type,
                before=before,
                limit=history_depth,
            )

            contexts: list[MessageContext] = []
            for message in reversed(messages):
                if not message.text or not message.text.strip():
                    continue
                contexts.append(
                    MessageContext(
                        sender_name=await self._resolve_name(
                            message.sender_id, name_cache
                        ),
                        created_at=message.created_at,
                        text=message.text,
                    )
                )
            return contexts
        except Exception:
            logger.exception(
                "Error fetching message history for %s/%s",
                params.collection_type.value,
                params.chat_id,
            )
            return []

    async def _fetch_participants(self, member_ids: list[str]) -> list[ParticipantInfo]:
        try:
            users = await asyncio.gather(
                *(self._user_repository.find_by_id(user_id) for user_id in member_ids)
            )
        except Exception:
            logger.exception("Error fetching participant info")
            return []
        return [
            ParticipantInfo(user_id=user.id, name=user.resolved_name)
            for user in users
            if user is not None
        ]

    async def _resolve_name(self, user_id: str, cache: dict[str, str]) -> str:
        if user_id in cache:
            return cache[user_id]
        user = await self._user_repository.find_by_id(user_id)
        name = user.resolved_name if user is not None else UNKNOWN_USER_NAME
        cache[user_id] = name
        return name
