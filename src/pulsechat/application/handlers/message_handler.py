"""Handler for NEW_MESSAGE events."""

import logging
from dataclasses import replace

from pulsechat.application.use_cases import ProcessMessageUseCase
from pulsechat.domain.entities import ChatMessage, Event, ProcessMessageParams
from pulsechat.domain.entities.event import EventType
from pulsechat.domain.repositories import MessageRepository
from pulsechat.domain.services import now_ms
from pulsechat.infrastructure.events.dispatcher import event_handler

logger = logging.getLogger(__name__)


class NewMessageEventHandler:
    """Handler for NEW_MESSAGE events.

    Stores the incoming message and hands it to ProcessMessageUseCase.
    """

    def __init__(
        self,
        message_repository: MessageRepository,
        process_message: ProcessMessageUseCase,
    ) -> None:
        """Initialize the handler.

        Args:
            message_repository: Repository for storing messages.
            process_message: Message processing use case.
        """
        self._message_repository = message_repository
        self._process_message = process_message

    @event_handler(EventType.NEW_MESSAGE)
    async def handle(self, event: Event) -> None:
        """Handle NEW_MESSAGE event.

        Args:
            event: The NEW_MESSAGE event. ``payload["params"]`` holds
                ProcessMessageParams.
        """
        params: ProcessMessageParams = event.payload["params"]
        data = params.message_data
        created_at = data.created_at if data.created_at is not None else now_ms()
        if data.created_at is None:
            # Stored message and history cut-off share one timestamp
            params = replace(params, message_data=replace(data, created_at=created_at))

        logger.info(
            "Handling NEW_MESSAGE event: chat=%s, message=%s",
            params.chat_id,
            params.message_id,
        )

        # 1. Save the received message
        message = ChatMessage(
            id=params.message_id,
            chat_id=params.chat_id,
            collection_type=params.collection_type,
            sender_id=data.sender_id,
            text=data.text or "",
            created_at=created_at,
            image_url=data.image_url,
            status=data.status,
        )
        await self._message_repository.save(message)

        # 2. Process
        await self._process_message.execute(params)
