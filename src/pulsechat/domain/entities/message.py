"""Message entities."""

from dataclasses import dataclass

from pulsechat.domain.entities.chat import CollectionType


@dataclass(frozen=True)
class ChatMessage:
    """Stored chat message.

    Attributes:
        id: Message ID.
        chat_id: Chat or group the message belongs to.
        collection_type: Collection of the parent conversation.
        sender_id: User ID of the sender.
        text: Message text (empty for image-only messages).
        created_at: Creation time in epoch milliseconds.
        image_url: Attached image URL (optional).
        status: Delivery status (optional).
    """

    id: str
    chat_id: str
    collection_type: CollectionType
    sender_id: str
    text: str
    created_at: int
    image_url: str | None = None
    status: str | None = None


@dataclass(frozen=True)
class MessageData:
    """Payload of a newly created message as delivered by the trigger.

    ``created_at`` is None when the payload carried no numeric timestamp.
    """

    sender_id: str
    text: str | None = None
    image_url: str | None = None
    created_at: int | None = None
    status: str | None = None


@dataclass(frozen=True)
class ProcessMessageParams:
    """Input of the message processing pipeline."""

    message_data: MessageData
    message_id: str
    chat_id: str
    collection_type: CollectionType


@dataclass(frozen=True)
class MessageContext:
    """Snapshot of one message used for prompting.

    Attributes:
        sender_name: Resolved sender name.
        created_at: Creation time in epoch milliseconds.
        text: Message text.
    """

    sender_name: str
    created_at: int
    text: str


@dataclass(frozen=True)
class CurrentMessageContext(MessageContext):
    """The message that triggered processing.

    ``message_id`` is the join key for every derived record.
    """

    sender_id: str = ""
    message_id: str = ""
