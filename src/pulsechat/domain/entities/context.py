"""Enriched context entity."""

from dataclasses import dataclass

from pulsechat.domain.entities.chat import CollectionType
from pulsechat.domain.entities.message import CurrentMessageContext, MessageContext


@dataclass(frozen=True)
class ParticipantInfo:
    """Resolved conversation participant."""

    user_id: str
    name: str


@dataclass(frozen=True)
class ChatMetadata:
    """Metadata of the conversation being processed."""

    chat_id: str
    collection_type: CollectionType
    is_group: bool


@dataclass(frozen=True)
class EnrichedContext:
    """Everything routing and actions need to know about one message.

    Built once per message and shared read-only by every stage, so
    actions running concurrently cannot interfere with each other.

    Attributes:
        current_message: The triggering message.
        previous_messages: Earlier messages, oldest first.
        participants: Resolved roster of the conversation.
        chat_metadata: Chat ID and type.
    """

    current_message: CurrentMessageContext
    previous_messages: tuple[MessageContext, ...]
    participants: tuple[ParticipantInfo, ...]
    chat_metadata: ChatMetadata

    @property
    def participant_names(self) -> list[str]:
        """Names of all participants, in roster order."""
        return [participant.name for participant in self.participants]
