"""Chat entity."""

from dataclasses import dataclass, field
from enum import Enum


class CollectionType(Enum):
    """Collection a conversation lives in."""

    CHATS = "chats"
    GROUPS = "groups"


@dataclass(frozen=True)
class Chat:
    """Direct chat or group conversation.

    Direct chats keep their roster as ``participants`` and groups as
    ``members``; both are normalized to ``member_ids``.

    Attributes:
        id: Chat or group ID.
        collection_type: Whether this is a direct chat or a group.
        member_ids: User IDs of the roster.
        name: Group name (direct chats usually have none).
    """

    id: str
    collection_type: CollectionType
    member_ids: list[str] = field(default_factory=list)
    name: str | None = None

    @property
    def is_group(self) -> bool:
        """Check if this conversation is a group."""
        return self.collection_type is CollectionType.GROUPS
