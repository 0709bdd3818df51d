"""Event entity for event-driven architecture."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class EventType(Enum):
    """Event types for the event-driven system."""

    NEW_MESSAGE = "new_message"


@dataclass(frozen=True)
class Event:
    """Domain event.

    Attributes:
        type: Event type.
        payload: Event-specific data.
        created_at: Event creation time.
    """

    type: EventType
    payload: dict[str, Any]
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def get_identity_key(self) -> str:
        """Get identity key for duplicate detection.

        Returns:
            Unique key based on event type and payload.
        """
        if self.type == EventType.NEW_MESSAGE:
            params = self.payload.get("params")
            if params is not None:
                return f"new_message:{params.chat_id}:{params.message_id}"
        return f"{self.type.value}:unknown"
