"""Priority entities."""

from dataclasses import dataclass, field, replace
from typing import Any, Literal

PriorityLevel = Literal["high", "urgent"]

DEFAULT_PRIORITY_REASON = "Priority detected"


@dataclass(frozen=True)
class Priority:
    """Priority flag raised for a message.

    Attributes:
        message_id: Message the flag was derived from.
        level: Priority level.
        reason: Why the message was flagged.
        timestamp: Creation time of the message in epoch milliseconds.
        chat_id: Originating chat (set on user projections only).
    """

    message_id: str
    level: PriorityLevel
    reason: str
    timestamp: int
    chat_id: str | None = None

    def with_chat(self, chat_id: str) -> "Priority":
        """Copy of this priority tagged with its originating chat."""
        return replace(self, chat_id=chat_id)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dict."""
        data: dict[str, Any] = {
            "messageId": self.message_id,
            "level": self.level,
            "reason": self.reason,
            "timestamp": self.timestamp,
        }
        if self.chat_id is not None:
            data["chatId"] = self.chat_id
        return data


@dataclass(frozen=True)
class PriorityDetection:
    """Result of priority detection for one message."""

    is_priority: bool
    level: PriorityLevel | None = None
    reason: str | None = None


@dataclass(frozen=True)
class ChatPriorities:
    """Priorities raised in one chat."""

    chat_id: str
    priorities: list[Priority] = field(default_factory=list)
    last_updated: int = 0


@dataclass(frozen=True)
class UserPriorities:
    """Priorities relevant to one user across all chats."""

    user_id: str
    priorities: list[Priority] = field(default_factory=list)
    last_updated: int = 0
