"""Chat analysis entities."""

from dataclasses import dataclass, field
from typing import Any, Literal

from pulsechat.domain.entities.chat import CollectionType

ActionItemStatus = Literal["pending", "done"]


@dataclass(frozen=True)
class TranscriptMessage:
    """One message of a chat transcript handed to analysis.

    Attributes:
        message_id: Message ID.
        sender_name: Resolved sender name (user ID when the user is unknown).
        created_at: Creation time in epoch milliseconds.
        text: Message text.
    """

    message_id: str
    sender_name: str
    created_at: int
    text: str


@dataclass(frozen=True)
class ActionItem:
    """Task or commitment found in a conversation."""

    id: str
    text: str
    status: ActionItemStatus = "pending"
    assignee: str | None = None
    due_date: int | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dict."""
        data: dict[str, Any] = {"id": self.id, "text": self.text, "status": self.status}
        if self.assignee is not None:
            data["assignee"] = self.assignee
        if self.due_date is not None:
            data["dueDate"] = self.due_date
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ActionItem":
        """Restore from the dict produced by to_dict."""
        return cls(
            id=data["id"],
            text=data["text"],
            status=data.get("status", "pending"),
            assignee=data.get("assignee"),
            due_date=data.get("dueDate"),
        )


@dataclass(frozen=True)
class Decision:
    """Agreement reached in a conversation.

    ``timestamp`` is the creation time of the message where the decision
    was made, or the extraction time when that message is unknown.
    """

    id: str
    subject: str
    decision: str
    timestamp: int

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dict."""
        return {
            "id": self.id,
            "subject": self.subject,
            "decision": self.decision,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Decision":
        """Restore from the dict produced by to_dict."""
        return cls(
            id=data["id"],
            subject=data["subject"],
            decision=data["decision"],
            timestamp=data["timestamp"],
        )


@dataclass(frozen=True)
class SearchResult:
    """Message matching a search query."""

    message_id: str
    relevance: float
    snippet: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dict."""
        return {
            "messageId": self.message_id,
            "relevance": self.relevance,
            "snippet": self.snippet,
        }


@dataclass(frozen=True)
class ChatAnalysis:
    """Cached analysis results of one chat.

    Attributes:
        chat_id: Chat or group ID.
        collection_type: Collection of the conversation.
        summary: Last generated summary.
        action_items: Last extracted action items.
        decisions: Last extracted decisions.
        message_count: Number of messages analyzed by the last run.
        message_count_at_summary: Message count when the summary was made.
        message_count_at_action_items: Message count when action items
            were extracted.
        last_updated: Time of the last run in epoch milliseconds.
    """

    chat_id: str
    collection_type: CollectionType
    summary: str | None = None
    action_items: list[ActionItem] = field(default_factory=list)
    decisions: list[Decision] = field(default_factory=list)
    message_count: int = 0
    message_count_at_summary: int | None = None
    message_count_at_action_items: int | None = None
    last_updated: int = 0
