"""Calendar event entities."""

from dataclasses import dataclass, field
from typing import Any


def build_event_id(message_id: str, index: int) -> str:
    """Deterministic event ID derived from the source message."""
    return f"event-{message_id}-{index}"


@dataclass(frozen=True)
class CalendarEvent:
    """Calendar event extracted from a message.

    Attributes:
        id: ``event-{message_id}-{index}``.
        title: Event title.
        date: Event date in epoch milliseconds.
        extracted_from: Message the event was extracted from.
        description: Short description (optional).
        time: Time of day as written by the model, e.g. "15:00" (optional).
        participants: Participant names (optional).
        chat_id: Originating chat (optional).
    """

    id: str
    title: str
    date: int
    extracted_from: str
    description: str | None = None
    time: str | None = None
    participants: list[str] | None = None
    chat_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dict."""
        data: dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "date": self.date,
            "extractedFrom": self.extracted_from,
        }
        if self.description is not None:
            data["description"] = self.description
        if self.time is not None:
            data["time"] = self.time
        if self.participants is not None:
            data["participants"] = list(self.participants)
        if self.chat_id is not None:
            data["chatId"] = self.chat_id
        return data


@dataclass(frozen=True)
class ExtractedEvent:
    """Event as returned by the extraction model, before normalization.

    ``date`` is the raw ISO date string written by the model.
    """

    title: str
    date: str
    description: str | None = None
    time: str | None = None
    participants: list[str] | None = None


@dataclass(frozen=True)
class ChatCalendar:
    """Calendar events extracted in one chat."""

    chat_id: str
    events: list[CalendarEvent] = field(default_factory=list)
    last_updated: int = 0


@dataclass(frozen=True)
class UserCalendar:
    """Calendar events relevant to one user across all chats."""

    user_id: str
    events: list[CalendarEvent] = field(default_factory=list)
    last_updated: int = 0
