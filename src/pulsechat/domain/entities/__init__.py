"""Domain entities."""

from pulsechat.domain.entities.action import (
    ActionName,
    ActionPlan,
    ActionResult,
    PlanPriority,
)
from pulsechat.domain.entities.analysis import (
    ActionItem,
    ActionItemStatus,
    ChatAnalysis,
    Decision,
    SearchResult,
    TranscriptMessage,
)
from pulsechat.domain.entities.calendar_event import (
    CalendarEvent,
    ChatCalendar,
    ExtractedEvent,
    UserCalendar,
    build_event_id,
)
from pulsechat.domain.entities.chat import Chat, CollectionType
from pulsechat.domain.entities.context import (
    ChatMetadata,
    EnrichedContext,
    ParticipantInfo,
)
from pulsechat.domain.entities.event import Event, EventType
from pulsechat.domain.entities.message import (
    ChatMessage,
    CurrentMessageContext,
    MessageContext,
    MessageData,
    ProcessMessageParams,
)
from pulsechat.domain.entities.priority import (
    DEFAULT_PRIORITY_REASON,
    ChatPriorities,
    Priority,
    PriorityDetection,
    PriorityLevel,
    UserPriorities,
)
from pulsechat.domain.entities.user import UNKNOWN_USER_NAME, User

__all__ = [
    "ActionItem",
    "ActionItemStatus",
    "ActionName",
    "ActionPlan",
    "ActionResult",
    "CalendarEvent",
    "Chat",
    "ChatAnalysis",
    "ChatCalendar",
    "ChatMessage",
    "ChatMetadata",
    "ChatPriorities",
    "CollectionType",
    "CurrentMessageContext",
    "DEFAULT_PRIORITY_REASON",
    "Decision",
    "EnrichedContext",
    "Event",
    "EventType",
    "ExtractedEvent",
    "MessageContext",
    "MessageData",
    "ParticipantInfo",
    "PlanPriority",
    "Priority",
    "PriorityDetection",
    "PriorityLevel",
    "ProcessMessageParams",
    "SearchResult",
    "TranscriptMessage",
    "UNKNOWN_USER_NAME",
    "User",
    "UserCalendar",
    "UserPriorities",
    "build_event_id",
]
