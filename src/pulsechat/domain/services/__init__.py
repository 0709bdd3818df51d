"""Domain services."""

from pulsechat.domain.services.fallback_router import get_fallback_action_plan
from pulsechat.domain.services.protocols import (
    ActionHandler,
    ActionRouter,
    AIClient,
    CalendarExtractor,
    ChatAnalyzer,
    PriorityDetector,
)
from pulsechat.domain.services.timestamps import now_ms, parse_iso_date, to_iso_string

__all__ = [
    "AIClient",
    "ActionHandler",
    "ActionRouter",
    "CalendarExtractor",
    "ChatAnalyzer",
    "PriorityDetector",
    "get_fallback_action_plan",
    "now_ms",
    "parse_iso_date",
    "to_iso_string",
]
