"""Rule-based action routing used when AI routing is unavailable."""

import logging
import re

from pulsechat.domain.entities import ActionName, ActionPlan, EnrichedContext

logger = logging.getLogger(__name__)

PRIORITY_KEYWORDS: tuple[str, ...] = (
    "urgent",
    "asap",
    "as soon as possible",
    "emergency",
    "critical",
    "blocker",
    "immediate",
    "important",
    "deadline",
    "drop everything",
)

CALENDAR_KEYWORDS: tuple[str, ...] = (
    "meeting",
    "calendar",
    "schedule",
    "tomorrow",
    "next week",
    "next month",
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
    "appointment",
    "event",
    "conference",
    "call",
    "zoom",
    "standup",
    "sync",
)

DATE_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\d{1,2}/\d{1,2}"),  # MM/DD
    re.compile(r"\d{1,2}-\d{1,2}"),  # MM-DD
    re.compile(r"\d{4}-\d{2}-\d{2}"),  # YYYY-MM-DD
    re.compile(r"(jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec)\s+\d{1,2}", re.I),
    re.compile(r"\bat\s+\d{1,2}:\d{2}"),
    re.compile(r"\d{1,2}:\d{2}"),
    re.compile(r"\b(am|pm)\b", re.I),
)

TIME_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\d{1,2}:\d{2}"),
    re.compile(r"\bat\s+\d{1,2}:\d{2}"),
    re.compile(r"\b\w+\s+at\s+\d{1,2}:\d{2}"),
    re.compile(r"\b\d{1,2}\s?(am|pm)\b", re.I),  # 3pm, 10 am
)


def _contains_keyword(text: str, keywords: tuple[str, ...]) -> bool:
    lowered = text.lower()
    return any(keyword in lowered for keyword in keywords)


def _matches_any(text: str, patterns: tuple[re.Pattern[str], ...]) -> bool:
    return any(pattern.search(text) for pattern in patterns)


def get_fallback_action_plan(context: EnrichedContext) -> ActionPlan:
    """Build an action plan from keywords and date/time patterns.

    Priority keywords are looked up in the current message and in the
    history. Calendar keywords and patterns are only matched against the
    current message. When nothing matches, both actions run with a low
    priority so that no potentially relevant message is dropped.

    Args:
        context: Enriched context of the message.

    Returns:
        Action plan. Never raises.
    """
    text = context.current_message.text or ""

    has_priority_keywords = _contains_keyword(text, PRIORITY_KEYWORDS) or any(
        _contains_keyword(msg.text, PRIORITY_KEYWORDS)
        for msg in context.previous_messages
    )
    has_calendar_keywords = _contains_keyword(text, CALENDAR_KEYWORDS)
    has_date_pattern = _matches_any(text, DATE_PATTERNS)
    has_time_pattern = _matches_any(text, TIME_PATTERNS)

    actions: list[str] = []
    priority = None

    if has_priority_keywords:
        actions.append(ActionName.PRIORITY.value)
        priority = "high"

    if has_calendar_keywords or has_date_pattern or has_time_pattern:
        actions.append(ActionName.CALENDAR.value)

    if not actions:
        actions = [ActionName.PRIORITY.value, ActionName.CALENDAR.value]
        priority = "low"

    logger.info(
        "Fallback action plan: actions=%s, priority=%s, "
        "priority_keywords=%s, calendar_keywords=%s, dates=%s, times=%s",
        actions,
        priority,
        has_priority_keywords,
        has_calendar_keywords,
        has_date_pattern,
        has_time_pattern,
    )

    return ActionPlan(
        actions=actions,
        priority=priority,
        reasoning=(
            f"Fallback detection: priority={has_priority_keywords}, "
            f"calendar={has_calendar_keywords}, dates={has_date_pattern}, "
            f"times={has_time_pattern}"
        ),
    )
