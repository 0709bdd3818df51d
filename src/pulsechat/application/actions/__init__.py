"""Action handlers."""

from pulsechat.application.actions.calendar import CalendarAction
from pulsechat.application.actions.priority import PriorityAction

__all__ = [
    "CalendarAction",
    "PriorityAction",
]
