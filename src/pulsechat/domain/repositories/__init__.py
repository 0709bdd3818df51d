"""Domain repositories."""

from pulsechat.domain.repositories.analysis_repository import (
    ChatAnalysisRepository,
)
from pulsechat.domain.repositories.calendar_repository import CalendarRepository
from pulsechat.domain.repositories.chat_repository import ChatRepository
from pulsechat.domain.repositories.message_repository import MessageRepository
from pulsechat.domain.repositories.priority_repository import PriorityRepository
from pulsechat.domain.repositories.user_repository import UserRepository

__all__ = [
    "CalendarRepository",
    "ChatAnalysisRepository",
    "ChatRepository",
    "MessageRepository",
    "PriorityRepository",
    "UserRepository",
]
