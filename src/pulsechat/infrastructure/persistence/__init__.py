"""Persistence layer."""

from pulsechat.infrastructure.persistence.analysis_repository import (
    SQLiteChatAnalysisRepository,
)
from pulsechat.infrastructure.persistence.calendar_repository import (
    SQLiteCalendarRepository,
)
from pulsechat.infrastructure.persistence.chat_repository import SQLiteChatRepository
from pulsechat.infrastructure.persistence.database import DatabaseManager
from pulsechat.infrastructure.persistence.exceptions import (
    DatabaseError,
    PersistenceError,
)
from pulsechat.infrastructure.persistence.message_repository import (
    SQLiteMessageRepository,
)
from pulsechat.infrastructure.persistence.priority_repository import (
    SQLitePriorityRepository,
)
from pulsechat.infrastructure.persistence.user_repository import SQLiteUserRepository

__all__ = [
    "DatabaseError",
    "DatabaseManager",
    "PersistenceError",
    "SQLiteCalendarRepository",
    "SQLiteChatAnalysisRepository",
    "SQLiteChatRepository",
    "SQLiteMessageRepository",
    "SQLitePriorityRepository",
    "SQLiteUserRepository",
]
