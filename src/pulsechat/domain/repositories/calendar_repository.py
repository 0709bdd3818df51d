"""Calendar projection repository protocol."""

from typing import Protocol

from pulsechat.domain.entities import CalendarEvent, ChatCalendar, UserCalendar


class CalendarRepository(Protocol):
    """カレンダープロジェクションのリポジトリ

    PriorityRepository と同じく追記専用。
    """

    async def append_to_chat(self, chat_id: str, events: list[CalendarEvent]) -> None:
        """チャットのカレンダーに追記する（無ければ作成）"""
        ...

    async def append_to_user(self, user_id: str, events: list[CalendarEvent]) -> None:
        """ユーザーのカレンダーに追記する（無ければ作成）"""
        ...

    async def find_by_chat(self, chat_id: str) -> ChatCalendar | None:
        """チャットのカレンダーを取得する（未作成なら None）"""
        ...

    async def find_by_user(self, user_id: str) -> UserCalendar | None:
        """ユーザーのカレンダーを取得する（未作成なら None）"""
        ...
