"""Priority projection repository protocol."""

from typing import Protocol

from pulsechat.domain.entities import ChatPriorities, Priority, UserPriorities


class PriorityRepository(Protocol):
    """優先度プロジェクションのリポジトリ

    書き込みはすべて追記（merge + array-union）であり、
    既存の内容を読まずに行う。同一要素を複数回追記した場合は
    その回数だけ保持される（重複排除しない）。
    """

    async def append_to_chat(self, chat_id: str, priorities: list[Priority]) -> None:
        """チャットのプロジェクションに追記する（無ければ作成）"""
        ...

    async def append_to_user(self, user_id: str, priorities: list[Priority]) -> None:
        """ユーザーのプロジェクションに追記する（無ければ作成）"""
        ...

    async def find_by_chat(self, chat_id: str) -> ChatPriorities | None:
        """チャットのプロジェクションを取得する（未作成なら None）"""
        ...

    async def find_by_user(self, user_id: str) -> UserPriorities | None:
        """ユーザーのプロジェクションを取得する（未作成なら None）"""
        ...
