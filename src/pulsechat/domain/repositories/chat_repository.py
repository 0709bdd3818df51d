"""Chat repository protocol."""

from typing import Protocol

from pulsechat.domain.entities import Chat, CollectionType


class ChatRepository(Protocol):
    """チャット / グループのリポジトリの抽象インターフェース"""

    async def save(self, chat: Chat) -> None:
        """チャットを保存する（既存の場合は更新）

        Args:
            chat: 保存するチャット
        """
        ...

    async def find_by_id(
        self, chat_id: str, collection_type: CollectionType
    ) -> Chat | None:
        """ID でチャットを検索する

        Args:
            chat_id: チャット ID
            collection_type: chats / groups

        Returns:
            チャット（存在しない場合は None）
        """
        ...
