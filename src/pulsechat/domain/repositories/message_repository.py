"""Message repository protocol."""

from typing import Protocol

from pulsechat.domain.entities import ChatMessage, CollectionType


class MessageRepository(Protocol):
    """メッセージリポジトリの抽象インターフェース"""

    async def save(self, message: ChatMessage) -> None:
        """メッセージを保存する

        同一の message_id, chat_id, collection_type のメッセージが
        既に存在する場合は更新する。

        Args:
            message: 保存するメッセージ
        """
        ...

    async def find_before(
        self,
        chat_id: str,
        collection_type: CollectionType,
        before: int,
        limit: int = 5,
    ) -> list[ChatMessage]:
        """指定時刻より前のメッセージを取得する

        Args:
            chat_id: チャット ID
            collection_type: chats / groups
            before: この時刻（エポックミリ秒）より前のメッセージを取得
            limit: 取得する最大件数

        Returns:
            メッセージリスト（新しい順）
        """
        ...

    async def find_recent(
        self,
        chat_id: str,
        collection_type: CollectionType,
        limit: int | None = None,
    ) -> list[ChatMessage]:
        """最新のメッセージを取得する

        Args:
            chat_id: チャット ID
            collection_type: chats / groups
            limit: 取得する最大件数（None の場合は全件）

        Returns:
            メッセージリスト（古い順）
        """
        ...
