"""Chat analysis repository protocol."""

from typing import Protocol

from pulsechat.domain.entities import ChatAnalysis, CollectionType


class ChatAnalysisRepository(Protocol):
    """チャット分析結果キャッシュの抽象インターフェース"""

    async def find_by_chat(
        self, chat_id: str, collection_type: CollectionType
    ) -> ChatAnalysis | None:
        """チャットの分析結果を取得する

        Args:
            chat_id: チャット ID
            collection_type: chats / groups

        Returns:
            分析結果（未分析の場合は None）
        """
        ...

    async def save(self, analysis: ChatAnalysis) -> None:
        """分析結果を保存する（upsert）

        Args:
            analysis: 保存する分析結果
        """
        ...
