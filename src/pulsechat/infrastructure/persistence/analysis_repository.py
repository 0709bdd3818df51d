"""SQLite implementation of ChatAnalysisRepository."""

import json
from collections.abc import Callable
from contextlib import AbstractAsyncContextManager

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from pulsechat.domain.entities import (
    ActionItem,
    ChatAnalysis,
    CollectionType,
    Decision,
)
from pulsechat.infrastructure.persistence.exceptions import DatabaseError
from pulsechat.infrastructure.persistence.models import ChatAnalysisModel


class SQLiteChatAnalysisRepository:
    """SQLite 版 ChatAnalysisRepository 実装

    チャットごとに 1 行を持ち、アクションアイテムと決定事項は JSON で保存する。
    """

    def __init__(
        self,
        session_factory: Callable[[], AbstractAsyncContextManager[AsyncSession]],
    ) -> None:
        """初期化

        Args:
            session_factory: 非同期セッション生成関数
        """
        self._session_factory = session_factory

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
        async with self._session_factory() as session:
            result = await session.exec(
                select(ChatAnalysisModel).where(
                    ChatAnalysisModel.chat_id == chat_id,
                    ChatAnalysisModel.collection_type == collection_type.value,
                )
            )
            model = result.first()
            if model is None:
                return None
            return self._to_entity(model)

    async def save(self, analysis: ChatAnalysis) -> None:
        """分析結果を保存する（upsert）

        Args:
            analysis: 保存する分析結果

        Raises:
            DatabaseError: 書き込みに失敗した
        """
        async with self._session_factory() as session:
            try:
                result = await session.exec(
                    select(ChatAnalysisModel).where(
                        ChatAnalysisModel.chat_id == analysis.chat_id,
                        ChatAnalysisModel.collection_type
                        == analysis.collection_type.value,
                    )
                )
                existing = result.first()
                model = self._to_model(analysis)

                if existing:
                    existing.summary = model.summary
                    existing.action_items = model.action_items
                    existing.decisions = model.decisions
                    existing.message_count = model.message_count
                    existing.message_count_at_summary = model.message_count_at_summary
                    existing.message_count_at_action_items = (
                        model.message_count_at_action_items
                    )
                    existing.last_updated = model.last_updated
                    session.add(existing)
                else:
                    session.add(model)

                await session.commit()
            except SQLAlchemyError as e:
                raise DatabaseError(
                    f"Failed to save analysis of {analysis.chat_id}: {e}"
                ) from e

    def _to_entity(self, model: ChatAnalysisModel) -> ChatAnalysis:
        return ChatAnalysis(
            chat_id=model.chat_id,
            collection_type=CollectionType(model.collection_type),
            summary=model.summary,
            action_items=[
                ActionItem.from_dict(item) for item in json.loads(model.action_items)
            ],
            decisions=[Decision.from_dict(d) for d in json.loads(model.decisions)],
            message_count=model.message_count,
            message_count_at_summary=model.message_count_at_summary,
            message_count_at_action_items=model.message_count_at_action_items,
            last_updated=model.last_updated,
        )

    def _to_model(self, entity: ChatAnalysis) -> ChatAnalysisModel:
        return ChatAnalysisModel(
            chat_id=entity.chat_id,
            collection_type=entity.collection_type.value,
            summary=entity.summary,
            action_items=json.dumps([item.to_dict() for item in entity.action_items]),
            decisions=json.dumps([d.to_dict() for d in entity.decisions]),
            message_count=entity.message_count,
            message_count_at_summary=entity.message_count_at_summary,
            message_count_at_action_items=entity.message_count_at_action_items,
            last_updated=entity.last_updated,
        )
