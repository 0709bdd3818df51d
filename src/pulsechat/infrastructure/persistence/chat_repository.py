"""SQLite implementation of ChatRepository."""

import json
from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from datetime import datetime, timezone

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from pulsechat.domain.entities import Chat, CollectionType
from pulsechat.infrastructure.persistence.models import ChatModel


class SQLiteChatRepository:
    """SQLite 版 ChatRepository 実装

    チャットとグループは collection_type で区別して保存する。
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

    async def save(self, chat: Chat) -> None:
        """チャットを保存する（upsert）

        Args:
            chat: 保存するチャット
        """
        async with self._session_factory() as session:
            result = await session.exec(
                select(ChatModel).where(
                    ChatModel.chat_id == chat.id,
                    ChatModel.collection_type == chat.collection_type.value,
                )
            )
            existing = result.first()

            if existing:
                existing.name = chat.name
                existing.member_ids = json.dumps(chat.member_ids)
                existing.updated_at = datetime.now(timezone.utc)
                session.add(existing)
            else:
                session.add(self._to_model(chat))

            await session.commit()

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
        async with self._session_factory() as session:
            statement = select(ChatModel).where(
                ChatModel.chat_id == chat_id,
                ChatModel.collection_type == collection_type.value,
            )
            result = await session.exec(statement)
            model = result.first()
            if model is None:
                return None
            return self._to_entity(model)

    def _to_entity(self, model: ChatModel) -> Chat:
        member_ids = json.loads(model.member_ids) if model.member_ids else []
        return Chat(
            id=model.chat_id,
            collection_type=CollectionType(model.collection_type),
            member_ids=member_ids,
            name=model.name,
        )

    def _to_model(self, entity: Chat) -> ChatModel:
        return ChatModel(
            chat_id=entity.id,
            collection_type=entity.collection_type.value,
            name=entity.name,
            member_ids=json.dumps(entity.member_ids),
        )
