"""SQLite implementation of MessageRepository."""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from pulsechat.domain.entities import ChatMessage, CollectionType
from pulsechat.infrastructure.persistence.exceptions import DatabaseError
from pulsechat.infrastructure.persistence.models import MessageModel


class SQLiteMessageRepository:
    """SQLite 版 MessageRepository 実装

    メッセージの保存と履歴取得を SQLite データベースに対して行う。
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

    async def save(self, message: ChatMessage) -> None:
        """メッセージを保存する（upsert）

        同一の message_id, chat_id, collection_type が存在する場合は更新する。

        Args:
            message: 保存するメッセージ

        Raises:
            DatabaseError: 書き込みに失敗した
        """
        async with self._session_factory() as session:
            try:
                result = await session.exec(
                    select(MessageModel).where(
                        MessageModel.message_id == message.id,
                        MessageModel.chat_id == message.chat_id,
                        MessageModel.collection_type == message.collection_type.value,
                    )
                )
                existing = result.first()

                if existing:
                    # 更新
                    existing.text = message.text
                    existing.image_url = message.image_url
                    existing.status = message.status
                    session.add(existing)
                else:
                    # 新規作成
                    session.add(self._to_model(message))

                await session.commit()
            except SQLAlchemyError as e:
                raise DatabaseError(f"Failed to save message {message.id}: {e}") from e

    async def find_before(
        self,
        chat_id: str,
        collection_type: CollectionType,
        before: int,
        limit: int = 5,
    ) -> list[ChatMessage]:
        """指定時刻より前のメッセージを取得する

        新しい順（created_at DESC）で返す。

        Args:
            chat_id: チャット ID
            collection_type: chats / groups
            before: この時刻（エポックミリ秒）より前のメッセージを取得
            limit: 取得する最大件数

        Returns:
            メッセージリスト（新しい順）
        """
        async with self._session_factory() as session:
            statement = (
                select(MessageModel)
                .where(
                    MessageModel.chat_id == chat_id,
                    MessageModel.collection_type == collection_type.value,
                    MessageModel.created_at < before,
                )
                .order_by(MessageModel.created_at.desc())  # type: ignore[attr-defined]
                .limit(limit)
            )
            result = await session.exec(statement)
            return [self._to_entity(m) for m in result.all()]

    async def find_recent(
        self,
        chat_id: str,
        collection_type: CollectionType,
        limit: int | None = None,
    ) -> list[ChatMessage]:
        """最新のメッセージを取得する

        新しい順に limit 件を取り出し、古い順に並べ替えて返す。

        Args:
            chat_id: チャット ID
            collection_type: chats / groups
            limit: 取得する最大件数（None の場合は全件）

        Returns:
            メッセージリスト（古い順）
        """
        async with self._session_factory() as session:
            statement = select(MessageModel).where(
                MessageModel.chat_id == chat_id,
                MessageModel.collection_type == collection_type.value,
            )
            if limit is None:
                statement = statement.order_by(
                    MessageModel.created_at.asc()  # type: ignore[attr-defined]
                )
                result = await session.exec(statement)
                return [self._to_entity(m) for m in result.all()]

            statement = statement.order_by(
                MessageModel.created_at.desc()  # type: ignore[attr-defined]
            ).limit(limit)
            result = await session.exec(statement)
            return [self._to_entity(m) for m in reversed(result.all())]

    def _to_entity(self, model: MessageModel) -> ChatMessage:
        return ChatMessage(
            id=model.message_id,
            chat_id=model.chat_id,
            collection_type=CollectionType(model.collection_type),
            sender_id=model.sender_id,
            text=model.text,
            created_at=model.created_at,
            image_url=model.image_url,
            status=model.status,
        )

    def _to_model(self, entity: ChatMessage) -> MessageModel:
        return MessageModel(
            message_id=entity.id,
            chat_id=entity.chat_id,
            collection_type=entity.collection_type.value,
            sender_id=entity.sender_id,
            text=entity.text,
            image_url=entity.image_url,
            status=entity.status,
            created_at=entity.created_at,
        )
