"""SQLite implementation of PriorityRepository."""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from pulsechat.domain.entities import ChatPriorities, Priority, UserPriorities
from pulsechat.domain.services import now_ms
from pulsechat.infrastructure.persistence.exceptions import DatabaseError
from pulsechat.infrastructure.persistence.models import PriorityEntryModel
from pulsechat.infrastructure.persistence.projection_store import (
    CHAT_PRIORITIES,
    USER_PRIORITIES,
    find_document,
    touch_document,
)


class SQLitePriorityRepository:
    """SQLite 版 PriorityRepository 実装

    各要素は 1 行として INSERT し、ヘッダは upsert する。
    既存の要素は読み込まない。
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

    async def append_to_chat(self, chat_id: str, priorities: list[Priority]) -> None:
        """チャットの優先度プロジェクションに追記する

        Args:
            chat_id: チャット ID
            priorities: 追記する優先度

        Raises:
            DatabaseError: 書き込みに失敗した
        """
        await self._append(CHAT_PRIORITIES, chat_id, priorities)

    async def append_to_user(self, user_id: str, priorities: list[Priority]) -> None:
        """ユーザーの優先度プロジェクションに追記する

        Args:
            user_id: ユーザー ID
            priorities: 追記する優先度（chat_id 付き）

        Raises:
            DatabaseError: 書き込みに失敗した
        """
        await self._append(USER_PRIORITIES, user_id, priorities)

    async def find_by_chat(self, chat_id: str) -> ChatPriorities | None:
        """チャットの優先度プロジェクションを取得する

        Args:
            chat_id: チャット ID

        Returns:
            プロジェクション（未作成の場合は None）
        """
        loaded = await self._load(CHAT_PRIORITIES, chat_id)
        if loaded is None:
            return None
        priorities, last_updated = loaded
        return ChatPriorities(
            chat_id=chat_id, priorities=priorities, last_updated=last_updated
        )

    async def find_by_user(self, user_id: str) -> UserPriorities | None:
        """ユーザーの優先度プロジェクションを取得する

        Args:
            user_id: ユーザー ID

        Returns:
            プロジェクション（未作成の場合は None）
        """
        loaded = await self._load(USER_PRIORITIES, user_id)
        if loaded is None:
            return None
        priorities, last_updated = loaded
        return UserPriorities(
            user_id=user_id, priorities=priorities, last_updated=last_updated
        )

    async def _append(
        self, collection: str, document_id: str, priorities: list[Priority]
    ) -> None:
        async with self._session_factory() as session:
            try:
                session.add_all(
                    [self._to_model(collection, document_id, p) for p in priorities]
                )
                await touch_document(session, collection, document_id, now_ms())
                await session.commit()
            except SQLAlchemyError as e:
                raise DatabaseError(
                    f"Failed to append to {collection}/{document_id}: {e}"
                ) from e

    async def _load(
        self, collection: str, document_id: str
    ) -> tuple[list[Priority], int] | None:
        async with self._session_factory() as session:
            document = await find_document(session, collection, document_id)
            if document is None:
                return None
            result = await session.exec(
                select(PriorityEntryModel)
                .where(
                    PriorityEntryModel.collection == collection,
                    PriorityEntryModel.document_id == document_id,
                )
                .order_by(PriorityEntryModel.id)  # type: ignore[arg-type]
            )
            priorities = [self._to_entity(m) for m in result.all()]
            return priorities, document.last_updated

    def _to_entity(self, model: PriorityEntryModel) -> Priority:
        return Priority(
            message_id=model.message_id,
            level=model.level,  # type: ignore[arg-type]
            reason=model.reason,
            timestamp=model.timestamp,
            chat_id=model.chat_id,
        )

    def _to_model(
        self, collection: str, document_id: str, entity: Priority
    ) -> PriorityEntryModel:
        return PriorityEntryModel(
            collection=collection,
            document_id=document_id,
            message_id=entity.message_id,
            level=entity.level,
            reason=entity.reason,
            timestamp=entity.timestamp,
            chat_id=entity.chat_id,
        )
