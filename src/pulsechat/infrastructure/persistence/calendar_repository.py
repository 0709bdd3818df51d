"""SQLite implementation of CalendarRepository."""

import json
from collections.abc import Callable
from contextlib import AbstractAsyncContextManager

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from pulsechat.domain.entities import CalendarEvent, ChatCalendar, UserCalendar
from pulsechat.domain.services import now_ms
from pulsechat.infrastructure.persistence.exceptions import DatabaseError
from pulsechat.infrastructure.persistence.models import CalendarEntryModel
from pulsechat.infrastructure.persistence.projection_store import (
    CHAT_CALENDAR,
    USER_CALENDAR,
    find_document,
    touch_document,
)


class SQLiteCalendarRepository:
    """SQLite 版 CalendarRepository 実装

    SQLitePriorityRepository と同じく、要素の INSERT とヘッダの upsert のみ行う。
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

    async def append_to_chat(self, chat_id: str, events: list[CalendarEvent]) -> None:
        """チャットのカレンダーに追記する

        Args:
            chat_id: チャット ID
            events: 追記するイベント

        Raises:
            DatabaseError: 書き込みに失敗した
        """
        await self._append(CHAT_CALENDAR, chat_id, events)

    async def append_to_user(self, user_id: str, events: list[CalendarEvent]) -> None:
        """ユーザーのカレンダーに追記する

        Args:
            user_id: ユーザー ID
            events: 追記するイベント（chat_id 付き）

        Raises:
            DatabaseError: 書き込みに失敗した
        """
        await self._append(USER_CALENDAR, user_id, events)

    async def find_by_chat(self, chat_id: str) -> ChatCalendar | None:
        """チャットのカレンダーを取得する（未作成の場合は None）"""
        loaded = await self._load(CHAT_CALENDAR, chat_id)
        if loaded is None:
            return None
        events, last_updated = loaded
        return ChatCalendar(chat_id=chat_id, events=events, last_updated=last_updated)

    async def find_by_user(self, user_id: str) -> UserCalendar | None:
        """ユーザーのカレンダーを取得する（未作成の場合は None）"""
        loaded = await self._load(USER_CALENDAR, user_id)
        if loaded is None:
            return None
        events, last_updated = loaded
        return UserCalendar(user_id=user_id, events=events, last_updated=last_updated)

    async def _append(
        self, collection: str, document_id: str, events: list[CalendarEvent]
    ) -> None:
        async with self._session_factory() as session:
            try:
                session.add_all(
                    [self._to_model(collection, document_id, e) for e in events]
                )
                await touch_document(session, collection, document_id, now_ms())
                await session.commit()
            except SQLAlchemyError as e:
                raise DatabaseError(
                    f"Failed to append to {collection}/{document_id}: {e}"
                ) from e

    async def _load(
        self, collection: str, document_id: str
    ) -> tuple[list[CalendarEvent], int] | None:
        async with self._session_factory() as session:
            document = await find_document(session, collection, document_id)
            if document is None:
                return None
            result = await session.exec(
                select(CalendarEntryModel)
                .where(
                    CalendarEntryModel.collection == collection,
                    CalendarEntryModel.document_id == document_id,
                )
                .order_by(CalendarEntryModel.id)  # type: ignore[arg-type]
            )
            events = [self._to_entity(m) for m in result.all()]
            return events, document.last_updated

    def _to_entity(self, model: CalendarEntryModel) -> CalendarEvent:
        participants = (
            json.loads(model.participants) if model.participants is not None else None
        )
        return CalendarEvent(
            id=model.event_id,
            title=model.title,
            date=model.date,
            extracted_from=model.extracted_from,
            description=model.description,
            time=model.time,
            participants=participants,
            chat_id=model.chat_id,
        )

    def _to_model(
        self, collection: str, document_id: str, entity: CalendarEvent
    ) -> CalendarEntryModel:
        participants = (
            json.dumps(entity.participants, ensure_ascii=False)
            if entity.participants is not None
            else None
        )
        return CalendarEntryModel(
            collection=collection,
            document_id=document_id,
            event_id=entity.id,
            title=entity.title,
            description=entity.description,
            date=entity.date,
            time=entity.time,
            participants=participants,
            extracted_from=entity.extracted_from,
            chat_id=entity.chat_id,
        )
