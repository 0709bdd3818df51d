"""Shared helpers for append-only projection documents."""

from sqlalchemy import func
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from pulsechat.infrastructure.persistence.models import ProjectionDocumentModel

CHAT_PRIORITIES = "chat_priorities"
USER_PRIORITIES = "user_priorities"
CHAT_CALENDAR = "chat_calendar"
USER_CALENDAR = "user_calendar"


async def touch_document(
    session: AsyncSession, collection: str, document_id: str, last_updated: int
) -> None:
    """プロジェクションドキュメントのヘッダを作成または更新する

    既存の内容を読まずに 1 文で upsert する。
    last_updated は既存値より小さくならない。

    Args:
        session: 非同期セッション（同じトランザクションで実行し、
            commit は呼び出し側で行う）
        collection: コレクション名
        document_id: ドキュメント ID（chat_id / user_id）
        last_updated: 更新時刻（エポックミリ秒）
    """
    stmt = sqlite_insert(ProjectionDocumentModel).values(
        collection=collection,
        document_id=document_id,
        last_updated=last_updated,
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=["collection", "document_id"],
        set_={
            "last_updated": func.max(
                ProjectionDocumentModel.last_updated, stmt.excluded.last_updated
            )
        },
    )
    connection = await session.connection()
    await connection.execute(stmt)


async def find_document(
    session: AsyncSession, collection: str, document_id: str
) -> ProjectionDocumentModel | None:
    """プロジェクションドキュメントのヘッダを取得する

    Returns:
        ヘッダ（未作成の場合は None）
    """
    result = await session.exec(
        select(ProjectionDocumentModel).where(
            ProjectionDocumentModel.collection == collection,
            ProjectionDocumentModel.document_id == document_id,
        )
    )
    return result.first()
