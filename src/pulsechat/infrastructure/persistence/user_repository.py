"""SQLite implementation of UserRepository."""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from datetime import datetime, timezone

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from pulsechat.domain.entities import User
from pulsechat.infrastructure.persistence.models import UserModel


class SQLiteUserRepository:
    """SQLite 版 UserRepository 実装

    ユーザープロフィールの保存・取得を SQLite データベースに対して行う。
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

    async def save(self, user: User) -> None:
        """ユーザーを保存する（upsert）

        Args:
            user: 保存するユーザー
        """
        async with self._session_factory() as session:
            result = await session.exec(
                select(UserModel).where(UserModel.user_id == user.id)
            )
            existing = result.first()

            if existing:
                # 更新
                existing.display_name = user.display_name
                existing.email = user.email
                existing.updated_at = datetime.now(timezone.utc)
                session.add(existing)
            else:
                # 新規作成
                session.add(self._to_model(user))

            await session.commit()

    async def find_by_id(self, user_id: str) -> User | None:
        """ID でユーザーを検索する

        Args:
            user_id: ユーザー ID

        Returns:
            ユーザー（存在しない場合は None）
        """
        async with self._session_factory() as session:
            statement = select(UserModel).where(UserModel.user_id == user_id)
            result = await session.exec(statement)
            model = result.first()
            if model is None:
                return None
            return self._to_entity(model)

    def _to_entity(self, model: UserModel) -> User:
        return User(
            id=model.user_id,
            display_name=model.display_name,
            email=model.email,
        )

    def _to_model(self, entity: User) -> UserModel:
        return UserModel(
            user_id=entity.id,
            display_name=entity.display_name,
            email=entity.email,
        )
