"""User repository protocol."""

from typing import Protocol

from pulsechat.domain.entities import User


class UserRepository(Protocol):
    """ユーザープロフィールリポジトリの抽象インターフェース"""

    async def save(self, user: User) -> None:
        """ユーザーを保存する（既存の場合は更新）

        Args:
            user: 保存するユーザー
        """
        ...

    async def find_by_id(self, user_id: str) -> User | None:
        """ID でユーザーを検索する

        Args:
            user_id: ユーザー ID

        Returns:
            ユーザー（存在しない場合は None）
        """
        ...
