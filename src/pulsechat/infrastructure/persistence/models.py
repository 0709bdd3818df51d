"""SQLModel table definitions."""

from datetime import datetime, timezone

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel


class UserModel(SQLModel, table=True):
    """ユーザープロフィールテーブル"""

    __tablename__ = "users"

    id: int | None = Field(default=None, primary_key=True)
    user_id: str = Field(unique=True, index=True)
    display_name: str | None = None
    email: str | None = None
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ChatModel(SQLModel, table=True):
    """チャット / グループテーブル"""

    __tablename__ = "chats"

    id: int | None = Field(default=None, primary_key=True)
    chat_id: str = Field(index=True)
    collection_type: str  # "chats" | "groups"
    name: str | None = None
    member_ids: str = ""  # JSON format: ["u1", "u2"]
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        UniqueConstraint("chat_id", "collection_type", name="uq_chat_collection"),
    )


class MessageModel(SQLModel, table=True):
    """メッセージテーブル"""

    __tablename__ = "messages"

    id: int | None = Field(default=None, primary_key=True)
    message_id: str = Field(index=True)
    chat_id: str = Field(index=True)
    collection_type: str
    sender_id: str
    text: str = ""
    image_url: str | None = None
    status: str | None = None
    created_at: int = Field(index=True)  # エポックミリ秒

    __table_args__ = (
        UniqueConstraint(
            "message_id", "chat_id", "collection_type", name="uq_message_chat"
        ),
    )


class ProjectionDocumentModel(SQLModel, table=True):
    """プロジェクションドキュメントのヘッダテーブル

    collection: chat_priorities / user_priorities / chat_calendar / user_calendar
    """

    __tablename__ = "projection_documents"

    id: int | None = Field(default=None, primary_key=True)
    collection: str = Field(index=True)
    document_id: str = Field(index=True)
    last_updated: int  # エポックミリ秒

    __table_args__ = (
        UniqueConstraint("collection", "document_id", name="uq_projection_document"),
    )


class PriorityEntryModel(SQLModel, table=True):
    """優先度プロジェクションの要素テーブル（追記専用）"""

    __tablename__ = "priority_entries"

    id: int | None = Field(default=None, primary_key=True)
    collection: str = Field(index=True)
    document_id: str = Field(index=True)
    message_id: str
    level: str
    reason: str
    timestamp: int
    chat_id: str | None = None


class CalendarEntryModel(SQLModel, table=True):
    """カレンダープロジェクションの要素テーブル（追記専用）"""

    __tablename__ = "calendar_entries"

    id: int | None = Field(default=None, primary_key=True)
    collection: str = Field(index=True)
    document_id: str = Field(index=True)
    event_id: str = Field(index=True)
    title: str
    description: str | None = None
    date: int
    time: str | None = None
    participants: str | None = None  # JSON format: ["Alice", "Bob"]
    extracted_from: str
    chat_id: str | None = None


class ChatAnalysisModel(SQLModel, table=True):
    """チャット分析結果のキャッシュテーブル"""

    __tablename__ = "chat_analysis"

    id: int | None = Field(default=None, primary_key=True)
    chat_id: str = Field(index=True)
    collection_type: str
    summary: str | None = None
    action_items: str = "[]"  # JSON format
    decisions: str = "[]"  # JSON format
    message_count: int = 0
    message_count_at_summary: int | None = None
    message_count_at_action_items: int | None = None
    last_updated: int = 0  # エポックミリ秒

    __table_args__ = (
        UniqueConstraint("chat_id", "collection_type", name="uq_chat_analysis"),
    )
