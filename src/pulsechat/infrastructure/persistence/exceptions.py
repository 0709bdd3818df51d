"""Persistence-related exceptions."""


class PersistenceError(Exception):
    """永続化レイヤーの基底例外"""


class DatabaseError(PersistenceError):
    """SQLite への書き込み失敗

    SQLAlchemy の例外を原因 (__cause__) として保持する。
    """
