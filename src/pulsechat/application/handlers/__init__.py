"""Event handlers package."""

from pulsechat.application.handlers.message_handler import NewMessageEventHandler

__all__ = [
    "NewMessageEventHandler",
]
