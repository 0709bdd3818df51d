"""Registry of action handlers."""

import logging

from pulsechat.domain.services import ActionHandler

logger = logging.getLogger(__name__)


class ActionRegistry:
    """Maps action names to their handlers."""

    def __init__(self) -> None:
        self._handlers: dict[str, ActionHandler] = {}

    def register(self, handler: ActionHandler) -> None:
        """Register a handler under its name.

        A handler registered under an existing name replaces it.
        """
        if handler.name in self._handlers:
            logger.warning("Replacing action handler: %s", handler.name)
        self._handlers[handler.name] = handler

    def get(self, name: str) -> ActionHandler | None:
        return self._handlers.get(name)

    def has(self, name: str) -> bool:
        return name in self._handlers

    def names(self) -> list[str]:
        return list(self._handlers)


def create_action_registry(*handlers: ActionHandler) -> ActionRegistry:
    """Build a registry holding the given handlers."""
    registry = ActionRegistry()
    for handler in handlers:
        registry.register(handler)
    return registry
