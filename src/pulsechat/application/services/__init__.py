"""Application services."""

from pulsechat.application.services.action_executor import ActionExecutor
from pulsechat.application.services.action_registry import (
    ActionRegistry,
    create_action_registry,
)
from pulsechat.application.services.context_fetcher import (
    DEFAULT_HISTORY_DEPTH,
    ContextFetcher,
)

__all__ = [
    "ActionExecutor",
    "ActionRegistry",
    "ContextFetcher",
    "DEFAULT_HISTORY_DEPTH",
    "create_action_registry",
]
