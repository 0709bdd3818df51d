"""Action plan and result entities."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal

PlanPriority = Literal["high", "medium", "low"]


class ActionName(Enum):
    """Names of the built-in actions."""

    PRIORITY = "priority"
    CALENDAR = "calendar"

    @classmethod
    def values(cls) -> list[str]:
        """All action names as plain strings."""
        return [member.value for member in cls]


@dataclass(frozen=True)
class ActionPlan:
    """Which actions to run for one message.

    Attributes:
        actions: Action names. Order is not significant for execution.
        priority: Overall priority hint of the message.
        reasoning: Why these actions were chosen.
    """

    actions: list[str] = field(default_factory=list)
    priority: PlanPriority | None = None
    reasoning: str | None = None


@dataclass(frozen=True)
class ActionResult:
    """Outcome of one executed action.

    Attributes:
        action_name: Name of the action.
        success: Whether the action finished without error.
        data: Action-specific result data.
        error: Error message when the action failed.
    """

    action_name: str
    success: bool
    data: dict[str, Any] | None = None
    error: str | None = None

    @classmethod
    def failure(cls, action_name: str, error: str) -> "ActionResult":
        """Create a failed result."""
        return cls(action_name=action_name, success=False, error=error)
