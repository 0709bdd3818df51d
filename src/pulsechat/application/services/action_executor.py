"""Runs the actions of a plan concurrently."""

import asyncio
import logging
from typing import Any

from pulsechat.application.services.action_registry import ActionRegistry
from pulsechat.domain.entities import ActionPlan, ActionResult, EnrichedContext

logger = logging.getLogger(__name__)


class ActionExecutor:
    """Executes action plans against an ActionRegistry.

    One failing action never affects the others, and the returned
    results line up with ``plan.actions``.
    """

    def __init__(self, registry: ActionRegistry) -> None:
        """Initialize the executor.

        Args:
            registry: Registry to resolve action names against.
        """
        self._registry = registry

    async def execute_action_plan(
        self, plan: ActionPlan, context: EnrichedContext
    ) -> list[ActionResult]:
        """Execute every action of the plan.

        Args:
            plan: Action plan to execute.
            context: Enriched context passed to each handler.

        Returns:
            One result per action, in plan order. Never raises.
        """
        if not plan.actions:
            return []

        metadata: dict[str, Any] = {"reasoning": plan.reasoning}
        outcomes = await asyncio.gather(
            *(self._run(name, context, metadata) for name in plan.actions),
            return_exceptions=True,
        )

        results: list[ActionResult] = []
        for name, outcome in zip(plan.actions, outcomes):
            if isinstance(outcome, BaseException):
                logger.error("Action %s raised: %s", name, outcome)
                results.append(ActionResult.failure(name, str(outcome)))
            else:
                results.append(outcome)

        succeeded = sum(1 for result in results if result.success)
        logger.info(
            "Executed %d actions for message %s: %d succeeded, %d failed",
            len(results),
            context.current_message.message_id,
            succeeded,
            len(results) - succeeded,
        )
        for result in results:
            if not result.success:
                logger.warning(
                    "Action %s failed: %s", result.action_name, result.error
                )

        return results

    async def _run(
        self, name: str, context: EnrichedContext, metadata: dict[str, Any]
    ) -> ActionResult:
        handler = self._registry.get(name)
        if handler is None:
            return ActionResult.failure(name, f"Unknown action: {name}")
        return await handler.handle(context, metadata)
