"""Process message use case."""

import logging
import time

from pulsechat.application.services import (
    DEFAULT_HISTORY_DEPTH,
    ActionExecutor,
    ContextFetcher,
)
from pulsechat.domain.entities import ActionPlan, EnrichedContext, ProcessMessageParams
from pulsechat.domain.services import ActionRouter, get_fallback_action_plan

logger = logging.getLogger(__name__)


class ProcessMessageUseCase:
    """Runs one message through context fetching, routing and actions.

    The message is never redelivered because of a failure here, so every
    error is logged and swallowed.
    """

    def __init__(
        self,
        context_fetcher: ContextFetcher,
        action_executor: ActionExecutor,
        action_router: ActionRouter | None = None,
        history_depth: int = DEFAULT_HISTORY_DEPTH,
    ) -> None:
        """Initialize the use case.

        Args:
            context_fetcher: Builds the enriched context.
            action_executor: Executes the action plan.
            action_router: AI router. When None, the rule-based
                fallback is always used.
            history_depth: Number of previous messages to fetch.
        """
        self._context_fetcher = context_fetcher
        self._action_executor = action_executor
        self._action_router = action_router
        self._history_depth = history_depth

    async def execute(self, params: ProcessMessageParams) -> None:
        """Execute the use case.

        Processing flow:
        1. Fetch enriched context
        2. Route (AI router, or fallback)
        3. Execute the plan's actions

        Args:
            params: The incoming message.
        """
        start = time.monotonic()
        logger.info(
            "Processing message %s in %s/%s",
            params.message_id,
            params.collection_type.value,
            params.chat_id,
        )

        try:
            # 1. Fetch enriched context
            context = await self._context_fetcher.fetch_enriched_context(
                params, history_depth=self._history_depth
            )

            # 2. Route
            plan = await self._route(context)
            logger.info(
                "Action plan for %s: actions=%s, priority=%s, reasoning=%s",
                params.message_id,
                plan.actions,
                plan.priority,
                plan.reasoning,
            )

            # 3. Execute
            if plan.actions:
                await self._action_executor.execute_action_plan(plan, context)
            else:
                logger.info("No actions to run for message %s", params.message_id)
        except Exception:
            logger.exception("Error processing message %s", params.message_id)
        finally:
            elapsed_ms = (time.monotonic() - start) * 1000
            logger.info(
                "Finished message %s in %.0f ms", params.message_id, elapsed_ms
            )

    async def _route(self, context: EnrichedContext) -> ActionPlan:
        if self._action_router is None:
            logger.info("AI routing unavailable, using fallback")
            return get_fallback_action_plan(context)

        try:
            return await self._action_router.analyze_message_and_route(context)
        except Exception:
            logger.exception("Action router failed, using fallback")
            return get_fallback_action_plan(context)
