"""LLM-based action routing."""

import logging

from pulsechat.domain.entities import ActionName, ActionPlan, EnrichedContext
from pulsechat.domain.services.protocols import AIClient
from pulsechat.infrastructure.llm.models import ActionPlanOutput, ContextDepthOutput
from pulsechat.infrastructure.llm.templates import create_jinja_env

logger = logging.getLogger(__name__)

DEFAULT_CONTEXT_DEPTH = 5
ROUTING_FAILED_REASON = "AI routing failed"


class LLMActionRouter:
    """Decides which actions to run for a message using an AI model.

    Routing fails open: any error from the AI call produces an empty
    low-priority plan instead of propagating.
    """

    def __init__(self, client: AIClient) -> None:
        """Initialize the router.

        Args:
            client: AI client used for structured generation.
        """
        self._client = client
        self._jinja_env = create_jinja_env()
        self._routing_template = self._jinja_env.get_template("action_router.j2")
        self._depth_template = self._jinja_env.get_template("context_depth.j2")

    async def analyze_message_and_route(self, context: EnrichedContext) -> ActionPlan:
        """Build an action plan for the context.

        Args:
            context: Enriched context of the message.

        Returns:
            Action plan. Never raises.
        """
        message_id = context.current_message.message_id

        try:
            prompt = self.build_routing_prompt(context)
            logger.info(
                "Calling AI agent for routing decision: message_id=%s, has_context=%s",
                message_id,
                len(context.previous_messages) > 0,
            )
            output = await self._client.generate(prompt, ActionPlanOutput)
        except Exception as e:
            logger.error("Error in AI routing decision: message_id=%s, %s", message_id, e)
            return ActionPlan(actions=[], priority="low", reasoning=ROUTING_FAILED_REASON)

        if output is None:
            return ActionPlan(actions=[], priority="low")

        plan = ActionPlan(
            actions=self._validate_actions(output.actions, message_id),
            priority=output.priority,
            reasoning=output.reasoning,
        )
        logger.info(
            "AI routing decision: message_id=%s, actions=%s, priority=%s, reasoning=%s",
            message_id,
            plan.actions,
            plan.priority,
            plan.reasoning,
        )
        return plan

    async def determine_context_depth(self, context: EnrichedContext) -> int:
        """Estimate how many previous messages the current one needs.

        Args:
            context: Enriched context of the message.

        Returns:
            Depth between 0 and 10; 5 on error or missing output.
        """
        try:
            prompt = self._depth_template.render(current_message=context.current_message)
            output = await self._client.generate(prompt, ContextDepthOutput)
        except Exception as e:
            logger.error("Error determining context depth: %s", e)
            return DEFAULT_CONTEXT_DEPTH

        if output is None:
            return DEFAULT_CONTEXT_DEPTH

        logger.info(
            "AI determined context depth: message_id=%s, depth=%d, reason=%s",
            context.current_message.message_id,
            output.depth,
            output.reason,
        )
        return output.depth

    def build_routing_prompt(self, context: EnrichedContext) -> str:
        """Render the routing prompt.

        Args:
            context: Enriched context of the message.

        Returns:
            Prompt string.
        """
        return self._routing_template.render(
            previous_messages=context.previous_messages,
            current_message=context.current_message,
        )

    def _validate_actions(self, actions: list[str], message_id: str) -> list[str]:
        """Keep known action names only, without duplicates."""
        known = set(ActionName.values())
        valid: list[str] = []
        for action in actions:
            name = action.strip().lower()
            if name not in known:
                logger.warning(
                    "Dropping unknown action from AI plan: message_id=%s, action=%s",
                    message_id,
                    action,
                )
                continue
            if name not in valid:
                valid.append(name)
        return valid
