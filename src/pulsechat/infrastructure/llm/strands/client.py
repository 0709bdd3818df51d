"""strands-agents implementation of the AI client."""

import logging

from strands.models.litellm import LiteLLMModel

from pulsechat.domain.services.protocols import OutputT
from pulsechat.infrastructure.llm.exceptions import LLMOutputError
from pulsechat.infrastructure.llm.strands.exceptions import map_strands_exception
from pulsechat.infrastructure.llm.strands.factory import StrandsAgentFactory

logger = logging.getLogger(__name__)


class StrandsAIClient:
    """AIClient backed by a strands-agents Agent.

    The model is reused across requests. A fresh Agent is created for
    every call so that conversation state never leaks between messages.
    """

    def __init__(
        self,
        model: LiteLLMModel,
        factory: StrandsAgentFactory | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            model: LiteLLMModel instance to be reused across requests.
            factory: Agent factory (a default one is created if omitted).
        """
        self._model = model
        self._factory = factory or StrandsAgentFactory()

    async def generate(self, prompt: str, output_model: type[OutputT]) -> OutputT | None:
        """Generate structured output.

        Args:
            prompt: Prompt text.
            output_model: Pydantic model used as structured output schema.

        Returns:
            Parsed output, or None if the agent produced none.

        Raises:
            LLMError: The call failed or returned an unexpected type.
        """
        agent = self._factory.create_agent(self._model)

        logger.debug(
            "AI request: output_model=%s, prompt_length=%d",
            output_model.__name__,
            len(prompt),
        )

        try:
            result = await agent.invoke_async(
                prompt,
                structured_output_model=output_model,
            )
        except Exception as e:
            raise map_strands_exception(e) from e

        output = result.structured_output
        if output is None:
            logger.debug("AI response had no structured output")
            return None
        if not isinstance(output, output_model):
            raise LLMOutputError(
                f"Expected {output_model.__name__} but got {type(output).__name__}"
            )
        return output
