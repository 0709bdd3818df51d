"""strands-agents infrastructure."""

from pulsechat.infrastructure.llm.strands.client import StrandsAIClient
from pulsechat.infrastructure.llm.strands.exceptions import map_strands_exception
from pulsechat.infrastructure.llm.strands.factory import StrandsAgentFactory

__all__ = [
    "StrandsAIClient",
    "StrandsAgentFactory",
    "map_strands_exception",
]
