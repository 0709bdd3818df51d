"""LLM integration."""

from pulsechat.infrastructure.llm.action_router import LLMActionRouter
from pulsechat.infrastructure.llm.calendar_extractor import LLMCalendarExtractor
from pulsechat.infrastructure.llm.chat_analyzer import LLMChatAnalyzer
from pulsechat.infrastructure.llm.exceptions import (
    LLMAuthenticationError,
    LLMError,
    LLMModelNotFoundError,
    LLMOutputError,
    LLMRateLimitError,
    LLMTimeoutError,
)
from pulsechat.infrastructure.llm.priority_detector import LLMPriorityDetector

__all__ = [
    "LLMActionRouter",
    "LLMAuthenticationError",
    "LLMCalendarExtractor",
    "LLMChatAnalyzer",
    "LLMError",
    "LLMModelNotFoundError",
    "LLMOutputError",
    "LLMPriorityDetector",
    "LLMRateLimitError",
    "LLMTimeoutError",
]
