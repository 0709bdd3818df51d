"""Use cases."""

from pulsechat.application.use_cases.analyze_chat import AnalyzeChatUseCase
from pulsechat.application.use_cases.process_message import ProcessMessageUseCase

__all__ = [
    "AnalyzeChatUseCase",
    "ProcessMessageUseCase",
]
