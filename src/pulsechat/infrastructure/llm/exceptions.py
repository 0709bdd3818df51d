"""LLM-related exceptions."""


class LLMError(Exception):
    """Base exception for LLM-related errors."""


class LLMRateLimitError(LLMError):
    """Rate limit or quota exceeded error."""


class LLMAuthenticationError(LLMError):
    """Authentication error (invalid API key, etc.)."""


class LLMTimeoutError(LLMError):
    """Request timed out."""


class LLMModelNotFoundError(LLMError):
    """Requested model does not exist."""


class LLMOutputError(LLMError):
    """Structured output was missing or did not match the schema."""
