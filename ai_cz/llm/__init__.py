"""LLM Client Package"""

from ai_cz.llm.base import (
    LLMClient,
    LLMResponse,
    LLMError,
    SuggestionSet,
    SUGGESTIONS_SCHEMA,
    fallback_suggestions,
    parse_suggestions,
)
from ai_cz.llm.openai_client import OpenAIClient


def get_client(api_key: str, model: str | None = None, temperature: float | None = None) -> LLMClient:
    """Build the LLM client for a token."""
    return OpenAIClient(api_key=api_key, model=model, temperature=temperature)


__all__ = [
    "LLMClient",
    "LLMResponse",
    "LLMError",
    "OpenAIClient",
    "SuggestionSet",
    "SUGGESTIONS_SCHEMA",
    "fallback_suggestions",
    "get_client",
    "parse_suggestions",
]
