"""LLM Base Classes and Suggestion Parsing"""

import json
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field


# Target sizes requested in the prompt; longer lists are truncated
MAX_TYPES = 3
MAX_SCOPES = 3
MAX_MESSAGES = 2

# JSON schema for OpenAI structured output
SUGGESTIONS_SCHEMA = {
    "type": "object",
    "properties": {
        "types": {"type": "array", "items": {"type": "string"}},
        "scopes": {"type": "array", "items": {"type": "string"}},
        "messages": {"type": "array", "items": {"type": "string"}},
    },
    "required": ["types", "scopes", "messages"],
}

_CODE_FENCE = re.compile(r'^```[a-zA-Z]*\s*\n?(.*?)\n?```$', re.DOTALL)


@dataclass
class SuggestionSet:
    """Ranked candidates for each part of a conventional commit."""
    types: list[str] = field(default_factory=list)
    scopes: list[str] = field(default_factory=list)
    messages: list[str] = field(default_factory=list)


def fallback_suggestions() -> SuggestionSet:
    """Suggestions used when the model cannot be reached or understood."""
    return SuggestionSet(
        types=["feat", "fix", "chore"],
        scopes=[],
        messages=["update code", "improve functionality"],
    )


@dataclass
class LLMResponse:
    """Structured response from any LLM provider."""
    content: str
    model: str = ""
    tokens_used: int = 0


class LLMError(Exception):
    """Raised when LLM operations fail."""
    pass


class LLMClient(ABC):
    """Abstract base for LLM clients."""

    @abstractmethod
    def generate(self, prompt: str) -> LLMResponse:
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        pass


def _clean_list(value, limit: int, lower: bool = False) -> list[str]:
    if not isinstance(value, list):
        return []
    seen = []
    for item in value:
        if not isinstance(item, str):
            continue
        item = item.strip()
        if lower:
            item = item.lower()
        if item and item not in seen:
            seen.append(item)
    return seen[:limit]


def parse_suggestions(content: str) -> SuggestionSet:
    """Parse a JSON model response into a SuggestionSet.

    Raises ValueError if the content is empty or not a JSON object. Missing
    or non-list keys become empty lists.
    """
    text = (content or "").strip()
    if not text:
        raise ValueError("Empty response")

    match = _CODE_FENCE.match(text)
    if match:
        text = match.group(1).strip()

    data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object, got {type(data).__name__}")

    return SuggestionSet(
        types=_clean_list(data.get("types"), MAX_TYPES, lower=True),
        scopes=_clean_list(data.get("scopes"), MAX_SCOPES),
        messages=_clean_list(data.get("messages"), MAX_MESSAGES),
    )
