"""Turn a diff into ranked commit suggestions and format the final message."""

import logging
from typing import Callable

from ai_cz import get_commit_type
from ai_cz.llm import LLMClient, LLMError, SuggestionSet, fallback_suggestions, get_client, parse_suggestions
from ai_cz.prompts import PromptBuilder, PromptConfig

logger = logging.getLogger(__name__)

ClientFactory = Callable[[str], LLMClient]


def format_commit_message(commit_type: str, scope: str, message: str) -> str:
    """Build ``type(scope): <emoji> message``; the scope part is omitted when empty."""
    found = get_commit_type(commit_type)
    emoji = found.emoji if found else ""
    scope_str = f"({scope})" if scope else ""
    return f"{commit_type}{scope_str}: {emoji} {message}"


class SuggestionPipeline:
    """One model request per diff, degrading to fixed suggestions on any failure.

    ``client_factory`` turns an API token into an LLMClient; tests pass a stub.
    """

    def __init__(self, client_factory: ClientFactory | None = None,
                 prompt_config: PromptConfig | None = None):
        self.client_factory = client_factory or get_client
        self.prompt_config = prompt_config or PromptConfig()
        self.last_error: str | None = None

    def suggest(self, diff: str, credential: str) -> SuggestionSet:
        self.last_error = None
        prompt = PromptBuilder().build(diff, self.prompt_config)
        try:
            client = self.client_factory(credential)
            response = client.generate(prompt)
            suggestions = parse_suggestions(response.content)
        except LLMError as e:
            return self._fallback(str(e))
        except ValueError as e:
            return self._fallback(f"Unparsable response: {e}")
        except Exception as e:
            return self._fallback(f"{type(e).__name__}: {e}")

        logger.debug("Suggestions: %s", suggestions)
        return suggestions

    def _fallback(self, reason: str) -> SuggestionSet:
        self.last_error = reason
        logger.info("Falling back to default suggestions: %s", reason)
        return fallback_suggestions()
