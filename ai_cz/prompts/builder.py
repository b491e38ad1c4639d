"""Prompt Builder - Construct the suggestion prompt for a git diff."""

from dataclasses import dataclass

from ai_cz import COMMIT_TYPE_NAMES
from ai_cz.llm.base import MAX_MESSAGES, MAX_SCOPES, MAX_TYPES

TRUNCATION_NOTE = "[diff truncated due to size]"


@dataclass
class PromptConfig:
    """Knobs that shape the prompt."""
    max_diff_chars: int = 60000
    num_types: int = MAX_TYPES
    num_scopes: int = MAX_SCOPES
    num_messages: int = MAX_MESSAGES


class PromptBuilder:
    """Builds the single instruction sent to the model."""

    def build(self, diff: str, config: PromptConfig | None = None) -> str:
        config = config or PromptConfig()
        sections = [
            self._build_task_section(config),
            self._build_diff_section(diff, config),
            self._build_format_section(config),
            self._build_guidelines_section(),
        ]
        return "\n\n".join(filter(None, sections))

    def _build_task_section(self, config: PromptConfig) -> str:
        return f"""Analyze the following git diff and suggest:
1. Top {config.num_types} most appropriate conventional commit types from: {', '.join(COMMIT_TYPE_NAMES)}
2. Top {config.num_scopes} most relevant scopes (component/module names, keep them short)
3. {config.num_messages} clear, concise commit messages (without type/scope prefix)"""

    def _build_diff_section(self, diff: str, config: PromptConfig) -> str:
        body = diff
        if len(body) > config.max_diff_chars:
            body = f"{body[:config.max_diff_chars]}\n{TRUNCATION_NOTE}"
        return f"Git diff:\n{body}"

    def _build_format_section(self, config: PromptConfig) -> str:
        types = ', '.join(f'"type{i}"' for i in range(1, config.num_types + 1))
        scopes = ', '.join(f'"scope{i}"' for i in range(1, config.num_scopes + 1))
        messages = ', '.join(f'"message{i}"' for i in range(1, config.num_messages + 1))
        return f"""Respond in JSON format:
{{
  "types": [{types}],
  "scopes": [{scopes}],
  "messages": [{messages}]
}}"""

    def _build_guidelines_section(self) -> str:
        return """Guidelines:
- Messages should be imperative mood, lowercase, no period
- Messages should be specific but concise
- Scopes should be short (1-2 words max)
- Focus on what changed and implementation details
- Message should explain the changes in a way that is easy to understand
- Respond with plain JSON only, no markdown code fences, so it can be parsed directly"""
