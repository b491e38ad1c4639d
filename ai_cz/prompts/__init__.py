"""Prompt Construction Package"""

from ai_cz.prompts.builder import PromptBuilder, PromptConfig, TRUNCATION_NOTE

__all__ = ["PromptBuilder", "PromptConfig", "TRUNCATION_NOTE"]
