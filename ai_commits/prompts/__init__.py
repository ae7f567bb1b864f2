"""Prompt Construction Package"""

from ai_commits.prompts.builder import (
    Prompt,
    PromptBuilder,
    PromptModes,
    compose,
    COMMIT_RULES,
    RELEASE_RULES,
    COMMIT_TRIGGER,
    RELEASE_TRIGGER,
    MODE_RULES,
    SEGMENT_SEPARATOR,
)

__all__ = [
    "Prompt",
    "PromptBuilder",
    "PromptModes",
    "compose",
    "COMMIT_RULES",
    "RELEASE_RULES",
    "COMMIT_TRIGGER",
    "RELEASE_TRIGGER",
    "MODE_RULES",
    "SEGMENT_SEPARATOR",
]
