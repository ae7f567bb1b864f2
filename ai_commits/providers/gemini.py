"""Gemini CLI Provider"""

from typing import Optional

from ai_commits.prompts import Prompt
from ai_commits.providers.base import Provider, Invocation


class GeminiProvider(Provider):
    """Prompt piped to `gemini` on stdin. No model selection."""

    name = "gemini"
    label = "Gemini"
    command = "gemini"

    def build_invocation(self, prompt: Prompt, model: str = "", agent: Optional[str] = None) -> Invocation:
        return Invocation(argv=(self.command,), stdin=prompt.text)
