"""GitHub Copilot CLI Provider"""

from typing import Optional

from ai_commits.prompts import Prompt
from ai_commits.providers.base import Provider, Invocation


class CopilotProvider(Provider):
    """Prompt passed with -p, silent mode. No model selection."""

    name = "copilot"
    label = "Copilot"
    command = "copilot"

    def build_invocation(self, prompt: Prompt, model: str = "", agent: Optional[str] = None) -> Invocation:
        return Invocation(argv=(self.command, "-s", "-p", prompt.text))
