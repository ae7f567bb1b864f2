"""Ollama Provider for Local Models"""

from typing import Optional

from ai_commits.prompts import Prompt
from ai_commits.providers.base import CatalogProvider, Invocation


class OllamaProvider(CatalogProvider):
    """Prompt piped to `ollama run MODEL`. Models come from `ollama list`."""

    name = "ollama"
    label = "Ollama"
    command = "ollama"
    catalog_argv = ("ollama", "list")
    catalog_header_lines = 1  # NAME  ID  SIZE  MODIFIED

    def parse_catalog_line(self, line: str) -> str:
        return line.split()[0]

    def build_invocation(self, prompt: Prompt, model: str = "", agent: Optional[str] = None) -> Invocation:
        return Invocation(argv=(self.command, "run", model), stdin=prompt.text)
