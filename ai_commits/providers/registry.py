"""Provider Registry

The supported providers, in the order they are offered and auto-detected.
"""

from typing import Iterator, Optional

from ai_commits.providers.base import Provider
from ai_commits.providers.copilot import CopilotProvider
from ai_commits.providers.gemini import GeminiProvider
from ai_commits.providers.ollama import OllamaProvider
from ai_commits.providers.opencode import OpenCodeProvider

PROVIDERS: dict[str, Provider] = {
    provider.name: provider
    for provider in (OllamaProvider(), OpenCodeProvider(), CopilotProvider(), GeminiProvider())
}

PROVIDER_NAMES = list(PROVIDERS)


def get_provider(name: str) -> Optional[Provider]:
    return PROVIDERS.get(name)


def list_available() -> list[str]:
    """Names of the providers whose command is installed, in priority order."""
    return [name for name, provider in PROVIDERS.items() if provider.is_available()]


def list_models(name: str) -> Iterator[str]:
    """Models a provider offers. Unknown providers offer none."""
    provider = get_provider(name)
    if provider is None:
        return iter(())
    return provider.list_models()
