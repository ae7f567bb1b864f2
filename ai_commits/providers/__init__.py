"""AI Provider Package"""

from ai_commits.providers.base import (
    Provider,
    CatalogProvider,
    Invocation,
    ExecutionResult,
    ProviderError,
    GenerationError,
    UnknownProviderError,
    PLACEHOLDER_MODEL,
)
from ai_commits.providers.copilot import CopilotProvider
from ai_commits.providers.gemini import GeminiProvider
from ai_commits.providers.ollama import OllamaProvider
from ai_commits.providers.opencode import OpenCodeProvider
from ai_commits.providers.registry import PROVIDERS, PROVIDER_NAMES, get_provider, list_available, list_models
from ai_commits.providers.engine import execute

__all__ = [
    "Provider",
    "CatalogProvider",
    "Invocation",
    "ExecutionResult",
    "ProviderError",
    "GenerationError",
    "UnknownProviderError",
    "PLACEHOLDER_MODEL",
    "OllamaProvider",
    "OpenCodeProvider",
    "CopilotProvider",
    "GeminiProvider",
    "PROVIDERS",
    "PROVIDER_NAMES",
    "get_provider",
    "list_available",
    "list_models",
    "execute",
]
