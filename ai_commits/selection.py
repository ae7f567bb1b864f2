"""Provider and Model Selection

Settles which provider and model one run uses. Explicit flags beat
configured defaults, which beat discovery; the interactive chooser is only
consulted when nothing else decides and the run is interactive.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Protocol

from ai_commits.config import Config, RunOptions
from ai_commits.output import debug
from ai_commits.providers import PROVIDER_NAMES, ProviderError, get_provider, list_available


class SelectionError(ProviderError):
    """Raised when no provider or model can be settled on."""
    pass


class MissingModelError(SelectionError):
    """Raised when a model is required but none is configured."""
    pass


class Chooser(Protocol):
    def choose(self, options: list[str], header: str) -> Optional[str]:
        ...

    def filter(self, options: list[str], placeholder: str, initial: str = "") -> Optional[str]:
        ...


@dataclass(frozen=True)
class ResolvedSelection:
    provider: str
    model: str = ""


def select_provider(
    explicit: str,
    configured: str,
    non_interactive: bool,
    chooser: Chooser,
    discover: Optional[Callable[[], list[str]]] = None,
) -> str:
    if explicit:
        provider = explicit.strip().lower()
        debug(f"Using provider from CLI: {provider}")
        return provider

    if configured:
        debug(f"Using default provider: {configured}")
        return configured

    available = (discover or list_available)()
    if not available:
        raise SelectionError(f"No AI CLI tools found ({', '.join(PROVIDER_NAMES)}).")

    if len(available) == 1:
        debug(f"Only one provider found, auto-selecting: {available[0]}")
        return available[0]

    if non_interactive:
        raise SelectionError(
            "Multiple AI providers found. Please specify one with '-p' in non-interactive mode."
        )

    picked = chooser.choose(available, header="Select AI Provider")
    if not picked:
        raise SelectionError("No provider selected.")
    return picked


def resolve_model(
    provider_name: str,
    explicit: str,
    configured: str,
    non_interactive: bool,
    chooser: Chooser,
) -> str:
    """Model for the provider; '' means the provider's own default."""
    provider = get_provider(provider_name)
    if provider is None or not provider.has_catalog:
        if explicit:
            debug(f"Ignoring model '{explicit}': '{provider_name}' has no model selection.")
        debug(f"No model selection for provider '{provider_name}'.")
        return ""

    if explicit:
        debug(f"Using model from CLI: {explicit}")
        return explicit

    model = configured
    if non_interactive:
        if not model:
            raise MissingModelError(
                f"No {provider.label} model specified. Please use '-m' or set "
                f"default_{provider.name}_model in non-interactive mode."
            )
        return model

    models = list(provider.list_models())
    if not models:
        debug(f"No {provider.name} models found, using '{model}'.")
        return model

    picked = chooser.filter(models, placeholder=f"Search {provider.name} models...", initial=model)
    return picked or model


def resolve_selection(options: RunOptions, config: Config, chooser: Chooser) -> ResolvedSelection:
    provider = select_provider(
        options.provider,
        config.default_provider,
        options.non_interactive,
        chooser,
    )
    model = resolve_model(
        provider,
        options.model,
        config.default_model_for(provider),
        options.non_interactive,
        chooser,
    )
    debug(f"Provider: {provider}")
    debug(f"Model: {model or 'Default'}")
    return ResolvedSelection(provider=provider, model=model)
