"""CLI Commands"""

import os
import sys

from ai_commits.config import load_config, get_config_path, ConfigManager, PROVIDER_ENV_VAR
from ai_commits.output import bold, dim, info, print_error
from ai_commits.providers import PROVIDER_NAMES, get_provider, list_available


def list_providers() -> int:
    """Print installed providers, one per line."""
    for name in list_available():
        print(name)
    return 0


def list_models(provider_name: str) -> int:
    """Print a provider's models, one per line."""
    name = provider_name.strip().lower()
    provider = get_provider(name)
    if provider is None:
        print_error(f"Unknown provider '{provider_name}'. Use one of: {', '.join(PROVIDER_NAMES)}")
        return 1
    for model in provider.list_models():
        print(model)
    return 0


def display_config() -> int:
    """Display current configuration."""
    config = load_config()
    config_path = get_config_path()
    out = sys.stderr

    print(f"\n{bold('Current Configuration')}\n", file=out)

    if config_path:
        print(f"  {dim('Loaded from:')} {config_path}", file=out)
    else:
        print(f"  {dim('Loaded from:')} defaults (no config file found)", file=out)

    env_provider = os.environ.get(PROVIDER_ENV_VAR)
    if env_provider:
        print(f"  {dim('Environment overrides:')}", file=out)
        print(f"    {PROVIDER_ENV_VAR}={env_provider}", file=out)

    print(file=out)
    print(f"  {bold('Settings:')}", file=out)
    print(f"    default_provider:       {info(config.default_provider or 'auto')}", file=out)
    print(f"    default_ollama_model:   {info(config.default_ollama_model or '(none)')}", file=out)
    print(f"    default_opencode_model: {info(config.default_opencode_model or '(none)')}", file=out)
    print(f"    opencode_commit_agent:  {info(config.opencode_commit_agent or '(none)')}", file=out)
    print(f"    brief:                  {info(str(config.brief).lower())}", file=out)
    print(f"    emoji:                  {info(str(config.emoji).lower())}", file=out)
    print(f"    diff_limit:             {info(str(config.diff_limit) if config.diff_limit else 'unlimited')}", file=out)
    print(f"    ignored_patterns:       {info(' '.join(config.all_ignored_patterns))}", file=out)

    print(f"\n  {dim('Config locations:')}", file=out)
    for path in ConfigManager.search_paths():
        print(f"    {path}", file=out)
    print(file=out)

    return 0


def run_install_completion(prog: str) -> int:
    """Install shell tab completion."""
    shell = os.environ.get('SHELL', '')
    out = sys.stderr

    print(f"\n{bold('Tab Completion Setup')}\n", file=out)

    line = f'eval "$(register-python-argcomplete {prog})"'
    if 'zsh' in shell or 'bash' in shell:
        rc_file = os.path.expanduser('~/.zshrc' if 'zsh' in shell else '~/.bashrc')
        print(f"Add this line to {dim(rc_file)}:\n", file=out)
        print(f"  {line}\n", file=out)
        print(f"Then run: {dim(f'source {rc_file}')}", file=out)
    else:
        print("Run one of these based on your shell:\n", file=out)
        print(f"  {dim('# Bash/Zsh')}", file=out)
        print(f"  {line}\n", file=out)
        print(f"  {dim('# Fish')}", file=out)
        print(f"  register-python-argcomplete --shell fish {prog} | source", file=out)

    print(f"\n{dim('After setup, press TAB to autocomplete flags.')}", file=out)
    return 0
