"""Configuration Management Package"""

import json
import os
import sys
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Optional

from ai_commits.output import print_warning

# Files whose diffs are never worth sending to a model
DEFAULT_IGNORED_PATTERNS = [
    "*.lock",
    "**/package-lock.json",
    "**/yarn.lock",
    "**/pnpm-lock.yaml",
    "**/go.sum",
    "**/devenv.lock",
    "**/devenv.yaml",
    "*.svg",
    "*.min.js",
    "*.map",
]

PROVIDER_ENV_VAR = "AI_COMMIT_PROVIDER"


@dataclass
class Config:
    """User configuration with sensible defaults."""
    default_provider: str = ""
    default_ollama_model: str = "llama3"
    default_opencode_model: str = ""
    opencode_commit_agent: str = "commit"
    ignored_patterns: list[str] = field(default_factory=list)  # extends the built-in list
    brief: bool = False
    emoji: bool = False
    diff_limit: int = 0

    def default_model_for(self, provider: str) -> str:
        """Configured default model for a catalog-backed provider, or ''."""
        return getattr(self, f"default_{provider}_model", "") or ""

    @property
    def all_ignored_patterns(self) -> list[str]:
        patterns = list(DEFAULT_IGNORED_PATTERNS)
        for pattern in self.ignored_patterns:
            if pattern not in patterns:
                patterns.append(pattern)
        return patterns

    def validate(self) -> list[str]:
        """Validate config values and return list of warnings.

        Invalid values are replaced with defaults after warning.
        """
        warnings = []
        defaults = Config()

        for name in ("default_provider", "default_ollama_model", "default_opencode_model", "opencode_commit_agent"):
            value = getattr(self, name)
            if value is None:
                setattr(self, name, "")
            elif not isinstance(value, str):
                warnings.append(f"Invalid {name} '{value}', using '{getattr(defaults, name)}'")
                setattr(self, name, getattr(defaults, name))

        self.default_provider = self.default_provider.strip().lower()

        if not isinstance(self.ignored_patterns, list) or not all(isinstance(p, str) for p in self.ignored_patterns):
            warnings.append(f"Invalid ignored_patterns '{self.ignored_patterns}', expected a list of strings")
            self.ignored_patterns = []

        for name in ("brief", "emoji"):
            if not isinstance(getattr(self, name), bool):
                warnings.append(f"Invalid {name} '{getattr(self, name)}', using false")
                setattr(self, name, False)

        if isinstance(self.diff_limit, bool) or not isinstance(self.diff_limit, int) or self.diff_limit < 0:
            warnings.append(f"Invalid diff_limit '{self.diff_limit}', using {defaults.diff_limit}")
            self.diff_limit = defaults.diff_limit

        return warnings

    @classmethod
    def from_dict(cls, data: dict) -> 'Config':
        valid_keys = {f.name for f in fields(cls)}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        config = cls(**filtered)
        for warning in config.validate():
            print(f"Config warning: {warning}", file=sys.stderr)
        return config


@dataclass(frozen=True)
class RunOptions:
    """Everything one invocation needs, settled before the pipeline starts.

    provider and model hold only what was passed on the command line;
    configured defaults stay on Config so selection can tell them apart.
    """
    provider: str = ""
    model: str = ""
    non_interactive: bool = False
    brief: bool = False
    emoji: bool = False
    diff_limit: int = 0
    output: Optional[str] = None
    verbose: bool = False

    @classmethod
    def from_args(cls, args, config: Config) -> 'RunOptions':
        limit = getattr(args, 'limit', None)
        return cls(
            provider=args.provider or "",
            model=args.model or "",
            non_interactive=args.non_interactive,
            brief=getattr(args, 'brief', False) or config.brief,
            emoji=getattr(args, 'emoji', False) or config.emoji,
            diff_limit=config.diff_limit if limit is None else limit,
            output=args.output,
            verbose=args.verbose,
        )


class ConfigManager:
    """Loads configuration from the first file found."""

    CONFIG_FILENAME = ".aicommitrc"

    def __init__(self):
        self._config: Optional[Config] = None
        self._config_path: Optional[Path] = None

    @classmethod
    def search_paths(cls) -> list[Path]:
        return [
            Path.cwd() / cls.CONFIG_FILENAME,
            Path.home() / ".config" / "ai-commit" / "config.json",
        ]

    def load(self) -> Config:
        if self._config is not None:
            return self._config

        config = Config()
        for path in self.search_paths():
            if path.exists():
                config = self._load_from_file(path)
                self._config_path = path
                break

        env_provider = os.environ.get(PROVIDER_ENV_VAR)
        if env_provider:
            config.default_provider = env_provider.strip().lower()

        self._config = config
        return self._config

    def _load_from_file(self, path: Path) -> Config:
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError("expected a JSON object")
            return Config.from_dict(data)
        except (json.JSONDecodeError, ValueError, OSError) as e:
            print_warning(f"Could not load {path}: {e}")
            return Config()

    def get_config_path(self) -> Optional[Path]:
        return self._config_path


_manager = ConfigManager()


def load_config() -> Config:
    return _manager.load()


def get_config_path() -> Optional[Path]:
    return _manager.get_config_path()


__all__ = [
    "Config",
    "ConfigManager",
    "RunOptions",
    "load_config",
    "get_config_path",
    "DEFAULT_IGNORED_PATTERNS",
    "PROVIDER_ENV_VAR",
]
