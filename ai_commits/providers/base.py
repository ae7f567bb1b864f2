"""Provider Base Classes and Shared Code"""

import shutil
import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterator, Optional

from ai_commits.output import debug
from ai_commits.prompts import Prompt

# Listed for providers that have no notion of a model
PLACEHOLDER_MODEL = "(default)"


class ProviderError(Exception):
    """Base for every failure that ends a run after content was prepared."""
    pass


class GenerationError(ProviderError):
    """Raised when a provider produced nothing usable."""
    pass


class UnknownProviderError(GenerationError):
    """Raised when asked to run a provider that isn't registered."""
    pass


@dataclass(frozen=True)
class Invocation:
    """A command line plus what to feed it on stdin."""
    argv: tuple[str, ...]
    stdin: Optional[str] = None


@dataclass
class ExecutionResult:
    """Raw output of one provider run."""
    stdout: str
    stderr: str = ""
    returncode: int = 0

    @property
    def succeeded(self) -> bool:
        # Exit status is not consulted: only blank output is a failure
        return bool(self.stdout.strip())


class Provider(ABC):
    """One external AI command line tool."""

    name: str = ""
    label: str = ""
    command: str = ""
    has_catalog: bool = False

    def is_available(self) -> bool:
        """Whether the provider's command can be found on PATH."""
        return shutil.which(self.command) is not None

    @abstractmethod
    def build_invocation(self, prompt: Prompt, model: str = "", agent: Optional[str] = None) -> Invocation:
        pass

    def list_models(self) -> Iterator[str]:
        yield PLACEHOLDER_MODEL

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class CatalogProvider(Provider):
    """A provider that can report which models are installed."""

    has_catalog = True
    catalog_argv: tuple[str, ...] = ()
    catalog_header_lines = 0

    def parse_catalog_line(self, line: str) -> str:
        return line.strip()

    def list_models(self) -> Iterator[str]:
        """Yield installed model names; yields nothing if listing fails."""
        debug(f"Attempting to find {self.name} models...")
        try:
            result = subprocess.run(
                list(self.catalog_argv),
                capture_output=True,
                text=True,
                encoding='utf-8',
                errors='replace',
            )
        except OSError as e:
            debug(f"Could not list {self.name} models: {e}")
            return
        if result.returncode != 0:
            debug(f"'{' '.join(self.catalog_argv)}' exited with {result.returncode}")
            return

        lines = result.stdout.splitlines()[self.catalog_header_lines:]
        for line in lines:
            if not line.strip():
                continue
            model = self.parse_catalog_line(line)
            if model:
                yield model
