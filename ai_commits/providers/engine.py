"""Execution Engine - Run a provider and judge its output."""

import subprocess
import tempfile
from typing import Optional

from ai_commits.output import debug, is_verbose
from ai_commits.prompts import Prompt
from ai_commits.providers.base import ExecutionResult, GenerationError, UnknownProviderError
from ai_commits.providers.registry import get_provider


def _indent(text: str, prefix: str = "    ") -> str:
    return "\n".join(prefix + line for line in text.rstrip("\n").split("\n"))


def execute(prompt: Prompt, provider_name: str, model: str = "", agent: Optional[str] = None) -> ExecutionResult:
    """Run the provider once and return its output.

    A non-zero exit status is tolerated as long as something was written to
    stdout. Blank stdout raises GenerationError carrying whatever the tool
    wrote to stderr.
    """
    provider = get_provider(provider_name)
    if provider is None:
        raise UnknownProviderError(f"Unknown provider '{provider_name}'")

    invocation = provider.build_invocation(prompt, model, agent)
    debug(f"Running {provider.name}{f' with model {model!r}' if model else ''}...")
    debug(f"Sending {len(prompt.text)} chars to {provider.label}")

    with tempfile.TemporaryFile(mode='w+', encoding='utf-8', errors='replace') as stderr_capture:
        try:
            completed = subprocess.run(
                list(invocation.argv),
                input=invocation.stdin,
                stdin=subprocess.DEVNULL if invocation.stdin is None else None,
                stdout=subprocess.PIPE,
                stderr=stderr_capture,
                text=True,
                encoding='utf-8',
                errors='replace',
            )
        except FileNotFoundError:
            raise GenerationError(f"AI generation failed. '{provider.command}' is not installed or not in PATH.")
        except OSError as e:
            # E2BIG for oversized argv, PermissionError for a non-executable binary
            raise GenerationError(f"AI generation failed. Could not run '{provider.command}': {e}")

        stderr_capture.seek(0)
        result = ExecutionResult(
            stdout=completed.stdout or "",
            stderr=stderr_capture.read(),
            returncode=completed.returncode,
        )

    if is_verbose() and result.stderr.strip():
        debug(f"--- STDERR from {provider.name} ---\n{_indent(result.stderr)}")
    if result.returncode != 0:
        debug(f"{provider.name} exited with status {result.returncode}")

    if not result.succeeded:
        message = f"AI generation failed. No output received from '{provider.name}'."
        if result.stderr.strip():
            message += f"\n--- Error Details from {provider.name} ---\n{result.stderr.rstrip()}"
        raise GenerationError(message)

    return result
