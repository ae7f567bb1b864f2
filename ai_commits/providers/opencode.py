"""OpenCode Provider"""

from typing import Optional

from ai_commits.prompts import Prompt
from ai_commits.providers.base import CatalogProvider, Invocation

# Linux caps a single argv string at 128 KiB; stay well under it
MAX_ARGUMENT_BYTES = 100_000


class OpenCodeProvider(CatalogProvider):
    """`opencode run` with the prompt on stdin and an optional -m flag.

    With an agent, the agent supplies the rules and only the data and
    trigger are passed, as a positional argument. A task too long for
    argv goes on stdin instead.
    """

    name = "opencode"
    label = "OpenCode"
    command = "opencode"
    catalog_argv = ("opencode", "models")

    def build_invocation(self, prompt: Prompt, model: str = "", agent: Optional[str] = None) -> Invocation:
        model_flag = ("-m", model) if model else ()
        if agent:
            task = prompt.task_text
            if len(task.encode('utf-8')) > MAX_ARGUMENT_BYTES:
                return Invocation(argv=(self.command, "run", "--agent", agent, *model_flag), stdin=task)
            return Invocation(argv=(self.command, "run", "--agent", agent, *model_flag, task))
        return Invocation(argv=(self.command, "run", *model_flag), stdin=prompt.text)
