"""Prompt Builder - Construct prompts for commit messages and release notes."""

from dataclasses import dataclass

from ai_commits import COMMIT_TYPE_NAMES

SEGMENT_SEPARATOR = "\n\n---\n\n"

MAX_TITLE_LENGTH = 50
BODY_WRAP_WIDTH = 72

COMMIT_RULES = f"""You are a git commit message generator.
Follow the Conventional Commits specification.

Format:
<type>[optional scope]: <description>

[optional body]

Rules:
- Types: {', '.join(COMMIT_TYPE_NAMES)}.
- Use present tense.
- Max title length: {MAX_TITLE_LENGTH} chars.
- Wrap body lines at {BODY_WRAP_WIDTH} chars.
- Do not start any line with a hash symbol (#).
- No markdown code blocks in output.
- No conversational text."""

RELEASE_RULES = """You are a release notes generator for a git repository.
Your task is to summarize a list of commit messages into a cohesive and well-formatted release notes document.

Rules:
- Use markdown headings (e.g., "### ✨ Features") for sections. Do not start any other lines with a hash symbol (#) unless it is for a heading.
- The output should be formatted in Markdown.
- Group changes by their type (e.g., "✨ Features", "🐛 Bug Fixes", "🔧 Miscellaneous").
- Each item in the list should be a brief, clear summary of the change.
- Omit the commit hashes from the output.
- The tone should be professional and user-friendly.
- Do not include conversational text or any text outside of the release notes themselves."""

COMMIT_TRIGGER = "Based on the diff above, generate the commit message now. Output raw text only."
RELEASE_TRIGGER = "Based on the commit history above, generate the release notes now. Output raw text only."

# Appended after the base rules, in this order, when the matching mode is on
MODE_RULES = (
    ("brief", "Note: I prefer a very short, one-sentence summary."),
    ("emoji", "Use GitMojis (e.g. 🐛 fix:)."),
)


@dataclass(frozen=True)
class PromptModes:
    """Optional rule modifiers."""
    brief: bool = False
    emoji: bool = False


@dataclass(frozen=True)
class Prompt:
    """A prompt as rules, subject data and the final instruction."""
    rules: str
    data: str
    trigger: str

    @property
    def text(self) -> str:
        return SEGMENT_SEPARATOR.join([self.rules, self.data, self.trigger])

    @property
    def task_text(self) -> str:
        """Data and trigger only, for providers that carry the rules themselves."""
        return f"{self.data}\n\n{self.trigger}"

    def __str__(self) -> str:
        return self.text


def compose(rules: str, modes: PromptModes, data: str, trigger: str) -> Prompt:
    lines = [rules]
    for flag, rule in MODE_RULES:
        if getattr(modes, flag):
            lines.append(rule)
    return Prompt(rules="\n".join(lines), data=data, trigger=trigger)


class PromptBuilder:
    """Builds the data block for each kind of artifact and composes the prompt.

    The diff handed to build_commit() must already be truncated.
    """

    def build_commit(self, name_status: str, diff: str, modes: PromptModes | None = None) -> Prompt:
        data = f"Files changed:\n{name_status}\n\nDiff:\n{diff}"
        return compose(COMMIT_RULES, modes or PromptModes(), data, COMMIT_TRIGGER)

    def build_release(self, commit_log: str, modes: PromptModes | None = None) -> Prompt:
        data = f"Commit History:\n{commit_log}"
        return compose(RELEASE_RULES, modes or PromptModes(), data, RELEASE_TRIGGER)
