"""Git Analyzer - Extract staged changes and commit history from git."""

import subprocess
from dataclasses import dataclass, field
from typing import Optional

from ai_commits.git.diff_processor import exclude_pathspecs
from ai_commits.output import debug


@dataclass
class StagedChanges:
    """What's staged for commit, as git reports it."""
    name_status: str = ""
    diff: str = ""

    @property
    def is_empty(self) -> bool:
        return not self.diff.strip() and not self.name_status.strip()


@dataclass
class CommitLog:
    """One-line-per-commit history since the last tag."""
    last_tag: Optional[str] = None
    entries: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return len(self.entries) == 0

    @property
    def text(self) -> str:
        return "\n".join(self.entries)


class GitError(Exception):
    """Raised when git operations fail."""
    pass


class GitAnalyzer:
    """Reads the repository state the prompts are built from."""

    LOG_FORMAT = "%h - %s"

    def __init__(self):
        self._verify_git_available()
        self._verify_in_repo()

    def _run_git(self, *args: str, input: Optional[str] = None) -> str:
        """Run a git command and return stdout."""
        try:
            result = subprocess.run(
                ['git', *args],
                input=input,
                capture_output=True,
                text=True,
                check=True,
                encoding='utf-8',
                errors='replace'
            )
            return result.stdout
        except subprocess.CalledProcessError as e:
            raise GitError(f"Git command failed: git {' '.join(args)}\n{e.stderr}")
        except FileNotFoundError:
            raise GitError("Git is not installed or not in PATH")

    def _verify_git_available(self) -> None:
        """Fail fast if git isn't available."""
        try:
            self._run_git('--version')
        except GitError:
            raise GitError("Git is not installed or not in PATH")

    def _verify_in_repo(self) -> None:
        """Fail fast if we're not inside a work tree."""
        try:
            inside = self._run_git('rev-parse', '--is-inside-work-tree').strip()
        except GitError:
            raise GitError("Not a git repository.")
        if inside != 'true':
            raise GitError("Not a git repository.")

    def get_staged_changes(self, ignored_patterns: list[str] | None = None) -> StagedChanges:
        """Staged diff (minus ignored files) and the full name-status listing."""
        patterns = ignored_patterns or []
        debug("Preparing git diff...")
        debug(f"Ignoring patterns: {' '.join(patterns)}")
        diff = self._run_git('diff', '--cached', '.', *exclude_pathspecs(patterns))
        name_status = self._run_git('diff', '--cached', '--name-status')
        return StagedChanges(name_status=name_status.strip('\n'), diff=diff.strip('\n'))

    def get_last_tag(self) -> Optional[str]:
        try:
            return self._run_git('describe', '--tags', '--abbrev=0').strip() or None
        except GitError:
            return None

    def get_commit_log(self) -> CommitLog:
        """Commits since the most recent tag, or every commit when untagged."""
        debug("Preparing commit log...")
        last_tag = self.get_last_tag()
        if last_tag is None:
            debug("No previous tag found. Getting all commits.")
            output = self._get_log()
        else:
            debug(f"Found last tag: {last_tag}. Getting commits since then.")
            output = self._get_log(f"{last_tag}..HEAD")

        entries = [line for line in output.split('\n') if line.strip()]
        return CommitLog(last_tag=last_tag, entries=entries)

    def _get_log(self, *revisions: str) -> str:
        try:
            return self._run_git('log', *revisions, f'--pretty=format:{self.LOG_FORMAT}')
        except GitError:
            # git log fails on a repository with no commits yet
            return ""

    def create_tag(self, name: str, message: str) -> None:
        """Create an annotated tag, reading the message from stdin."""
        self._run_git('tag', '-a', name, '-F', '-', input=message + '\n')
