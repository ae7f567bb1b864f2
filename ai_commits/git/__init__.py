"""Git Operations Package"""

from ai_commits.git.analyzer import GitAnalyzer, GitError, StagedChanges, CommitLog
from ai_commits.git.diff_processor import truncate_diff, exclude_pathspecs, TRUNCATION_MARKER

__all__ = [
    "GitAnalyzer",
    "GitError",
    "StagedChanges",
    "CommitLog",
    "truncate_diff",
    "exclude_pathspecs",
    "TRUNCATION_MARKER",
]
