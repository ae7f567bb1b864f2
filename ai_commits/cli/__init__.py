"""Command Line Interface Package"""

from ai_commits.cli.main import commit_main, tag_main

__all__ = ["commit_main", "tag_main"]
