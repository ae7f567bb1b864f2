"""Diff Processor - Keep diffs within what a model should be sent."""

TRUNCATION_MARKER = " ... [Diff Truncated]"


def exclude_pathspecs(patterns: list[str]) -> list[str]:
    """Turn glob patterns into git ':!' exclusion pathspecs."""
    return [f":!{pattern}" for pattern in patterns]


def truncate_diff(diff: str, limit: int) -> str:
    """Cut the diff to `limit` characters and mark it. 0 means unlimited."""
    if limit < 0:
        raise ValueError(f"diff limit must be non-negative, got {limit}")
    if limit == 0 or len(diff) <= limit:
        return diff
    return diff[:limit] + TRUNCATION_MARKER
