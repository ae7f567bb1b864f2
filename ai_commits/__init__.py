"""
AI Commits

AI-powered commit messages and release notes from git state, generated
by whichever local AI CLI is installed.
"""

__version__ = "1.0.0"

# Conventional commit types offered to the model, in prompt order
COMMIT_TYPE_NAMES = [
    'fix', 'feat', 'build', 'chore', 'ci',
    'docs', 'style', 'refactor', 'perf', 'test',
]
