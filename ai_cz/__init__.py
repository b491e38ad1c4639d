"""
AI Conventional Commit Generator

Suggests conventional commit messages for the current git diff using an
OpenAI model. The API token is kept on disk under local encryption.
"""

from dataclasses import dataclass

__version__ = "1.0.0"


@dataclass(frozen=True)
class CommitType:
    type: str
    description: str
    emoji: str


# Centralized commit types - single source of truth
# Used by: prompts/builder.py, suggestions.py (formatting), cli/main.py (selection)
COMMIT_TYPES = (
    CommitType('feat', 'A new feature', '✨'),
    CommitType('fix', 'A bug fix', '🐛'),
    CommitType('docs', 'Documentation only changes', '📚'),
    CommitType('style', 'Changes that do not affect the meaning of the code', '💎'),
    CommitType('refactor', 'A code change that neither fixes a bug nor adds a feature', '♻️'),
    CommitType('perf', 'A code change that improves performance', '⚡'),
    CommitType('test', 'Adding missing tests or correcting existing tests', '🧪'),
    CommitType('build', 'Changes that affect the build system or external dependencies', '🏗️'),
    CommitType('ci', 'Changes to CI configuration files and scripts', '👷'),
    CommitType('chore', "Other changes that don't modify src or test files", '🔧'),
    CommitType('revert', 'Reverts a previous commit', '⏪'),
)

COMMIT_TYPE_NAMES = [t.type for t in COMMIT_TYPES]

_BY_NAME = {t.type: t for t in COMMIT_TYPES}


def get_commit_type(name: str) -> CommitType | None:
    return _BY_NAME.get(name)
