"""Git Operations Package"""

from ai_cz.git.analyzer import GitAnalyzer, GitError

__all__ = [
    "GitAnalyzer",
    "GitError",
]
