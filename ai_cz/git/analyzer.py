"""Git Analyzer - Read diffs and create commits."""

import logging
import subprocess

logger = logging.getLogger(__name__)


class GitError(Exception):
    """Raised when git operations fail."""
    pass


class GitAnalyzer:
    """Thin wrapper over the git binary for the current working tree."""

    def __init__(self, cwd: str | None = None):
        self.cwd = cwd
        self._verify_git_available()
        self._verify_in_repo()

    def _run_git(self, *args: str) -> str:
        """Run a git command and return stdout."""
        logger.debug("git %s", ' '.join(args))
        try:
            result = subprocess.run(
                ['git', *args],
                capture_output=True,
                text=True,
                check=True,
                encoding='utf-8',
                errors='replace',
                cwd=self.cwd,
            )
            return result.stdout
        except subprocess.CalledProcessError as e:
            raise GitError(f"Git command failed: git {' '.join(args)}\n{e.stderr.strip()}")
        except FileNotFoundError:
            raise GitError("Git is not installed or not in PATH")

    def _verify_git_available(self) -> None:
        """Fail fast if git isn't available."""
        try:
            self._run_git('--version')
        except GitError:
            raise GitError("Git is not installed or not in PATH")

    def _verify_in_repo(self) -> None:
        """Fail fast if we're not in a git repository."""
        try:
            self._run_git('rev-parse', '--git-dir')
        except GitError:
            raise GitError("Not in a git repository")

    def get_staged_diff(self) -> str:
        return self._run_git('diff', '--cached')

    def get_unstaged_diff(self) -> str:
        return self._run_git('diff')

    def get_diff(self) -> str:
        """Staged diff, or the unstaged diff when nothing is staged. Empty if neither."""
        diff = self.get_staged_diff()
        if not diff.strip():
            diff = self.get_unstaged_diff()
        return diff if diff.strip() else ""

    def has_staged_files(self) -> bool:
        return bool(self._run_git('diff', '--cached', '--name-only').strip())

    def stage_all(self) -> None:
        self._run_git('add', '.')

    def commit(self, message: str) -> str:
        """Commit with ``message`` as a single argument and return git's output."""
        return self._run_git('commit', '-m', message)
