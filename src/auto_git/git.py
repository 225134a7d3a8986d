"""Git operations wrapper using subprocess."""

from __future__ import annotations

import subprocess
from pathlib import Path

from .errors import (
    CommitError,
    DiffReadError,
    GitError,
    NotARepositoryError,
    PushError,
    StageError,
)

DEFAULT_REMOTE = "origin"


def find_git_root(start: str | Path) -> Path:
    """Walk up from ``start`` until a directory holding ``.git`` is found.

    ``.git`` may be a directory or, for linked worktrees and submodules,
    a file pointing at the real control directory.

    Raises:
        NotARepositoryError: If no ancestor contains ``.git``
    """
    current = Path(start).resolve()
    for candidate in (current, *current.parents):
        if (candidate / ".git").exists():
            return candidate
    raise NotARepositoryError(f"Not a git repository: {current}")


class GitRepo:
    """Wrapper for git operations using subprocess."""

    def __init__(self, path: str | Path | None = None) -> None:
        """Initialize git repository wrapper.

        Args:
            path: Any path inside the working tree (defaults to current directory)
        """
        self.path = Path(path) if path else Path.cwd()
        self._root: Path | None = None

    @property
    def root(self) -> Path:
        """Top-level directory of the working tree."""
        if self._root is None:
            self._root = find_git_root(self.path)
        return self._root

    def _run(
        self,
        *args: str,
        check: bool = True,
        error: type[GitError] = GitError,
    ) -> subprocess.CompletedProcess[str]:
        """Run a git command from the repository root.

        Args:
            *args: Git command arguments
            check: Raise exception on non-zero exit
            error: Exception class raised on failure

        Returns:
            CompletedProcess result

        Raises:
            GitError: If command fails and check is True (as ``error``)
        """
        cmd = ["git", *args]
        try:
            return subprocess.run(
                cmd,
                cwd=self.root,
                check=check,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or "").strip()
            raise error(
                f"Command failed: {' '.join(cmd)} (exit code {e.returncode})"
                + (f": {stderr}" if stderr else "")
            ) from e
        except OSError as e:
            raise error(f"Could not run git: {e}") from e

    def check_repository(self) -> None:
        """Check if this is a valid git repository.

        Raises:
            NotARepositoryError: If no control directory is found
        """
        _ = self.root

    def get_numstat(self, staged: bool) -> str:
        """Get ``--numstat`` output for the index (staged) or the worktree."""
        args = ["diff", "--cached", "--numstat"] if staged else ["diff", "--numstat"]
        return self._run(*args, error=DiffReadError).stdout

    def get_diff(self, staged: bool) -> str:
        """Get the full patch text for the index (staged) or the worktree."""
        args = ["diff", "--cached"] if staged else ["diff"]
        return self._run(*args, error=DiffReadError).stdout

    def stage_all(self) -> None:
        """Stage every pending change, including deletions and new files."""
        self._run("add", "-A", error=StageError)

    def commit(self, message: str) -> None:
        """Record a commit with ``message`` as its only message."""
        self._run("commit", "-m", message, error=CommitError)

    def list_remotes(self) -> list[str]:
        """Get the names of the configured remotes."""
        result = self._run("remote", error=PushError)
        return [r.strip() for r in result.stdout.splitlines() if r.strip()]

    def has_remote(self, name: str = DEFAULT_REMOTE) -> bool:
        """Check whether a remote called ``name`` is configured."""
        return name in self.list_remotes()

    def push(self) -> None:
        """Push the current branch to its upstream."""
        self._run("push", error=PushError)


__all__ = ["DEFAULT_REMOTE", "GitRepo", "find_git_root"]
