"""Scan a working tree for pending changes and classify each file."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .errors import NoPendingChangesError
from .git import GitRepo


class ChangeKind(str, Enum):
    """Kind of change recorded for one file."""

    ADDED = "add"
    MODIFIED = "edit"
    DELETED = "del"
    # numstat carries no rename metadata, so nothing is classified as this yet
    RENAMED = "rename"


@dataclass(frozen=True)
class FileChange:
    """Line-count statistics for a single changed file."""

    path: str
    additions: int = 0
    deletions: int = 0

    @property
    def kind(self) -> ChangeKind:
        return classify_change(self.additions, self.deletions)


@dataclass
class ChangeSet:
    """Pending changes split into index (staged) and worktree (unstaged) groups."""

    staged: list[FileChange] = field(default_factory=list)
    unstaged: list[FileChange] = field(default_factory=list)
    summary: str = ""

    def __post_init__(self) -> None:
        if not self.staged and not self.unstaged:
            raise NoPendingChangesError("No uncommitted changes found")

    @property
    def files(self) -> list[FileChange]:
        """All changes, staged first."""
        return [*self.staged, *self.unstaged]


def classify_change(additions: int, deletions: int) -> ChangeKind:
    """Derive the change kind from added/deleted line counts."""
    if additions > 0 and deletions == 0:
        return ChangeKind.ADDED
    if additions == 0 and deletions > 0:
        return ChangeKind.DELETED
    return ChangeKind.MODIFIED


def _parse_count(token: str) -> int:
    # binary files report "-" instead of a number
    try:
        return max(int(token), 0)
    except ValueError:
        return 0


def parse_numstat(output: str) -> list[FileChange]:
    """Parse ``git diff --numstat`` output.

    Each line is ``<additions> <deletions> <path>``. Only the first two
    whitespace-separated fields are counts; the rest of the line is the path,
    so embedded spaces survive.

    Args:
        output: Raw numstat output

    Returns:
        One FileChange per well-formed line, in input order
    """
    changes: list[FileChange] = []
    for line in output.splitlines():
        parts = line.strip().split(None, 2)
        if len(parts) < 3:
            continue
        added, deleted, path = parts
        changes.append(
            FileChange(
                path=path,
                additions=_parse_count(added),
                deletions=_parse_count(deleted),
            )
        )
    return changes


def build_summary(staged: list[FileChange], unstaged: list[FileChange]) -> str:
    """Render the grouped, plain-text change summary."""
    parts: list[str] = []
    for title, group in (("Staged", staged), ("Unstaged", unstaged)):
        if not group:
            continue
        parts.append(f"{title}: {len(group)} file(s)")
        for change in group:
            parts.append(f"  +{change.additions} -{change.deletions} {change.path}")
    return "\n".join(parts)


def scan(repo: GitRepo | None = None) -> ChangeSet:
    """Collect staged and unstaged changes of the repository.

    Raises:
        NotARepositoryError: If not inside a git working tree
        DiffReadError: If git cannot produce diff statistics
        NoPendingChangesError: If there is nothing to commit
    """
    repo = repo or GitRepo()
    repo.check_repository()

    staged = parse_numstat(repo.get_numstat(staged=True))
    unstaged = parse_numstat(repo.get_numstat(staged=False))

    return ChangeSet(
        staged=staged,
        unstaged=unstaged,
        summary=build_summary(staged, unstaged),
    )


def read_diff_text(repo: GitRepo | None = None) -> str:
    """Get the full staged and unstaged patch text, each under its own heading.

    Raises:
        DiffReadError: If git cannot produce the diff
    """
    repo = repo or GitRepo()

    parts: list[str] = []
    staged_diff = repo.get_diff(staged=True)
    if staged_diff:
        parts.extend(["=== STAGED CHANGES ===", staged_diff])
    unstaged_diff = repo.get_diff(staged=False)
    if unstaged_diff:
        parts.extend(["=== UNSTAGED CHANGES ===", unstaged_diff])
    return "\n\n".join(parts)


__all__ = [
    "ChangeKind",
    "ChangeSet",
    "FileChange",
    "build_summary",
    "classify_change",
    "parse_numstat",
    "read_diff_text",
    "scan",
]
