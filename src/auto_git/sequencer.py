"""Stage, commit and push a finished commit subject."""

from __future__ import annotations

from typing import Protocol

from .errors import EmptySubjectError, PushError
from .git import DEFAULT_REMOTE


class CommitTarget(Protocol):
    """The git operations the sequencer needs; ``GitRepo`` satisfies it."""

    def stage_all(self) -> None: ...

    def commit(self, message: str) -> None: ...

    def has_remote(self, name: str = DEFAULT_REMOTE) -> bool: ...

    def push(self) -> None: ...


def finalize_and_push(repo: CommitTarget, subject: str) -> bool:
    """Stage everything, commit with ``subject`` and push if ``origin`` exists.

    A failure while staging or committing stops the sequence before any
    later step runs.

    Args:
        repo: Repository to operate on
        subject: Commit message (used verbatim as the only message)

    Returns:
        True if the commit was pushed, False if no ``origin`` remote exists

    Raises:
        EmptySubjectError: If the subject is blank
        StageError: If staging fails
        CommitError: If the commit fails
        PushError: If the remote check or push fails after a local commit
    """
    if not subject.strip():
        raise EmptySubjectError("Commit message cannot be empty")

    repo.stage_all()
    repo.commit(subject)

    try:
        if not repo.has_remote(DEFAULT_REMOTE):
            return False
        repo.push()
    except PushError as e:
        raise PushError(f"Commit successful but push failed: {e}") from e
    return True


__all__ = ["CommitTarget", "finalize_and_push"]
