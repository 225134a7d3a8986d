"""Error types raised by the auto-git pipeline."""


class AutoGitError(Exception):
    """Base class for every error that terminates an auto-git run."""

    pass


class GitError(AutoGitError):
    """Error during git operations."""

    pass


class NotARepositoryError(GitError):
    """The working directory is not inside a git repository."""

    pass


class NoPendingChangesError(GitError):
    """Neither the index nor the worktree differ from HEAD."""

    pass


class DiffReadError(GitError):
    """Diff statistics or diff text could not be read."""

    pass


class StageError(GitError):
    """Staging pending changes failed."""

    pass


class CommitError(GitError):
    """Creating the commit failed."""

    pass


class PushError(GitError):
    """Pushing failed after the commit was recorded locally."""

    pass


class EmptySubjectError(AutoGitError):
    """The commit subject is empty after trimming."""

    pass


class EditCancelledError(AutoGitError):
    """The operator aborted the commit message prompt."""

    pass


class ConfigLoadError(AutoGitError):
    """The configuration file could not be read or written."""

    pass


class UnknownProviderError(AutoGitError):
    """The configured provider identifier is not supported."""

    pass


class ProviderError(AutoGitError):
    """Base class for failures talking to a model backend."""

    pass


class ConnectionFailedError(ProviderError):
    """The backend could not be reached."""

    pass


class ModelListError(ProviderError):
    """The backend did not return a usable model list."""

    pass


class GenerationError(ProviderError):
    """The backend failed to generate a commit message."""

    pass


class EmptyReplyError(GenerationError):
    """The backend answered with no text at all."""

    pass


__all__ = [
    "AutoGitError",
    "GitError",
    "NotARepositoryError",
    "NoPendingChangesError",
    "DiffReadError",
    "StageError",
    "CommitError",
    "PushError",
    "EmptySubjectError",
    "EditCancelledError",
    "ConfigLoadError",
    "UnknownProviderError",
    "ProviderError",
    "ConnectionFailedError",
    "ModelListError",
    "GenerationError",
    "EmptyReplyError",
]
