"""Generate commit messages for pending changes with an LLM, then commit and push."""

__version__ = "1.0.0"

from .committer import AutoCommitter, CommitOptions
from .normalizer import NormalizedSubject, normalize
from .scanner import ChangeSet, FileChange

__all__ = [
    "AutoCommitter",
    "ChangeSet",
    "CommitOptions",
    "FileChange",
    "NormalizedSubject",
    "normalize",
    "__version__",
]
