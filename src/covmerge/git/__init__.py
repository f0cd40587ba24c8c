"""Git access for per-revision file content."""

from covmerge.git.errors import (
    GitError,
    NotAFileError,
    NotARepositoryError,
    PathNotFoundError,
    RefNotFoundError,
)
from covmerge.git.oracle import GitContentOracle

__all__ = [
    "GitContentOracle",
    # Errors
    "GitError",
    "NotAFileError",
    "NotARepositoryError",
    "PathNotFoundError",
    "RefNotFoundError",
]
