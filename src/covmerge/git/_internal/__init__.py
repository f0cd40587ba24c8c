"""Internal git helpers. Not part of the public API."""

from covmerge.git._internal.access import RepoAccess
from covmerge.git._internal.errors import ErrorMapper, git_operation

__all__ = [
    "ErrorMapper",
    "RepoAccess",
    "git_operation",
]
