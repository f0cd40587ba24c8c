"""Content oracle backed by a git repository.

Profile file names are import paths; inside the repository they live under
``source_prefix`` (``go/src`` for a GOPATH checkout). Two revisions hold
identical content for a file exactly when the tree entries point at the
same blob, so equality never reads file content.
"""

from __future__ import annotations

from pathlib import Path, PurePosixPath

import pygit2

from covmerge.core.logging import get_logger
from covmerge.git._internal import RepoAccess
from covmerge.git.errors import GitError
from covmerge.reconcile.protocols import OracleError

log = get_logger("git.oracle")


class GitContentOracle:
    """ContentOracle implementation over pygit2."""

    def __init__(self, repo_path: Path | str, *, source_prefix: str = "") -> None:
        self._access = RepoAccess(repo_path)
        self._prefix = source_prefix.strip("/")
        self._same: dict[tuple[str, str, str], bool] = {}

    @property
    def repo(self) -> pygit2.Repository:
        return self._access.repo

    def repo_path_for(self, file_name: str) -> str:
        """Repository-relative path of a profile file name."""
        if not self._prefix:
            return file_name
        return str(PurePosixPath(self._prefix) / file_name)

    def same_content(self, rev_a: str, rev_b: str, file_name: str) -> bool:
        key = (rev_a, rev_b, file_name)
        cached = self._same.get(key)
        if cached is not None:
            return cached

        path = self.repo_path_for(file_name)
        try:
            same = self._access.blob_id_at(rev_a, path) == self._access.blob_id_at(rev_b, path)
        except GitError as e:
            raise OracleError(str(e), file_name=file_name) from e

        self._same[key] = same
        log.debug("content_compared", rev_a=rev_a, rev_b=rev_b, path=path, same=same)
        return same

    def read_file(self, revision: str, file_name: str) -> bytes:
        path = self.repo_path_for(file_name)
        try:
            return self._access.read_blob(revision, path)
        except GitError as e:
            raise OracleError(str(e), revision=revision, file_name=file_name) from e
