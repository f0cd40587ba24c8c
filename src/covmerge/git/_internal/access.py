"""Repository access layer - owns pygit2.Repository and exposes revision lookups."""

from __future__ import annotations

from pathlib import Path

import pygit2

from covmerge.git._internal.errors import git_operation
from covmerge.git.errors import (
    NotAFileError,
    NotARepositoryError,
    PathNotFoundError,
    RefNotFoundError,
)


class RepoAccess:
    """Owns pygit2.Repository and resolves revisions and tree paths."""

    def __init__(self, repo_path: Path | str) -> None:
        self._path = Path(repo_path)
        try:
            self._repo = pygit2.Repository(str(self._path))
        except pygit2.GitError as e:
            raise NotARepositoryError(str(self._path)) from e
        self._commits: dict[str, pygit2.Commit] = {}

    @property
    def repo(self) -> pygit2.Repository:
        return self._repo

    @property
    def path(self) -> Path:
        return Path(self._repo.workdir) if self._repo.workdir else self._path

    # =========================================================================
    # Resolution Helpers
    # =========================================================================

    def resolve_ref_oid(self, ref: str) -> pygit2.Oid:
        try:
            obj, _ = self._repo.resolve_refish(ref)
            return obj.id
        except (pygit2.GitError, KeyError, ValueError) as e:
            raise RefNotFoundError(ref) from e

    def resolve_commit(self, ref: str) -> pygit2.Commit:
        """Resolve a branch, tag, or (abbreviated) hash to a commit. Cached per ref."""
        cached = self._commits.get(ref)
        if cached is not None:
            return cached

        obj: pygit2.Object | None = self._repo.get(self.resolve_ref_oid(ref))
        if isinstance(obj, pygit2.Tag):
            obj = obj.peel(pygit2.Commit)  # type: ignore[assignment]
        if not isinstance(obj, pygit2.Commit):
            raise RefNotFoundError(f"{ref} is not a commit")
        self._commits[ref] = obj
        return obj

    # =========================================================================
    # Tree Lookups
    # =========================================================================

    def blob_at(self, ref: str, path: str) -> pygit2.Blob:
        """Blob for ``path`` in the tree of ``ref``."""
        commit = self.resolve_commit(ref)
        with git_operation(f"lookup {ref}:{path}"):
            try:
                obj = commit.tree[path]
            except KeyError as e:
                raise PathNotFoundError(ref, path) from e
        if not isinstance(obj, pygit2.Blob):
            raise NotAFileError(ref, path)
        return obj

    def blob_id_at(self, ref: str, path: str) -> pygit2.Oid:
        return self.blob_at(ref, path).id

    def read_blob(self, ref: str, path: str) -> bytes:
        return self.blob_at(ref, path).data
