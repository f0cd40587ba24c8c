"""Run-scoped source snapshots for renamed profile variants.

A renamed profile ``pkg/a.go.<rev>`` only renders if the report tool can
find a file under that name. ``SourceSnapshots`` writes the revision's
content next to the working copy and removes everything it created when
the scope exits, whether the run succeeded or not.
"""

from __future__ import annotations

from pathlib import Path
from types import TracebackType

from covmerge.config.constants import REVISION_SUFFIX_SEPARATOR
from covmerge.core.errors import SnapshotError
from covmerge.core.logging import get_logger

log = get_logger("snapshots")


def variant_name(file_name: str, revision: str) -> str:
    """Name of a revision-specific variant of ``file_name``."""
    return f"{file_name}{REVISION_SUFFIX_SEPARATOR}{revision}"


class SourceSnapshots:
    """Context manager owning temporary per-revision source files.

    Usage::

        with SourceSnapshots(workdir / "go/src") as snapshots:
            snapshots.write("e24dac6", "pkg/a.go", content)
            render_report()
        # snapshot files and directories created for them are gone
    """

    def __init__(self, root: Path) -> None:
        self._root = root
        self._files: list[Path] = []
        self._dirs: list[Path] = []

    @property
    def root(self) -> Path:
        return self._root

    @property
    def paths(self) -> list[Path]:
        return list(self._files)

    def write(self, revision: str, file_name: str, content: bytes) -> Path:
        """Write ``content`` as the ``revision`` variant of ``file_name``.

        Raises:
            SnapshotError: If the file cannot be written or already exists.
        """
        path = self._root / variant_name(file_name, revision)
        if path.exists():
            raise SnapshotError.write_failed(str(path), "file already exists")
        try:
            self._make_parents(path.parent)
            path.write_bytes(content)
        except OSError as e:
            raise SnapshotError.write_failed(str(path), str(e)) from e

        self._files.append(path)
        log.debug("snapshot_written", path=str(path), revision=revision, size=len(content))
        return path

    def _make_parents(self, directory: Path) -> None:
        missing: list[Path] = []
        current = directory
        while not current.exists():
            missing.append(current)
            current = current.parent
        directory.mkdir(parents=True, exist_ok=True)
        self._dirs.extend(missing)

    def cleanup(self) -> None:
        """Remove written files and any directories created for them."""
        for path in self._files:
            try:
                path.unlink(missing_ok=True)
                log.debug("snapshot_removed", path=str(path))
            except OSError as e:
                log.warning("snapshot_cleanup_failed", path=str(path), error=str(e))
        self._files.clear()

        # Deepest first so parents are empty by the time they are reached
        for directory in sorted(self._dirs, key=lambda d: len(d.parts), reverse=True):
            try:
                directory.rmdir()
            except OSError as e:
                # Non-empty: something else lives there now, leave it
                log.debug("snapshot_dir_kept", path=str(directory), error=str(e))
        self._dirs.clear()

    def __enter__(self) -> SourceSnapshots:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.cleanup()
