"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages and
provides shared fakes for the content oracle and report renderer plus a
small git repository with two revisions of a Go source tree.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

import pygit2
import pytest

# Insert local src directory at the beginning of sys.path
# This ensures that the local covmerge package is used, not any installed one
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

from covmerge.reconcile.protocols import OracleError  # noqa: E402


class FakeOracle:
    """In-memory ContentOracle.

    ``contents`` maps (revision, file_name) to bytes. Missing entries make
    both operations raise OracleError, like a file absent at a revision.
    """

    def __init__(self, contents: dict[tuple[str, str], bytes] | None = None) -> None:
        self.contents = dict(contents or {})
        self.compared: list[tuple[str, str, str]] = []
        self.read: list[tuple[str, str]] = []

    def _get(self, revision: str, file_name: str) -> bytes:
        try:
            return self.contents[(revision, file_name)]
        except KeyError:
            raise OracleError(
                f"{file_name} missing at {revision}", revision=revision, file_name=file_name
            ) from None

    def same_content(self, rev_a: str, rev_b: str, file_name: str) -> bool:
        self.compared.append((rev_a, rev_b, file_name))
        return self._get(rev_a, file_name) == self._get(rev_b, file_name)

    def read_file(self, revision: str, file_name: str) -> bytes:
        self.read.append((revision, file_name))
        return self._get(revision, file_name)


class FakeRenderer:
    """ReportRenderer that writes a minimal go-tool-cover-like page."""

    PAGE = (
        "<html><body>"
        '<select id="files"><option value="file0">a.go</option></select>'
        "</body></html>"
    )

    def __init__(
        self,
        *,
        fail_with: Exception | None = None,
        on_render: Callable[[Path, Path], None] | None = None,
    ) -> None:
        self.calls: list[tuple[Path, Path]] = []
        self.fail_with = fail_with
        self.on_render = on_render

    def render(self, profile_path: Path, report_path: Path) -> None:
        self.calls.append((profile_path, report_path))
        if self.on_render is not None:
            self.on_render(profile_path, report_path)
        if self.fail_with is not None:
            raise self.fail_with
        report_path.write_text(self.PAGE)


@pytest.fixture
def fake_oracle() -> Callable[..., FakeOracle]:
    """Factory for FakeOracle instances."""
    return FakeOracle


@pytest.fixture
def fake_renderer() -> Callable[..., FakeRenderer]:
    """Factory for FakeRenderer instances."""
    return FakeRenderer


@pytest.fixture
def write_capture(tmp_path: Path) -> Callable[..., Path]:
    """Write a capture file named <name>.<timestamp>.<revision> and return its path."""
    captures_dir = tmp_path / "captures"
    captures_dir.mkdir()

    def _write(
        timestamp: int,
        revision: str,
        lines: list[str],
        *,
        mode: str = "count",
        name: str = "cover.txt",
    ) -> Path:
        path = captures_dir / f"{name}.{timestamp}.{revision}"
        path.write_text("\n".join([f"mode: {mode}", *lines]) + "\n")
        return path

    return _write


@dataclass
class GoRepo:
    """Temporary git repo with two commits of a GOPATH-style source tree."""

    path: Path
    repo: pygit2.Repository
    first: str
    second: str


def _commit(repo: pygit2.Repository, files: dict[str, str], message: str) -> str:
    workdir = Path(repo.workdir)
    for rel, content in files.items():
        target = workdir / rel
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content)
        repo.index.add(rel)
    repo.index.write()
    tree = repo.index.write_tree()
    sig = pygit2.Signature("Test User", "test@example.com")
    parents = [] if repo.head_is_unborn else [repo.head.target]
    oid = repo.create_commit("HEAD", sig, sig, message, tree, parents)
    return str(oid)


@pytest.fixture
def go_repo(tmp_path: Path) -> GoRepo:
    """Repo where, under go/src/example.com/app, same.go is unchanged between
    the two commits, changed.go differs, and added.go only exists in the second.
    """
    repo_path = tmp_path / "repo"
    repo_path.mkdir()
    repo = pygit2.init_repository(str(repo_path), initial_head="main")
    repo.config["user.name"] = "Test User"
    repo.config["user.email"] = "test@example.com"

    pkg = "go/src/example.com/app"
    first = _commit(
        repo,
        {
            f"{pkg}/same.go": "package app\n\nfunc Same() int { return 1 }\n",
            f"{pkg}/changed.go": "package app\n\nfunc Changed() int { return 1 }\n",
        },
        "Initial commit",
    )
    second = _commit(
        repo,
        {
            f"{pkg}/changed.go": "package app\n\nfunc Changed() int {\n\treturn 2\n}\n",
            f"{pkg}/added.go": "package app\n\nfunc Added() {}\n",
        },
        "Change app",
    )
    return GoRepo(path=repo_path, repo=repo, first=first, second=second)


@pytest.fixture(autouse=True)
def _isolate_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the user's global config and COVMERGE__ env vars out of tests."""
    monkeypatch.setattr(
        "covmerge.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "global-config.yaml"
    )
    for key in list(os.environ):
        if key.upper().startswith("COVMERGE__"):
            monkeypatch.delenv(key)
