"""Merge run orchestration.

capture ids → per-revision merge → reconciliation → final assembly →
serialized profile → (optional) rendered report.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from covmerge.capture import RevisionProfiles, build_revision_sets
from covmerge.config.models import CovMergeConfig
from covmerge.core.errors import OutputError
from covmerge.core.logging import get_logger, get_run_id, set_run_id
from covmerge.profile.dump import dump_profiles
from covmerge.profile.models import Profile
from covmerge.reconcile import ContentOracle, SourceSnapshots, assemble, reconcile
from covmerge.report import ReportRenderer, augment_report

log = get_logger("ops")


@dataclass(slots=True)
class MergeResult:
    """Outcome of one merge run."""

    profile_path: Path
    report_path: Path | None
    revisions: list[RevisionProfiles]
    profiles: list[Profile]
    renamed: dict[str, list[str]] = field(default_factory=dict)

    @property
    def file_count(self) -> int:
        return len(self.profiles)

    @property
    def block_count(self) -> int:
        return sum(len(p.blocks) for p in self.profiles)

    @property
    def num_stmts(self) -> int:
        return sum(p.num_stmts for p in self.profiles)

    @property
    def covered_stmts(self) -> int:
        return sum(p.covered_stmts for p in self.profiles)

    @property
    def rendered(self) -> bool:
        return self.report_path is not None


def _resolve(workdir: Path, path: str) -> Path:
    p = Path(path).expanduser()
    return p if p.is_absolute() else workdir / p


def write_profile(profiles: list[Profile], path: Path) -> None:
    """Serialize the merged set to ``path``.

    Raises:
        OutputError: On any filesystem error.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w") as out:
            dump_profiles(profiles, out)
    except OSError as e:
        raise OutputError.write_failed(str(path), str(e)) from e
    log.info("profile_written", path=str(path), files=len(profiles))


def run_merge(
    capture_ids: Iterable[str | Path],
    config: CovMergeConfig,
    *,
    oracle: ContentOracle,
    renderer: ReportRenderer | None = None,
    workdir: Path | None = None,
) -> MergeResult:
    """Merge coverage captures across revisions into one profile.

    Args:
        capture_ids: Capture paths named ``...<timestamp>.<revision>``.
        config: Resolved configuration (output paths, render options).
        oracle: Content oracle for equality checks and variant snapshots.
        renderer: Report renderer; rendering is skipped when None or when
            ``config.render.enabled`` is false.
        workdir: Base for relative paths. Defaults to the current directory.

    Raises:
        CovMergeError: Any capture, merge, snapshot, or output failure.
            Snapshot files are removed before the error propagates.
    """
    workdir = workdir or Path.cwd()
    if get_run_id() is None:
        set_run_id()

    revisions = build_revision_sets(capture_ids)
    reconciled = reconcile(revisions, oracle)

    profile_path = _resolve(workdir, config.output.profile_path)
    report_path: Path | None = None
    snapshot_root = _resolve(workdir, config.render.gopath) / "src"

    with SourceSnapshots(snapshot_root) as snapshots:
        assembly = assemble(reconciled, oracle, snapshots)
        write_profile(assembly.profiles, profile_path)

        if renderer is not None and config.render.enabled:
            report_path = _resolve(workdir, config.output.report_path)
            try:
                report_path.parent.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise OutputError.write_failed(str(report_path), str(e)) from e
            renderer.render(profile_path, report_path)
            if config.render.augment:
                augment_report(report_path)

    return MergeResult(
        profile_path=profile_path,
        report_path=report_path,
        revisions=reconciled,
        profiles=assembly.profiles,
        renamed=assembly.renamed,
    )
