"""Tests for cross-revision reconciliation."""

from __future__ import annotations

from collections.abc import Callable

from structlog.testing import capture_logs

from covmerge.capture.models import RevisionProfiles
from covmerge.profile.dump import dumps_profiles
from covmerge.profile.models import Block, Profile
from covmerge.reconcile import reconcile


def _rev(revision: str, timestamp: int, *files: tuple[str, int]) -> RevisionProfiles:
    """Revision with one single-block count profile per (file, count)."""
    return RevisionProfiles(
        revision=revision,
        timestamp=timestamp,
        profiles=[
            Profile(name, "count", [Block(1, 1, 3, 2, 2, count)]) for name, count in files
        ],
    )


class TestReconcile:
    """Attribution of identical files to the earliest revision."""

    def test_identical_file_merges_into_earliest(self, fake_oracle: Callable) -> None:
        """bar.go is identical in aaa and bbb: one entry, owned by aaa."""
        source = b"package bar\n"
        oracle = fake_oracle({("aaa", "bar.go"): source, ("bbb", "bar.go"): source})
        revisions = [_rev("aaa", 100, ("bar.go", 1)), _rev("bbb", 200, ("bar.go", 2))]

        result = reconcile(revisions, oracle)

        assert [r.revision for r in result] == ["aaa", "bbb"]
        assert dumps_profiles(result[0].profiles) == "mode: count\nbar.go:1.1,3.2 2 3\n"
        assert result[1].profiles == []

    def test_different_files_stay_with_their_revision(self, fake_oracle: Callable) -> None:
        oracle = fake_oracle({("aaa", "bar.go"): b"v1", ("bbb", "bar.go"): b"v2"})
        revisions = [_rev("aaa", 100, ("bar.go", 1)), _rev("bbb", 200, ("bar.go", 2))]

        result = reconcile(revisions, oracle)

        assert result[0].file_names == ["bar.go"]
        assert result[1].file_names == ["bar.go"]
        assert result[0].profiles[0].blocks[0].count == 1
        assert result[1].profiles[0].blocks[0].count == 2

    def test_later_match_folds_into_first_surviving_owner(self, fake_oracle: Callable) -> None:
        """Content shared by bbb and ccc but not aaa lands in bbb."""
        oracle = fake_oracle(
            {
                ("aaa", "f.go"): b"old",
                ("bbb", "f.go"): b"new",
                ("ccc", "f.go"): b"new",
            }
        )
        revisions = [
            _rev("aaa", 1, ("f.go", 1)),
            _rev("bbb", 2, ("f.go", 1)),
            _rev("ccc", 3, ("f.go", 1)),
        ]

        result = reconcile(revisions, oracle)

        assert [len(r.profiles) for r in result] == [1, 1, 0]
        assert result[1].profiles[0].blocks[0].count == 2

    def test_file_is_folded_at_most_once(self, fake_oracle: Callable) -> None:
        """Once ccc's copy folds into aaa it is not compared again."""
        same = b"same"
        oracle = fake_oracle({("aaa", "f.go"): same, ("bbb", "f.go"): same, ("ccc", "f.go"): same})
        revisions = [
            _rev("aaa", 1, ("f.go", 1)),
            _rev("bbb", 2, ("f.go", 1)),
            _rev("ccc", 3, ("f.go", 1)),
        ]

        result = reconcile(revisions, oracle)

        assert result[0].profiles[0].blocks[0].count == 3
        assert oracle.compared == [("aaa", "bbb", "f.go"), ("aaa", "ccc", "f.go")]

    def test_oracle_failure_counts_as_different(self, fake_oracle: Callable) -> None:
        """A file missing from the oracle is kept per revision and logged."""
        oracle = fake_oracle({("aaa", "gen.go"): b"x"})
        revisions = [_rev("aaa", 1, ("gen.go", 1)), _rev("bbb", 2, ("gen.go", 1))]

        with capture_logs() as logs:
            result = reconcile(revisions, oracle)

        assert result[0].file_names == ["gen.go"]
        assert result[1].file_names == ["gen.go"]
        failures = [e for e in logs if e["event"] == "oracle_failed"]
        assert len(failures) == 1
        assert failures[0]["log_level"] == "warning"
        assert failures[0]["file"] == "gen.go"

    def test_files_only_in_later_revisions_are_kept(self, fake_oracle: Callable) -> None:
        oracle = fake_oracle()
        revisions = [_rev("aaa", 1, ("a.go", 1)), _rev("bbb", 2, ("b.go", 1))]

        result = reconcile(revisions, oracle)

        assert result[0].file_names == ["a.go"]
        assert result[1].file_names == ["b.go"]

    def test_inputs_are_not_mutated(self, fake_oracle: Callable) -> None:
        oracle = fake_oracle({("aaa", "f.go"): b"s", ("bbb", "f.go"): b"s"})
        revisions = [_rev("aaa", 1, ("f.go", 1)), _rev("bbb", 2, ("f.go", 4))]

        reconcile(revisions, oracle)

        assert revisions[0].profiles[0].blocks[0].count == 1
        assert revisions[1].file_names == ["f.go"]

    def test_single_revision_needs_no_oracle(self, fake_oracle: Callable) -> None:
        oracle = fake_oracle()

        result = reconcile([_rev("aaa", 1, ("a.go", 1), ("b.go", 0))], oracle)

        assert result[0].file_names == ["a.go", "b.go"]
        assert oracle.compared == []

    def test_no_revisions(self, fake_oracle: Callable) -> None:
        assert reconcile([], fake_oracle()) == []
