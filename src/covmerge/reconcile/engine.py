"""Cross-revision reconciliation.

Captures from different revisions can still cover byte-identical files.
Coverage for such a file is combined once and attributed to the earliest
revision; files whose content differs stay with their own revision.

Revisions are walked oldest first. For revision ``i`` every later revision
``j`` is asked, file by file, whether its content matches ``i``; matching
profiles fold into ``i`` and are removed from ``j``'s working set, so a
file is never folded twice and later comparisons only see the survivors.
The resulting attribution depends on this iteration order.
"""

from __future__ import annotations

from collections.abc import Sequence

from covmerge.capture.models import RevisionProfiles
from covmerge.core.logging import get_logger
from covmerge.profile.merge import add_profile
from covmerge.profile.models import Profile
from covmerge.reconcile.protocols import ContentOracle, OracleError

log = get_logger("reconcile")


def _is_same(oracle: ContentOracle, rev_a: str, rev_b: str, file_name: str) -> bool:
    """Ask the oracle; an oracle failure counts as "different"."""
    try:
        return oracle.same_content(rev_a, rev_b, file_name)
    except OracleError as e:
        log.warning(
            "oracle_failed",
            rev_a=rev_a,
            rev_b=rev_b,
            file=file_name,
            error=str(e),
        )
        return False


def reconcile(
    revisions: Sequence[RevisionProfiles],
    oracle: ContentOracle,
) -> list[RevisionProfiles]:
    """Attribute each file's coverage to the earliest revision sharing its content.

    Args:
        revisions: Per-revision merged profile sets, oldest first.
        oracle: Content-equality oracle.

    Returns:
        One entry per input revision, same order, holding only the profiles
        attributed to it.

    Raises:
        MergeError: If coalesced profiles conflict.
    """
    working: list[list[Profile]] = [list(r.profiles) for r in revisions]
    accumulated = [RevisionProfiles(r.revision, r.timestamp) for r in revisions]

    for i, current in enumerate(revisions):
        into = accumulated[i]
        for profile in working[i]:
            add_profile(into.profiles, profile)

        for j in range(i + 1, len(revisions)):
            later = revisions[j]
            survivors: list[Profile] = []
            for profile in working[j]:
                if _is_same(oracle, current.revision, later.revision, profile.file_name):
                    log.debug(
                        "profile_coalesced",
                        file=profile.file_name,
                        into=current.revision,
                        source=later.revision,
                    )
                    add_profile(into.profiles, profile)
                else:
                    survivors.append(profile)
            working[j] = survivors

    log.info(
        "reconcile_done",
        revisions=len(accumulated),
        files={r.revision: len(r.profiles) for r in accumulated},
    )
    return accumulated
