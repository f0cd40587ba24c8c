"""Final assembly of reconciled revisions into one profile set.

A file name owned by more than one revision after reconciliation has
genuinely different content per revision. Each such variant is renamed to
``<file_name>.<revision>`` and its source is materialized under that name
so the report can show the right text. Names owned by a single revision
keep their logical name.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass, field

from covmerge.capture.models import RevisionProfiles
from covmerge.core.errors import SnapshotError
from covmerge.core.logging import get_logger
from covmerge.profile.merge import add_profile
from covmerge.profile.models import Profile
from covmerge.reconcile.protocols import ContentOracle, OracleError
from covmerge.reconcile.snapshots import SourceSnapshots, variant_name

log = get_logger("assembly")


@dataclass(slots=True)
class Assembly:
    """Final merged set plus the renames applied to build it."""

    profiles: list[Profile] = field(default_factory=list)
    renamed: dict[str, list[str]] = field(default_factory=dict)  # logical name → variants


def find_collisions(revisions: Sequence[RevisionProfiles]) -> set[str]:
    """File names attributed to more than one revision."""
    owners = Counter(name for r in revisions for name in set(r.file_names))
    return {name for name, count in owners.items() if count > 1}


def assemble(
    revisions: Sequence[RevisionProfiles],
    oracle: ContentOracle,
    snapshots: SourceSnapshots,
) -> Assembly:
    """Fold reconciled revisions into one set, renaming colliding variants.

    Raises:
        SnapshotError: If a colliding variant's content cannot be fetched
            or written.
        MergeError: If profiles conflict (e.g. mixed modes).
    """
    collisions = find_collisions(revisions)
    result = Assembly()

    for rev in revisions:
        for profile in rev.profiles:
            if profile.file_name not in collisions:
                add_profile(result.profiles, profile)
                continue

            try:
                content = oracle.read_file(rev.revision, profile.file_name)
            except OracleError as e:
                raise SnapshotError.fetch_failed(rev.revision, profile.file_name, str(e)) from e
            snapshots.write(rev.revision, profile.file_name, content)

            renamed = variant_name(profile.file_name, rev.revision)
            result.renamed.setdefault(profile.file_name, []).append(renamed)
            add_profile(result.profiles, profile.copy(file_name=renamed))

    if result.renamed:
        log.info(
            "variants_renamed",
            files=len(result.renamed),
            variants=sum(len(v) for v in result.renamed.values()),
        )
    return result
