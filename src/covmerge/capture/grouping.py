"""Capture identifier parsing, revision grouping, and per-revision merging.

Capture identifiers end in ``<timestamp>.<revision>``, e.g.
``cover.txt.1723042827.e24dac6``. Captures of the same revision are merged
oldest first; revisions are then ordered by their earliest capture.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from pathlib import Path

from covmerge.capture.models import CaptureUnit, RevisionGroup, RevisionProfiles
from covmerge.config.constants import CAPTURE_ID_SEPARATOR
from covmerge.core.errors import CaptureError
from covmerge.core.logging import get_logger
from covmerge.profile.merge import add_profile

log = get_logger("capture")

_TIMESTAMP_RE = re.compile(r"^[+-]?\d+$")


def parse_capture_id(identifier: str | Path) -> CaptureUnit:
    """Parse ``...<timestamp>.<revision>`` from a capture path's file name.

    Raises:
        CaptureError: If the timestamp or revision component is missing or
            the timestamp is not an integer.
    """
    path = Path(identifier)
    parts = path.name.split(CAPTURE_ID_SEPARATOR)
    if len(parts) < 2:
        raise CaptureError.malformed_id(str(identifier), "expected <name>.<timestamp>.<revision>")

    timestamp_str, revision = parts[-2], parts[-1]
    if not _TIMESTAMP_RE.match(timestamp_str):
        raise CaptureError.malformed_id(
            str(identifier), f"timestamp is not an integer: {timestamp_str!r}"
        )
    if not revision:
        raise CaptureError.malformed_id(str(identifier), "revision is empty")

    return CaptureUnit(path=path, timestamp=int(timestamp_str), revision=revision)


def parse_capture_ids(identifiers: Iterable[str | Path]) -> list[CaptureUnit]:
    """Parse every identifier up front so malformed input fails before any merge."""
    units = [parse_capture_id(i) for i in identifiers]
    for unit in units:
        log.debug(
            "capture_parsed", path=str(unit.path), timestamp=unit.timestamp, revision=unit.revision
        )
    return units


def group_by_revision(units: Iterable[CaptureUnit]) -> list[RevisionGroup]:
    """Group captures by revision, oldest capture first within each group.

    Groups are ordered by their earliest capture; ties keep the order in
    which revisions first appeared.
    """
    groups: dict[str, RevisionGroup] = {}
    for unit in units:
        group = groups.get(unit.revision)
        if group is None:
            group = groups[unit.revision] = RevisionGroup(revision=unit.revision)
        group.captures.append(unit)

    for group in groups.values():
        group.captures.sort(key=lambda u: u.timestamp)

    ordered = sorted(groups.values(), key=lambda g: g.timestamp)
    for group in ordered:
        log.debug(
            "revision_grouped",
            revision=group.revision,
            timestamp=group.timestamp,
            captures=len(group.captures),
        )
    return ordered


def merge_group(group: RevisionGroup) -> RevisionProfiles:
    """Load and merge all captures of one revision, oldest first."""
    merged = RevisionProfiles(revision=group.revision, timestamp=group.timestamp)
    for unit in group.captures:
        for profile in unit.load():
            add_profile(merged.profiles, profile)

    log.info(
        "revision_merged",
        revision=group.revision,
        captures=len(group.captures),
        files=len(merged.profiles),
    )
    return merged


def build_revision_sets(identifiers: Iterable[str | Path]) -> list[RevisionProfiles]:
    """Parse, group, and merge captures into one profile set per revision."""
    groups = group_by_revision(parse_capture_ids(identifiers))
    return [merge_group(g) for g in groups]
