"""Capture identifiers, revision grouping, and per-revision merging."""

from covmerge.capture.grouping import (
    build_revision_sets,
    group_by_revision,
    merge_group,
    parse_capture_id,
    parse_capture_ids,
)
from covmerge.capture.models import CaptureUnit, RevisionGroup, RevisionProfiles

__all__ = [
    "CaptureUnit",
    "RevisionGroup",
    "RevisionProfiles",
    "build_revision_sets",
    "group_by_revision",
    "merge_group",
    "parse_capture_id",
    "parse_capture_ids",
]
