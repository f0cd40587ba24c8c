"""Capture and revision data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from covmerge.profile.models import Profile
from covmerge.profile.parser import parse_profiles


@dataclass(slots=True)
class CaptureUnit:
    """One coverage capture tagged with its capture time and revision.

    Profiles are read from disk on first ``load()``, not when the
    identifier is parsed.
    """

    path: Path
    timestamp: int
    revision: str
    profiles: list[Profile] | None = None

    def load(self) -> list[Profile]:
        if self.profiles is None:
            self.profiles = parse_profiles(self.path)
        return self.profiles


@dataclass(slots=True)
class RevisionGroup:
    """Captures of one revision, oldest first."""

    revision: str
    captures: list[CaptureUnit] = field(default_factory=list)

    @property
    def timestamp(self) -> int:
        """Representative timestamp: the earliest capture."""
        return self.captures[0].timestamp


@dataclass(slots=True)
class RevisionProfiles:
    """Merged profile set attributed to one revision."""

    revision: str
    timestamp: int
    profiles: list[Profile] = field(default_factory=list)

    @property
    def file_names(self) -> list[str]:
        return [p.file_name for p in self.profiles]
