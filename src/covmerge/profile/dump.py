"""Serialization of merged profiles back to the Go coverage profile format."""

import io
from collections.abc import Sequence
from typing import TextIO

from covmerge.profile.models import Profile


def dump_profiles(profiles: Sequence[Profile], out: TextIO) -> None:
    """Write profiles in ``go test -coverprofile`` format.

    The mode line comes from the first profile; an empty set writes nothing.
    Errors from ``out`` propagate unchanged.
    """
    if not profiles:
        return
    out.write(f"mode: {profiles[0].mode}\n")
    for p in profiles:
        for b in p.blocks:
            out.write(
                f"{p.file_name}:{b.start_line}.{b.start_col},{b.end_line}.{b.end_col} "
                f"{b.num_stmt} {b.count}\n"
            )


def dumps_profiles(profiles: Sequence[Profile]) -> str:
    buf = io.StringIO()
    dump_profiles(profiles, buf)
    return buf.getvalue()
