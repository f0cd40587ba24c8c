"""Coverage profile merging with overlap detection.

Captures taken against the same source revision must tile each file with
the same blocks. Merging therefore only ever combines blocks with identical
spans or inserts blocks that fit between existing ones:

- identical span: counts combine (set → OR, count/atomic → sum)
- same start, different end: the captures disagree, merge fails
- overlapping a neighbour: the captures disagree, merge fails

Nothing is resolved silently; a failed merge aborts the run.
"""

from bisect import bisect_left
from collections.abc import Iterable
from operator import attrgetter

from covmerge.core.errors import MergeError
from covmerge.profile.models import MODE_ATOMIC, MODE_COUNT, MODE_SET, Block, Profile

_block_start = attrgetter("start_line", "start_col")
_file_name = attrgetter("file_name")


def merge_block(into: Profile, block: Block, start_index: int = 0) -> int:
    """Merge one block into a profile whose blocks are sorted by start.

    Args:
        into: Profile to merge into (mutated in place).
        block: Incoming block.
        start_index: Lower bound for the search. Callers merging an already
            sorted block sequence pass the previous return value.

    Returns:
        Search hint for the next incoming block.

    Raises:
        MergeError: On overlapping spans or an unsupported mode.
    """
    blocks = into.blocks
    i = bisect_left(blocks, block.start, lo=start_index, key=_block_start)

    if i < len(blocks) and blocks[i].start == block.start:
        existing = blocks[i]
        if existing.end != block.end:
            raise MergeError.overlap("overlapping merge", into.file_name, existing, block)
        if into.mode == MODE_SET:
            existing.count |= block.count
        elif into.mode in (MODE_COUNT, MODE_ATOMIC):
            existing.count += block.count
        else:
            raise MergeError.unsupported_mode(into.file_name, into.mode)
    else:
        if i > 0 and blocks[i - 1].end > block.end:
            raise MergeError.overlap("overlap before", into.file_name, blocks[i - 1], block)
        if i < len(blocks) and blocks[i].start < block.end:
            raise MergeError.overlap("overlap after", into.file_name, blocks[i], block)
        blocks.insert(i, block.copy())

    return i + 1


def merge_profiles(into: Profile, other: Profile) -> None:
    """Merge all blocks of ``other`` into ``into`` (same file).

    Raises:
        MergeError: If the modes differ or any block conflicts.
    """
    if not into.same_mode(other):
        raise MergeError.mode_mismatch(into.file_name, into.mode, other.mode)

    # Incoming blocks are sorted, so each search can start where the last ended
    start_index = 0
    for block in other.blocks:
        start_index = merge_block(into, block, start_index)


def add_profile(profiles: list[Profile], profile: Profile) -> list[Profile]:
    """Insert or merge ``profile`` into a list sorted by file name.

    The list holds at most one profile per file name, all in one mode. New
    entries are copies, so later merges never mutate the caller's profile.

    Returns:
        The same list, for chaining.

    Raises:
        MergeError: If ``profile`` has a different mode than the set or
            conflicts with the existing profile of the same file.
    """
    if profiles and not profiles[0].same_mode(profile):
        raise MergeError.mode_mismatch(profile.file_name, profiles[0].mode, profile.mode)

    i = bisect_left(profiles, profile.file_name, key=_file_name)
    if i < len(profiles) and profiles[i].file_name == profile.file_name:
        merge_profiles(profiles[i], profile)
    else:
        profiles.insert(i, profile.copy())
    return profiles


def merge_profile_sets(*sets: Iterable[Profile]) -> list[Profile]:
    """Fold several profile sets into one new sorted set."""
    merged: list[Profile] = []
    for profile_set in sets:
        for profile in profile_set:
            add_profile(merged, profile)
    return merged
