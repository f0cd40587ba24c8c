"""Go coverage profiles: model, parsing, merging, and serialization.

Usage:
    from covmerge.profile import parse_profiles, add_profile, dump_profiles

    merged: list[Profile] = []
    for path in paths:
        for p in parse_profiles(path):
            add_profile(merged, p)

    with open("cover.txt", "w") as out:
        dump_profiles(merged, out)
"""

from covmerge.profile.dump import dump_profiles, dumps_profiles
from covmerge.profile.merge import (
    add_profile,
    merge_block,
    merge_profile_sets,
    merge_profiles,
)
from covmerge.profile.models import (
    MODE_ATOMIC,
    MODE_COUNT,
    MODE_SET,
    SUPPORTED_MODES,
    Block,
    Profile,
)
from covmerge.profile.parser import parse_profiles, parse_profiles_text

__all__ = [
    # Models
    "Block",
    "Profile",
    "MODE_ATOMIC",
    "MODE_COUNT",
    "MODE_SET",
    "SUPPORTED_MODES",
    # Parsing
    "parse_profiles",
    "parse_profiles_text",
    # Merge
    "add_profile",
    "merge_block",
    "merge_profile_sets",
    "merge_profiles",
    # Serialization
    "dump_profiles",
    "dumps_profiles",
]
