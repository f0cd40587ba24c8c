"""Go coverage profile parser.

Go test produces coverage profiles with format:
mode: set|count|atomic
<package>/<file>:<startline>.<startcol>,<endline>.<endcol> <numstmt> <count>

Example:
mode: set
github.com/user/pkg/main.go:10.2,12.16 3 1
github.com/user/pkg/main.go:15.2,20.16 5 0

- mode: set (0/1), count (hit count), atomic (thread-safe count)
- numstmt: number of statements in block
- count: execution count (0 = not covered)

Unlike a line-oriented summary, block positions are kept exactly: the merge
engine needs them to detect inconsistent captures.
"""

import re
from pathlib import Path

from covmerge.core.errors import CaptureError, MergeError
from covmerge.profile.models import MODE_SET, Block, Profile

_MODE_PREFIX = "mode: "
_LINE_RE = re.compile(r"^(.+):(\d+)\.(\d+),(\d+)\.(\d+) (\d+) (\d+)$")


def parse_profiles(path: Path) -> list[Profile]:
    """Parse a coverage profile file into profiles sorted by file name.

    Raises:
        CaptureError: If the file cannot be read or is malformed.
        MergeError: If one capture reports overlapping blocks, or the same
            block twice with different statement counts.
    """
    try:
        content = path.read_text()
    except (OSError, UnicodeDecodeError) as e:
        raise CaptureError.read_error(str(path), str(e)) from e
    return parse_profiles_text(content, source=str(path))


def parse_profiles_text(content: str, *, source: str = "<string>") -> list[Profile]:
    """Parse coverage profile text. See parse_profiles."""
    mode = ""
    files: dict[str, Profile] = {}

    for lineno, raw in enumerate(content.splitlines(), start=1):
        line = raw.strip()
        if not line:
            continue

        if line.startswith("mode:"):
            line_mode = line[len(_MODE_PREFIX) :].strip()
            if not line.startswith(_MODE_PREFIX) or not line_mode:
                raise CaptureError.parse_error(source, f"bad mode line: {line}", lineno)
            if mode and line_mode != mode:
                raise CaptureError.parse_error(
                    source, f"mode changed from {mode!r} to {line_mode!r}", lineno
                )
            mode = line_mode
            continue

        if not mode:
            raise CaptureError.parse_error(source, f"bad mode line: {line}", lineno)

        m = _LINE_RE.match(line)
        if m is None:
            raise CaptureError.parse_error(source, f"line does not match format: {line}", lineno)

        file_name = m.group(1)
        start_line, start_col, end_line, end_col, num_stmt, count = (
            int(g) for g in m.groups()[1:]
        )
        if (start_line, start_col) > (end_line, end_col):
            raise CaptureError.parse_error(source, f"block ends before it starts: {line}", lineno)

        profile = files.get(file_name)
        if profile is None:
            profile = files[file_name] = Profile(file_name=file_name, mode=mode)
        profile.blocks.append(Block(start_line, start_col, end_line, end_col, num_stmt, count))

    profiles = sorted(files.values(), key=lambda p: p.file_name)
    for profile in profiles:
        _fold_duplicate_blocks(profile)
    return profiles


def _fold_duplicate_blocks(profile: Profile) -> None:
    """Sort blocks by start and fold samples reported for the same span.

    Raises:
        MergeError: If two blocks of the capture overlap without sharing a span.
    """
    profile.blocks.sort(key=lambda b: b.start)

    folded: list[Block] = []
    for block in profile.blocks:
        if folded:
            last = folded[-1]
            if last.start == block.start:
                if last.end != block.end:
                    raise MergeError.overlap("overlapping merge", profile.file_name, last, block)
                if last.num_stmt != block.num_stmt:
                    raise MergeError.inconsistent_stmts(
                        profile.file_name, last.num_stmt, block.num_stmt
                    )
                if profile.mode == MODE_SET:
                    last.count |= block.count
                else:
                    last.count += block.count
                continue
            if last.end > block.start:
                raise MergeError.overlap("overlap before", profile.file_name, last, block)
        folded.append(block)
    profile.blocks = folded
