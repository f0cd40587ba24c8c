"""Coverage profile data model.

One Profile per source file, holding the coverable blocks reported by
``go test -coverprofile``. Blocks are kept sorted by start position; the
merge engine mutates them in place.
"""

from __future__ import annotations

from dataclasses import dataclass, field

MODE_SET = "set"
MODE_COUNT = "count"
MODE_ATOMIC = "atomic"

SUPPORTED_MODES = frozenset({MODE_SET, MODE_COUNT, MODE_ATOMIC})

Position = tuple[int, int]  # (line, col), 1-based


@dataclass(slots=True)
class Block:
    """One coverable interval of a source file.

    ``num_stmt`` is a fact about the source; ``count`` is the execution
    count (count/atomic) or a 0/1 flag (set).
    """

    start_line: int
    start_col: int
    end_line: int
    end_col: int
    num_stmt: int
    count: int

    @property
    def start(self) -> Position:
        return (self.start_line, self.start_col)

    @property
    def end(self) -> Position:
        return (self.end_line, self.end_col)

    def copy(self) -> Block:
        return Block(
            self.start_line,
            self.start_col,
            self.end_line,
            self.end_col,
            self.num_stmt,
            self.count,
        )

    def __str__(self) -> str:
        return (
            f"{self.start_line}.{self.start_col},{self.end_line}.{self.end_col} "
            f"{self.num_stmt} {self.count}"
        )


@dataclass(slots=True)
class Profile:
    """Coverage data for a single source file."""

    file_name: str
    mode: str
    blocks: list[Block] = field(default_factory=list)

    def copy(self, *, file_name: str | None = None) -> Profile:
        """Independent copy, optionally under another file name."""
        return Profile(
            file_name=self.file_name if file_name is None else file_name,
            mode=self.mode,
            blocks=[b.copy() for b in self.blocks],
        )

    def same_mode(self, other: Profile) -> bool:
        return self.mode == other.mode

    @property
    def num_stmts(self) -> int:
        return sum(b.num_stmt for b in self.blocks)

    @property
    def covered_stmts(self) -> int:
        return sum(b.num_stmt for b in self.blocks if b.count > 0)
