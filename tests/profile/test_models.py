"""Tests for profile data models."""

from covmerge.profile.models import Block, Profile


class TestBlock:
    def test_positions(self) -> None:
        block = Block(3, 4, 7, 2, 5, 1)

        assert block.start == (3, 4)
        assert block.end == (7, 2)

    def test_positions_order_by_line_then_column(self) -> None:
        assert Block(1, 9, 2, 1, 1, 0).start < Block(2, 1, 3, 1, 1, 0).start
        assert Block(2, 1, 3, 1, 1, 0).start < Block(2, 5, 3, 1, 1, 0).start

    def test_copy_is_independent(self) -> None:
        block = Block(1, 1, 2, 1, 1, 1)
        clone = block.copy()

        clone.count = 9

        assert block.count == 1
        assert clone == Block(1, 1, 2, 1, 1, 9)

    def test_str_uses_profile_notation(self) -> None:
        assert str(Block(10, 2, 12, 16, 3, 1)) == "10.2,12.16 3 1"


class TestProfile:
    def test_copy_deep_copies_blocks(self) -> None:
        profile = Profile("a.go", "count", [Block(1, 1, 2, 1, 1, 1)])

        clone = profile.copy()
        clone.blocks[0].count = 5

        assert profile.blocks[0].count == 1
        assert clone.file_name == "a.go"

    def test_copy_can_rename(self) -> None:
        profile = Profile("a.go", "set", [Block(1, 1, 2, 1, 1, 1)])

        renamed = profile.copy(file_name="a.go.abc")

        assert renamed.file_name == "a.go.abc"
        assert profile.file_name == "a.go"
        assert renamed.blocks == profile.blocks

    def test_same_mode(self) -> None:
        assert Profile("a.go", "set").same_mode(Profile("b.go", "set"))
        assert not Profile("a.go", "set").same_mode(Profile("a.go", "count"))

    def test_statement_totals(self) -> None:
        profile = Profile(
            "a.go",
            "count",
            [Block(1, 1, 2, 1, 2, 0), Block(3, 1, 4, 1, 3, 5), Block(5, 1, 6, 1, 1, 1)],
        )

        assert profile.num_stmts == 6
        assert profile.covered_stmts == 4
