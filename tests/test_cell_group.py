"""Unit tests for rows, columns and blocks."""

import pytest
from sudoku_game.core.cell_group import Block, Column, Row
from sudoku_game.core.errors import OutOfRange, ShapeMismatch
from sudoku_game.core.position import Cell, Position


class TestRow:
    """Tests for Row."""

    def test_complete_row_is_valid(self):
        """A row holding 1 to 9 is filled and valid."""
        row = Row.from_values(0, [1, 2, 3, 4, 5, 6, 7, 8, 9])
        assert row.is_still_valid()
        assert row.contains_no_duplicates()
        assert row.is_filled()
        assert row.duplicates() == {}

    def test_duplicate_digit(self):
        """A repeated digit makes the row invalid and is reported with both cells."""
        row = Row.from_values(0, [1, 1, 3, 4, 5, 6, 7, 8, 9])
        assert not row.is_still_valid()
        assert row.is_filled()
        assert row.duplicates() == {1: frozenset({row.cell(0), row.cell(1)})}

    def test_several_duplicates(self):
        """Every repeated digit gets its own entry."""
        row = Row.from_values(3, [2, None, 2, 5, None, 5, 5, None, 9])
        dups = row.duplicates()
        assert set(dups) == {2, 5}
        assert {c.column for c in dups[5]} == {3, 5, 6}

    def test_gaps_are_not_duplicates(self):
        """Empty cells never count as duplicates."""
        row = Row.from_values(4, [None, None, 3, None, None, None, None, None, 9])
        assert row.contains_no_duplicates()
        assert not row.is_filled()

    def test_cells_ordered_by_column(self):
        """Test the canonical order and coordinates of a row's cells."""
        row = Row.from_values(5, [None] * 9)
        assert [c.position for c in row.cells] == [Position(5, j) for j in range(9)]
        assert all(c.id is None for c in row.cells)

    def test_wrong_shape(self):
        """Cells from another row are rejected."""
        cells = [Cell(1, j) for j in range(9)]
        with pytest.raises(ShapeMismatch):
            Row(0, cells)

    def test_wrong_cell_count(self):
        """Test that a row needs exactly nine cells."""
        with pytest.raises(ShapeMismatch):
            Row(0, [Cell(0, j) for j in range(8)])
        with pytest.raises(ShapeMismatch):
            Row.from_values(0, [1, 2, 3])

    def test_shape_ignores_identity(self):
        """Cells with an identity still match the row shape."""
        row = Row(2, [Cell(2, j, None, id=100 + j) for j in range(9)])
        assert row.cell(8).id == 108

    def test_index_out_of_range(self):
        with pytest.raises(OutOfRange):
            Row.from_values(9, [None] * 9)
        with pytest.raises(OutOfRange):
            Row.from_values(0, [None] * 9).cell(9)

    def test_show(self):
        """Test the textual rendering of a row."""
        row = Row.from_values(0, [5, 3, None, None, 7, None, None, None, None])
        assert row.show() == "5 3 - | - 7 - | - - -"


class TestColumn:
    """Tests for Column."""

    def test_cells_ordered_by_row(self):
        """Test the canonical order and coordinates of a column's cells."""
        column = Column.from_values(7, list(range(1, 10)))
        assert [c.position for c in column.cells] == [Position(i, 7) for i in range(9)]
        assert column.cell(3).value == 4
        assert column.is_still_valid()

    def test_duplicate_digit(self):
        column = Column.from_values(0, [8, None, None, None, None, None, None, None, 8])
        assert not column.is_still_valid()
        assert column.duplicates()[8] == frozenset({column.cell(0), column.cell(8)})

    def test_wrong_shape(self):
        """Cells of a row cannot form a column."""
        with pytest.raises(ShapeMismatch):
            Column(0, [Cell(0, j) for j in range(9)])


class TestBlock:
    """Tests for Block."""

    def test_cells_row_major(self):
        """Test the row-major order inside the block."""
        block = Block.from_values(3, 6, list(range(1, 10)))
        assert [c.position for c in block.cells] == [
            Position(r, c) for r in range(3, 6) for c in range(6, 9)
        ]
        assert block.cell(1, 2).value == 6
        assert block.cell(1, 2).position == Position(4, 8)
        assert block.is_still_valid()
        assert block.is_filled()

    def test_corner_must_be_divisible_by_three(self):
        """Test that a block corner off the 3x3 lattice is rejected."""
        with pytest.raises(ShapeMismatch):
            Block.from_values(1, 0, [None] * 9)
        with pytest.raises(ShapeMismatch):
            Block.from_values(0, 4, [None] * 9)

    def test_wrong_shape(self):
        """Nine cells of one row do not form a block."""
        with pytest.raises(ShapeMismatch):
            Block(0, 0, [Cell(0, j) for j in range(9)])

    def test_duplicate_digit(self):
        block = Block.from_values(0, 0, [1, None, None, None, 1, None, None, None, None])
        assert not block.contains_no_duplicates()
        assert {c.position for c in block.duplicates()[1]} == {Position(0, 0), Position(1, 1)}

    def test_block_rows_and_columns(self):
        """Test splitting a block into its rows and columns of three."""
        block = Block.from_values(0, 3, list(range(1, 10)))
        assert [[c.value for c in r] for r in block.block_rows()] == [[1, 2, 3], [4, 5, 6], [7, 8, 9]]
        assert [[c.value for c in col] for col in block.block_columns()] == [[1, 4, 7], [2, 5, 8], [3, 6, 9]]

    def test_block_cell_out_of_range(self):
        with pytest.raises(OutOfRange):
            Block.from_values(0, 0, [None] * 9).cell(3, 0)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
