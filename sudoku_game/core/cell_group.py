"""Rows, columns and blocks: the groups of nine cells that must hold distinct digits."""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence, Tuple

from .constants import (
    ROW_COUNT_IN_GRID,
    COLUMN_COUNT_IN_GRID,
    CELL_COUNT_IN_BLOCK,
    ROW_COUNT_IN_BLOCK,
    COLUMN_COUNT_IN_BLOCK,
)
from .errors import ShapeMismatch, check_index
from .position import Cell, Position


class CellGroup(ABC):
    """
    A group of exactly nine cells subject to the "no duplicate digit" rule.

    Subclasses only decide which positions their cells occupy; validity and
    duplicate detection are shared and work on ``cells`` alone.
    """

    cells: Tuple[Cell, ...]

    @abstractmethod
    def positions(self) -> List[Position]:
        """The positions the cells must occupy, in canonical order."""

    def _check_shape(self) -> None:
        if len(self.cells) != CELL_COUNT_IN_BLOCK:
            raise ShapeMismatch(
                f"{type(self).__name__} needs {CELL_COUNT_IN_BLOCK} cells, got {len(self.cells)}"
            )
        actual = [cell.position for cell in self.cells]
        if actual != self.positions():
            raise ShapeMismatch(
                f"Cells of {type(self).__name__} are at {[str(p) for p in actual]}"
            )

    def optional_values(self) -> List[Optional[int]]:
        return [cell.value for cell in self.cells]

    def is_filled(self) -> bool:
        return all(cell.is_filled for cell in self.cells)

    def duplicates(self) -> Dict[int, FrozenSet[Cell]]:
        """
        Map each digit that occurs more than once to the cells holding it.

        Returns:
            Dict of digit -> cells sharing that digit. Empty if the group is valid.
        """
        by_value: Dict[int, List[Cell]] = {}
        for cell in self.cells:
            if cell.is_filled:
                by_value.setdefault(cell.value, []).append(cell)
        return {
            value: frozenset(cells)
            for value, cells in by_value.items()
            if len(cells) >= 2
        }

    def contains_no_duplicates(self) -> bool:
        return not self.duplicates()

    def is_still_valid(self) -> bool:
        """A group is still valid as long as no digit occurs twice."""
        return self.contains_no_duplicates()


def _cells_from_values(positions: List[Position], values: Sequence[Optional[int]]) -> Tuple[Cell, ...]:
    values = list(values)
    if len(values) != len(positions):
        raise ShapeMismatch(f"Expected {len(positions)} values, got {len(values)}")
    return tuple(Cell(pos.row, pos.column, value) for pos, value in zip(positions, values))


@dataclass(frozen=True)
class Row(CellGroup):
    """A grid row; its cells are ordered by column."""
    index: int
    cells: Tuple[Cell, ...]

    def __post_init__(self):
        check_index(self.index, ROW_COUNT_IN_GRID, "Row index")
        object.__setattr__(self, "cells", tuple(self.cells))
        self._check_shape()

    @classmethod
    def from_values(cls, index: int, values: Sequence[Optional[int]]) -> Row:
        """Create a row of unstored cells from nine optional values."""
        check_index(index, ROW_COUNT_IN_GRID, "Row index")
        return cls(index, _cells_from_values(_row_positions(index), values))

    def positions(self) -> List[Position]:
        return _row_positions(self.index)

    def cell(self, column: int) -> Cell:
        return self.cells[check_index(column, COLUMN_COUNT_IN_GRID, "Column")]

    def show(self) -> str:
        shown = [cell.value_as_string() or "-" for cell in self.cells]
        return " | ".join(" ".join(shown[i:i + 3]) for i in range(0, 9, 3))


@dataclass(frozen=True)
class Column(CellGroup):
    """A grid column; its cells are ordered by row."""
    index: int
    cells: Tuple[Cell, ...]

    def __post_init__(self):
        check_index(self.index, COLUMN_COUNT_IN_GRID, "Column index")
        object.__setattr__(self, "cells", tuple(self.cells))
        self._check_shape()

    @classmethod
    def from_values(cls, index: int, values: Sequence[Optional[int]]) -> Column:
        """Create a column of unstored cells from nine optional values."""
        check_index(index, COLUMN_COUNT_IN_GRID, "Column index")
        return cls(index, _cells_from_values(_column_positions(index), values))

    def positions(self) -> List[Position]:
        return _column_positions(self.index)

    def cell(self, row: int) -> Cell:
        return self.cells[check_index(row, ROW_COUNT_IN_GRID, "Row")]


@dataclass(frozen=True)
class Block(CellGroup):
    """
    One of the nine 3x3 sub-squares of the grid.

    The block is identified by its upper-left corner, whose row and column
    are both divisible by 3. Cells are ordered row-major within the block.
    """
    upper_left_row: int
    upper_left_column: int
    cells: Tuple[Cell, ...]

    def __post_init__(self):
        _check_corner(self.upper_left_row, self.upper_left_column)
        object.__setattr__(self, "cells", tuple(self.cells))
        self._check_shape()

    @classmethod
    def from_values(
        cls,
        upper_left_row: int,
        upper_left_column: int,
        values: Sequence[Optional[int]]
    ) -> Block:
        """Create a block of unstored cells from nine optional values in row-major order."""
        _check_corner(upper_left_row, upper_left_column)
        positions = _block_positions(upper_left_row, upper_left_column)
        return cls(upper_left_row, upper_left_column, _cells_from_values(positions, values))

    def positions(self) -> List[Position]:
        return _block_positions(self.upper_left_row, self.upper_left_column)

    def cell(self, block_row: int, block_column: int) -> Cell:
        """Get a cell by its coordinates relative to the block corner (0-2 each)."""
        check_index(block_row, ROW_COUNT_IN_BLOCK, "Block row")
        check_index(block_column, COLUMN_COUNT_IN_BLOCK, "Block column")
        return self.cells[COLUMN_COUNT_IN_BLOCK * block_row + block_column]

    def block_rows(self) -> List[Tuple[Cell, ...]]:
        return [
            tuple(self.cell(r, c) for c in range(COLUMN_COUNT_IN_BLOCK))
            for r in range(ROW_COUNT_IN_BLOCK)
        ]

    def block_columns(self) -> List[Tuple[Cell, ...]]:
        return [
            tuple(self.cell(r, c) for r in range(ROW_COUNT_IN_BLOCK))
            for c in range(COLUMN_COUNT_IN_BLOCK)
        ]


def _row_positions(index: int) -> List[Position]:
    return [Position(index, col) for col in range(COLUMN_COUNT_IN_GRID)]


def _column_positions(index: int) -> List[Position]:
    return [Position(row, index) for row in range(ROW_COUNT_IN_GRID)]


def _block_positions(upper_left_row: int, upper_left_column: int) -> List[Position]:
    return [
        Position(upper_left_row + r, upper_left_column + c)
        for r in range(ROW_COUNT_IN_BLOCK)
        for c in range(COLUMN_COUNT_IN_BLOCK)
    ]


def _check_corner(upper_left_row: int, upper_left_column: int) -> None:
    check_index(upper_left_row, ROW_COUNT_IN_GRID, "Block corner row")
    check_index(upper_left_column, COLUMN_COUNT_IN_GRID, "Block corner column")
    if upper_left_row % ROW_COUNT_IN_BLOCK or upper_left_column % COLUMN_COUNT_IN_BLOCK:
        raise ShapeMismatch(
            f"Block corner must be divisible by 3, got ({upper_left_row}, {upper_left_column})"
        )


def all_valid(groups: Iterable[CellGroup]) -> bool:
    return all(group.is_still_valid() for group in groups)
