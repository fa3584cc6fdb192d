"""Immutable 9x9 Sudoku grid built from nine rows."""

from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

import numpy as np

from .cell_group import Row, Column, Block, CellGroup, all_valid
from .constants import (
    ROW_COUNT_IN_GRID,
    COLUMN_COUNT_IN_GRID,
    CELL_COUNT_IN_GRID,
    ROW_COUNT_IN_BLOCK,
    COLUMN_COUNT_IN_BLOCK,
    NUMBER_OF_BLOCK_ROWS,
    NUMBER_OF_BLOCK_COLUMNS,
)
from .errors import OutOfRange, ShapeMismatch, check_index, check_digit
from .position import Cell, Position

ROW_DIVIDER = "-" * 21


@dataclass(frozen=True)
class Grid:
    """
    A Sudoku grid of nine rows, indexed 0 to 8 in order.

    Grids are never mutated. ``update_cell`` and ``fill_cell_if_empty`` return
    a new grid that shares all untouched rows with the original. Columns and
    blocks are derived on demand as fresh values whose cells carry no
    persistent identity.

    ``id`` is the persistent identity assigned by a storage layer, or None.
    """
    rows: Tuple[Row, ...]
    id: Optional[int] = None

    def __post_init__(self):
        rows = tuple(self.rows)
        object.__setattr__(self, "rows", rows)
        if len(rows) != ROW_COUNT_IN_GRID:
            raise ShapeMismatch(f"Grid needs {ROW_COUNT_IN_GRID} rows, got {len(rows)}")
        if [row.index for row in rows] != list(range(ROW_COUNT_IN_GRID)):
            raise ShapeMismatch(f"Row indices must be 0-8 in order, got {[row.index for row in rows]}")

    @classmethod
    def empty(cls) -> Grid:
        return cls.from_values([[None] * COLUMN_COUNT_IN_GRID for _ in range(ROW_COUNT_IN_GRID)])

    @classmethod
    def from_values(cls, values: Sequence[Sequence[Optional[int]]]) -> Grid:
        """
        Create a grid from nine rows of nine optional values each.

        Args:
            values: Row-major nested values, None for an empty cell.
        """
        values = list(values)
        if len(values) != ROW_COUNT_IN_GRID:
            raise ShapeMismatch(f"Expected {ROW_COUNT_IN_GRID} rows of values, got {len(values)}")
        return cls(tuple(Row.from_values(i, row_values) for i, row_values in enumerate(values)))

    @classmethod
    def from_cells(cls, cells: Iterable[Cell]) -> Grid:
        """
        Create a grid by placing each cell at its position.

        Positions not covered by any cell are empty. Two cells at the same
        position are rejected, whatever their values. Cell identities are
        kept.

        Raises:
            ShapeMismatch: If two cells share a position.
        """
        cells_by_pos: Dict[Position, Cell] = {}
        for cell in cells:
            pos = cell.position
            if pos in cells_by_pos:
                raise ShapeMismatch(f"More than one cell at position {pos}")
            cells_by_pos[pos] = cell

        rows = []
        for row in range(ROW_COUNT_IN_GRID):
            row_cells = tuple(
                cells_by_pos.get(Position(row, col), Cell(row, col))
                for col in range(COLUMN_COUNT_IN_GRID)
            )
            rows.append(Row(row, row_cells))
        return cls(tuple(rows))

    @classmethod
    def from_string(cls, s: str) -> Grid:
        """
        Create a grid from an 81 character string.

        Args:
            s: Row-major digits, '0' or '.' for empty. Whitespace is ignored.
        """
        s = "".join(ch for ch in s if not ch.isspace())
        if len(s) != CELL_COUNT_IN_GRID:
            raise ShapeMismatch(f"String length must be {CELL_COUNT_IN_GRID}, got {len(s)}")

        values: List[List[Optional[int]]] = []
        for i in range(ROW_COUNT_IN_GRID):
            row_values: List[Optional[int]] = []
            for ch in s[i * COLUMN_COUNT_IN_GRID:(i + 1) * COLUMN_COUNT_IN_GRID]:
                if ch in "0.":
                    row_values.append(None)
                elif ch in "123456789":
                    row_values.append(int(ch))
                else:
                    raise ShapeMismatch(f"Invalid character {ch!r} in grid string")
            values.append(row_values)
        return cls.from_values(values)

    @classmethod
    def from_array(cls, arr: np.ndarray) -> Grid:
        """
        Create a grid from a 9x9 array, 0 meaning empty.

        Float arrays are accepted as long as every value is a whole number.

        Raises:
            ShapeMismatch: If the array is not 9x9.
            OutOfRange: If a value is fractional or not a digit 0-9.
        """
        arr = np.asarray(arr)
        if arr.shape != (ROW_COUNT_IN_GRID, COLUMN_COUNT_IN_GRID):
            raise ShapeMismatch(f"Array shape must be (9, 9), got {arr.shape}")

        values: List[List[Optional[int]]] = []
        for row in arr.tolist():
            row_values: List[Optional[int]] = []
            for v in row:
                if isinstance(v, float):
                    if not v.is_integer():
                        raise OutOfRange(f"Cell values must be whole numbers, got {v!r}")
                    v = int(v)
                row_values.append(None if v == 0 else v)
            values.append(row_values)
        return cls.from_values(values)

    def with_id(self, grid_id: int) -> Grid:
        return replace(self, id=grid_id)

    def row(self, row: int) -> Row:
        return self.rows[check_index(row, ROW_COUNT_IN_GRID, "Row")]

    def column(self, column: int) -> Column:
        check_index(column, COLUMN_COUNT_IN_GRID, "Column")
        return Column.from_values(column, [row.cell(column).value for row in self.rows])

    def cell(self, row: int, column: int) -> Cell:
        return self.row(row).cell(column)

    def cell_at(self, pos: Position) -> Cell:
        return self.cell(pos.row, pos.column)

    def containing_block(self, row: int, column: int) -> Block:
        check_index(row, ROW_COUNT_IN_GRID, "Row")
        check_index(column, COLUMN_COUNT_IN_GRID, "Column")
        return self._block_at(
            ROW_COUNT_IN_BLOCK * (row // ROW_COUNT_IN_BLOCK),
            COLUMN_COUNT_IN_BLOCK * (column // COLUMN_COUNT_IN_BLOCK),
        )

    def columns(self) -> List[Column]:
        return [self.column(j) for j in range(COLUMN_COUNT_IN_GRID)]

    def blocks(self) -> List[Block]:
        return [self._block_at(pos.row, pos.column) for pos in self.block_upper_left_positions()]

    def groups(self) -> List[CellGroup]:
        """All 27 rows, columns and blocks."""
        return [*self.rows, *self.columns(), *self.blocks()]

    def cells(self) -> List[Cell]:
        return [cell for row in self.rows for cell in row.cells]

    def optional_values(self) -> List[Optional[int]]:
        return [cell.value for cell in self.cells()]

    def filled_cell_positions(self) -> List[Position]:
        return [cell.position for cell in self.cells() if cell.is_filled]

    @staticmethod
    def block_upper_left_positions() -> List[Position]:
        return [
            Position(x * ROW_COUNT_IN_BLOCK, y * COLUMN_COUNT_IN_BLOCK)
            for x in range(NUMBER_OF_BLOCK_ROWS)
            for y in range(NUMBER_OF_BLOCK_COLUMNS)
        ]

    def count_filled(self) -> int:
        return sum(1 for cell in self.cells() if cell.is_filled)

    def count_empty(self) -> int:
        return CELL_COUNT_IN_GRID - self.count_filled()

    def is_filled(self) -> bool:
        return all(row.is_filled() for row in self.rows)

    def is_still_valid(self) -> bool:
        """
        Check that no row, column or block contains a digit twice.
        Does not check if the grid is complete.
        """
        return all_valid(self.rows) and all_valid(self.columns()) and all_valid(self.blocks())

    def is_solved(self) -> bool:
        """
        Check if the grid is completely filled without conflicts.

        A solved grid is not necessarily the only solution of the puzzle it
        started from.
        """
        return self.is_filled() and self.is_still_valid()

    def duplicates(self) -> Set[Position]:
        """Positions of all cells that share a digit with another cell of a row, column or block."""
        conflicting: Set[Position] = set()
        for group in self.groups():
            for cells in group.duplicates().values():
                conflicting.update(cell.position for cell in cells)
        return conflicting

    def fill_cell_if_empty(self, pos: Position, value: int) -> Optional[Grid]:
        """
        Fill the cell at ``pos`` with ``value`` if that cell is empty.

        The Sudoku rules are NOT checked: the result may contain duplicate
        digits. Call ``is_still_valid`` on the result to find out.

        Returns:
            The updated grid, or None if the cell was already filled.
        """
        check_digit(value)
        if self.cell_at(pos).is_filled:
            return None
        return self.update_cell(pos, value)

    def update_cell(self, pos: Position, value: Optional[int]) -> Grid:
        """
        Replace the value at ``pos`` unconditionally; None clears the cell.

        Only the touched row is rebuilt; the result has no persistent identity.
        """
        if value is not None:
            check_digit(value)
        old_row = self.row(pos.row)
        values = old_row.optional_values()
        values[pos.column] = value
        new_row = Row.from_values(pos.row, values)
        rows = self.rows[:pos.row] + (new_row,) + self.rows[pos.row + 1:]
        return Grid(rows)

    def to_string(self) -> str:
        """Convert to the compact 81 character form, '0' for empty cells."""
        return "".join(str(v) if v is not None else "0" for v in self.optional_values())

    def to_array(self) -> np.ndarray:
        return np.array(
            [[v or 0 for v in row.optional_values()] for row in self.rows],
            dtype=np.int32,
        )

    def show(self) -> str:
        """Render the grid as text, with '-' for empty cells and dividers between blocks."""
        lines = []
        for i, row in enumerate(self.rows):
            if i and i % ROW_COUNT_IN_BLOCK == 0:
                lines.append(ROW_DIVIDER)
            lines.append(row.show())
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.show()

    def _block_at(self, upper_left_row: int, upper_left_column: int) -> Block:
        values = [
            self.cell(upper_left_row + x, upper_left_column + y).value
            for x in range(ROW_COUNT_IN_BLOCK)
            for y in range(COLUMN_COUNT_IN_BLOCK)
        ]
        return Block.from_values(upper_left_row, upper_left_column, values)
