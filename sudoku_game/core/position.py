"""Cell coordinates and cells of a Sudoku grid."""

from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Optional

from .constants import ROW_COUNT_IN_GRID, COLUMN_COUNT_IN_GRID
from .errors import check_index, check_digit


@dataclass(frozen=True, order=True)
class Position:
    """
    A (row, column) coordinate within the 9x9 grid.

    Positions compare lexicographically, row first, so sorting a collection
    of positions yields row-major order.
    """
    row: int
    column: int

    def __post_init__(self):
        check_index(self.row, ROW_COUNT_IN_GRID, "Row")
        check_index(self.column, COLUMN_COUNT_IN_GRID, "Column")

    def __str__(self) -> str:
        return f"({self.row}, {self.column})"


@dataclass(frozen=True)
class Cell:
    """
    One cell of a grid: its coordinates and an optional digit.

    ``id`` is the persistent identity assigned by a storage layer, or None
    if the cell was never stored.
    """
    row: int
    column: int
    value: Optional[int] = None
    id: Optional[int] = None

    def __post_init__(self):
        check_index(self.row, ROW_COUNT_IN_GRID, "Row")
        check_index(self.column, COLUMN_COUNT_IN_GRID, "Column")
        if self.value is not None:
            check_digit(self.value)

    @property
    def position(self) -> Position:
        return Position(self.row, self.column)

    @property
    def is_filled(self) -> bool:
        return self.value is not None

    @property
    def is_empty(self) -> bool:
        return self.value is None

    def with_value(self, value: Optional[int]) -> Cell:
        """Return a new, unstored cell at the same position holding ``value``."""
        return replace(self, value=value, id=None)

    def without_id(self) -> Cell:
        return self if self.id is None else replace(self, id=None)

    def value_as_string(self) -> str:
        return "" if self.value is None else str(self.value)
