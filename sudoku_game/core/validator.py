"""Validation utilities for Sudoku grids."""

from __future__ import annotations
from typing import List, Set, TYPE_CHECKING

from .constants import DIGITS

if TYPE_CHECKING:
    from .grid import Grid
    from .position import Position


def is_valid_placement(grid: Grid, pos: Position, value: int) -> bool:
    """
    Check if placing a value at ``pos`` keeps its row, column and block free of duplicates.

    The cell itself is not taken into account, so this also answers whether
    an already filled cell could be overwritten with ``value``.

    Args:
        grid: The Sudoku grid.
        pos: Target position.
        value: Digit to check (1 to 9).

    Returns:
        True if the placement is valid.
    """
    if value not in DIGITS:
        return False

    peers = (
        grid.row(pos.row).cells
        + grid.column(pos.column).cells
        + grid.containing_block(pos.row, pos.column).cells
    )
    return all(cell.value != value for cell in peers if cell.position != pos)


def get_candidates(grid: Grid, pos: Position) -> Set[int]:
    """
    Get all digits that can still be placed in an empty cell.

    Returns:
        Set of valid digits. Empty set if the cell is not empty.
    """
    if grid.cell_at(pos).is_filled:
        return set()

    used = set(grid.row(pos.row).optional_values())
    used |= set(grid.column(pos.column).optional_values())
    used |= set(grid.containing_block(pos.row, pos.column).optional_values())
    return set(DIGITS) - used


def conflicting_positions(grid: Grid) -> List[Position]:
    """Sorted positions of all cells involved in a duplicate digit."""
    return sorted(grid.duplicates())


def validate_solution(puzzle: Grid, solution: Grid) -> bool:
    """
    Validate that a solution correctly solves the puzzle.

    Args:
        puzzle: The original puzzle.
        solution: The proposed solution.

    Returns:
        True if solution is solved and matches every puzzle clue.
    """
    for clue in puzzle.cells():
        if clue.is_filled and solution.cell_at(clue.position).value != clue.value:
            return False

    return solution.is_solved()
