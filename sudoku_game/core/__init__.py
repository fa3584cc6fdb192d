"""Core module for Sudoku grid representation and validation."""

from .position import Position, Cell
from .cell_group import CellGroup, Row, Column, Block
from .grid import Grid
from .errors import (
    SudokuError,
    OutOfRange,
    ShapeMismatch,
    ReplayViolation,
    OrderingViolation,
    InvalidMove,
    IdentityError,
    CodecError,
    NotFound,
)
from .validator import is_valid_placement, get_candidates, conflicting_positions, validate_solution

__all__ = [
    "Position", "Cell", "CellGroup", "Row", "Column", "Block", "Grid",
    "SudokuError", "OutOfRange", "ShapeMismatch", "ReplayViolation", "OrderingViolation",
    "InvalidMove", "IdentityError", "CodecError", "NotFound",
    "is_valid_placement", "get_candidates", "conflicting_positions", "validate_solution",
]
