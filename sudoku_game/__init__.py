"""Sudoku game model: grids, moves and replayable game histories."""

from .core import Position, Cell, Row, Column, Block, Grid
from .game import Step, StepKey, Sudoku, GameHistory

__version__ = "1.0.0"

__all__ = ["Position", "Cell", "Row", "Column", "Block", "Grid", "Step", "StepKey", "Sudoku", "GameHistory"]
