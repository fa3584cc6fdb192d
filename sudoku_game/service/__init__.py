"""Service module for creating and playing stored games."""

from .sudoku_service import SudokuService, InMemorySudokuService

__all__ = ["SudokuService", "InMemorySudokuService"]
