"""Moves of a Sudoku game and the keys that order them."""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime

from ..core.errors import check_digit
from ..core.position import Position


@dataclass(frozen=True, order=True)
class StepKey:
    """
    Orders the steps of a game: by game history id first, then by step time.
    """
    game_history_id: int
    step_time: datetime


@dataclass(frozen=True)
class Step:
    """One move: a digit written into the cell at ``position``."""
    key: StepKey
    position: Position
    value: int

    def __post_init__(self):
        check_digit(self.value)

    @classmethod
    def of(cls, key: StepKey, row: int, column: int, value: int) -> Step:
        return cls(key, Position(row, column), value)

    def __str__(self) -> str:
        return (
            f"Step(game={self.key.game_history_id}, time={self.key.step_time.isoformat()}, "
            f"position={self.position}, value={self.value})"
        )
