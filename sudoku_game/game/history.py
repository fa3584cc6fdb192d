"""Sudoku puzzles and the replayable history of a game played on one."""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Iterable, Optional, Tuple

from ..core.errors import OrderingViolation, OutOfRange, ReplayViolation
from ..core.grid import Grid
from .step import Step


@dataclass(frozen=True)
class Sudoku:
    """A puzzle: the grid a game starts from."""
    start_grid: Grid
    id: Optional[int] = None

    def with_id(self, sudoku_id: int) -> Sudoku:
        return replace(self, id=sudoku_id)


def replay(start_grid: Grid, steps: Iterable[Step]) -> Tuple[Grid, ...]:
    """
    Apply the steps one by one to the start grid.

    Args:
        start_grid: Grid before the first step.
        steps: Steps in the order they were made.

    Returns:
        The grid after each step; the start grid itself is not included.

    Raises:
        ReplayViolation: If a step targets a cell that is already filled.
    """
    grids = []
    grid = start_grid
    for step in steps:
        next_grid = grid.fill_cell_if_empty(step.position, step.value)
        if next_grid is None:
            raise ReplayViolation(f"Expected allowed step, but got step {step}")
        grids.append(next_grid)
        grid = next_grid
    return tuple(grids)


@dataclass(frozen=True)
class GameHistory:
    """
    One game of a Sudoku: who plays it, since when, and every step so far.

    A GameHistory always replays cleanly. Construction fails if the steps are
    not strictly ascending by key (OrderingViolation) or if any step targets
    a cell already filled by the puzzle or an earlier step (ReplayViolation).
    Steps are never re-sorted.
    """
    player: str
    start_time: datetime
    sudoku: Sudoku
    steps: Tuple[Step, ...] = ()
    id: Optional[int] = None
    _grids: Tuple[Grid, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        steps = tuple(self.steps)
        object.__setattr__(self, "steps", steps)
        for previous, step in zip(steps, steps[1:]):
            try:
                ascending = previous.key < step.key
            except TypeError as e:
                raise OrderingViolation(
                    f"Step keys {previous.key} and {step.key} cannot be compared: {e}"
                ) from e
            if not ascending:
                raise OrderingViolation(
                    f"Steps must be strictly ascending by key, but {step} follows {previous}"
                )
        object.__setattr__(self, "_grids", replay(self.sudoku.start_grid, steps))

    @classmethod
    def start(
        cls,
        sudoku: Sudoku,
        player: str,
        start_time: datetime,
        game_id: Optional[int] = None
    ) -> GameHistory:
        """Start a new game without any steps."""
        return cls(player, start_time, sudoku, (), game_id)

    @property
    def step_count(self) -> int:
        return len(self.steps)

    def grid_history(self) -> Tuple[Grid, ...]:
        """The grid after each step, one per step, excluding the start grid."""
        return self._grids

    def current_grid(self) -> Grid:
        return self._grids[-1] if self._grids else self.sudoku.start_grid

    def is_solved(self) -> bool:
        return self.current_grid().is_solved()

    def is_still_valid(self) -> bool:
        return self.current_grid().is_still_valid()

    def slice(self, step_to_index: int) -> GameHistory:
        """
        The game as it stood after the first ``step_to_index`` steps.

        The result denotes a derived state, so it has no persistent identity.
        """
        if not 0 <= step_to_index <= len(self.steps):
            raise OutOfRange(f"Step index must be in 0-{len(self.steps)}, got {step_to_index}")
        return GameHistory(
            self.player,
            self.start_time,
            self.sudoku,
            self.steps[:step_to_index],
        )

    def with_step(self, step: Step) -> GameHistory:
        """Return this game with one more step; the identity is kept."""
        return replace(self, steps=self.steps + (step,))

    def with_id(self, game_id: int) -> GameHistory:
        return replace(self, id=game_id)
