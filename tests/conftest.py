"""Shared fixtures for the test suite."""

from datetime import datetime, timedelta, timezone

import matplotlib
import pytest

matplotlib.use("Agg")

from sudoku_game.core.grid import Grid
from sudoku_game.game.history import Sudoku
from sudoku_game.game.step import Step, StepKey

# A known puzzle and its solution
TEST_PUZZLE = (
    "530070000"
    "600195000"
    "098000060"
    "800060003"
    "400803001"
    "700020006"
    "060000280"
    "000419005"
    "000080079"
)

TEST_SOLUTION = (
    "534678912"
    "672195348"
    "198342567"
    "859761423"
    "426853791"
    "713924856"
    "961537284"
    "287419635"
    "345286179"
)

START_TIME = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)


def make_step(n: int, row: int, column: int, value: int, game_id: int = 1) -> Step:
    """The n-th step of a game, made n seconds after START_TIME."""
    return Step.of(StepKey(game_id, START_TIME + timedelta(seconds=n)), row, column, value)


@pytest.fixture
def puzzle_grid():
    return Grid.from_string(TEST_PUZZLE)


@pytest.fixture
def solution_grid():
    return Grid.from_string(TEST_SOLUTION)


@pytest.fixture
def sudoku(puzzle_grid):
    return Sudoku(puzzle_grid, 1)
