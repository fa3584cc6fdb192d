"""Game module: moves and the replayable history of a game."""

from .step import Step, StepKey
from .history import Sudoku, GameHistory, replay
from .codec import load_game, save_game

__all__ = ["Step", "StepKey", "Sudoku", "GameHistory", "replay", "load_game", "save_game"]
