"""Service for playing Sudoku games, and an in-memory implementation of it."""

from __future__ import annotations
import logging
import threading
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Dict, Optional

from ..core.errors import IdentityError, InvalidMove, NotFound
from ..core.grid import Grid
from ..core.position import Cell, Position
from ..game.history import GameHistory, Sudoku
from ..game.step import Step, StepKey

logger = logging.getLogger(__name__)


class SudokuService(ABC):
    """
    Operations an outer layer (web controller, CLI) uses to play Sudoku games.

    Implementations own identity assignment and storage. All returned values
    are fully reconstructed, immutable model objects.
    """

    @abstractmethod
    def create_grid(self, start_grid: Grid) -> Grid:
        """Store a new grid. The grid and its cells must not have an identity yet."""

    @abstractmethod
    def create_sudoku(self, start_grid: Grid) -> Sudoku:
        """Store a new puzzle starting from the given (not yet stored) grid."""

    @abstractmethod
    def start_game(self, sudoku_id: int, player: str, start_time: datetime) -> GameHistory:
        """Store a new game without steps for an existing puzzle."""

    @abstractmethod
    def apply_move(
        self,
        game_history_id: int,
        pos: Position,
        value: int,
        move_time: datetime
    ) -> GameHistory:
        """Fill one empty cell of a stored game and return the updated game."""

    @abstractmethod
    def find_grid(self, grid_id: int) -> Optional[Grid]:
        pass

    @abstractmethod
    def find_sudoku(self, sudoku_id: int) -> Optional[Sudoku]:
        pass

    @abstractmethod
    def find_game_history(self, game_history_id: int) -> Optional[GameHistory]:
        pass


class InMemorySudokuService(SudokuService):
    """
    SudokuService keeping everything in dictionaries.

    Identities are handed out from per-kind counters starting at 1. A lock
    guards the store, so one instance may be shared between threads.
    """

    def __init__(self):
        self._lock = threading.RLock()
        self._grids: Dict[int, Grid] = {}
        self._sudokus: Dict[int, Sudoku] = {}
        self._games: Dict[int, GameHistory] = {}
        self._next_ids = {"grid": 1, "cell": 1, "sudoku": 1, "game": 1}

    def create_grid(self, start_grid: Grid) -> Grid:
        if start_grid.id is not None:
            raise IdentityError(f"Grid already has id {start_grid.id}")
        if any(cell.id is not None for cell in start_grid.cells()):
            raise IdentityError("Grid contains cells that already have an id")

        with self._lock:
            cells = [
                Cell(c.row, c.column, c.value, self._take_id("cell"))
                for c in start_grid.cells()
            ]
            grid = Grid.from_cells(cells).with_id(self._take_id("grid"))
            self._grids[grid.id] = grid

        logger.info("Created grid %d with %d clues", grid.id, grid.count_filled())
        return grid

    def create_sudoku(self, start_grid: Grid) -> Sudoku:
        with self._lock:
            grid = self.create_grid(start_grid)
            sudoku = Sudoku(grid, self._take_id("sudoku"))
            self._sudokus[sudoku.id] = sudoku

        logger.info("Created sudoku %d on grid %d", sudoku.id, grid.id)
        return sudoku

    def start_game(self, sudoku_id: int, player: str, start_time: datetime) -> GameHistory:
        with self._lock:
            sudoku = self._sudokus.get(sudoku_id)
            if sudoku is None:
                raise NotFound(f"No sudoku with id {sudoku_id}")
            history = GameHistory.start(sudoku, player, start_time, self._take_id("game"))
            self._games[history.id] = history

        logger.info("Player %s started game %d on sudoku %d", player, history.id, sudoku_id)
        return history

    def apply_move(
        self,
        game_history_id: int,
        pos: Position,
        value: int,
        move_time: datetime
    ) -> GameHistory:
        """
        Fill one empty cell of a stored game.

        The move is rejected unless the game is still valid before the move
        and the cell is empty and the grid is still valid after it.

        Raises:
            NotFound: If there is no game with this id.
            InvalidMove: If the move breaks the rules stated above.
            OrderingViolation: If ``move_time`` is not after the last step.
        """
        with self._lock:
            history = self._games.get(game_history_id)
            if history is None:
                raise NotFound(f"No game with id {game_history_id}")

            current = history.current_grid()
            if not current.is_still_valid():
                raise InvalidMove(f"Game {game_history_id} is no longer valid")

            next_grid = current.fill_cell_if_empty(pos, value)
            if next_grid is None:
                logger.warning("Game %d: rejected %d at %s, cell is filled", game_history_id, value, pos)
                raise InvalidMove(f"Cell {pos} is already filled")
            if not next_grid.is_still_valid():
                logger.warning("Game %d: rejected %d at %s, duplicate digit", game_history_id, value, pos)
                raise InvalidMove(f"Value {value} at {pos} breaks the Sudoku rules")

            step = Step(StepKey(game_history_id, move_time), pos, value)
            history = history.with_step(step)
            self._games[history.id] = history

        logger.info("Game %d: placed %d at %s (step %d)", history.id, value, pos, history.step_count)
        if history.is_solved():
            logger.info("Game %d solved by %s", history.id, history.player)
        return history

    def import_game(self, history: GameHistory) -> GameHistory:
        """
        Store an existing game, e.g. one loaded from a file.

        Stored identities are kept. The puzzle and its grid get new identities
        if they have none. A game without identity gets a new one, which is
        only possible while it has no steps, since step keys refer to it.
        """
        with self._lock:
            sudoku = history.sudoku
            grid = sudoku.start_grid
            if grid.id is None:
                grid = grid.with_id(self._take_id("grid"))
            self._store("grid", self._grids, grid)
            sudoku = Sudoku(grid, sudoku.id if sudoku.id is not None else self._take_id("sudoku"))
            self._store("sudoku", self._sudokus, sudoku)

            game_id = history.id
            if game_id is None:
                if history.steps:
                    raise IdentityError("A game with steps must already have an id")
                game_id = self._take_id("game")
            history = GameHistory(history.player, history.start_time, sudoku, history.steps, game_id)
            self._store("game", self._games, history)

        logger.info("Imported game %d with %d steps", history.id, history.step_count)
        return history

    def find_grid(self, grid_id: int) -> Optional[Grid]:
        with self._lock:
            return self._grids.get(grid_id)

    def find_sudoku(self, sudoku_id: int) -> Optional[Sudoku]:
        with self._lock:
            return self._sudokus.get(sudoku_id)

    def find_game_history(self, game_history_id: int) -> Optional[GameHistory]:
        with self._lock:
            return self._games.get(game_history_id)

    def _take_id(self, kind: str) -> int:
        next_id = self._next_ids[kind]
        self._next_ids[kind] = next_id + 1
        return next_id

    def _store(self, kind: str, store: Dict[int, object], value) -> None:
        existing = store.get(value.id)
        if existing is not None and existing != value:
            raise IdentityError(f"A different {kind} with id {value.id} is already stored")
        store[value.id] = value
        self._next_ids[kind] = max(self._next_ids[kind], value.id + 1)
