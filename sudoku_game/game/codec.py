"""JSON encoding of grids, sudokus and game histories."""

from __future__ import annotations
import json
import logging
import os
from datetime import datetime
from typing import Any, Dict, Optional

from ..core.errors import CodecError
from ..core.grid import Grid
from .history import GameHistory, Sudoku
from .step import Step, StepKey

logger = logging.getLogger(__name__)


def grid_to_dict(grid: Grid) -> Dict[str, Any]:
    return {"id": grid.id, "cells": grid.to_string()}


def grid_from_dict(data: Dict[str, Any]) -> Grid:
    grid = Grid.from_string(_require(data, "cells", str))
    grid_id = _optional_id(data)
    return grid if grid_id is None else grid.with_id(grid_id)


def sudoku_to_dict(sudoku: Sudoku) -> Dict[str, Any]:
    return {"id": sudoku.id, "start_grid": grid_to_dict(sudoku.start_grid)}


def sudoku_from_dict(data: Dict[str, Any]) -> Sudoku:
    return Sudoku(grid_from_dict(_require(data, "start_grid", dict)), _optional_id(data))


def step_to_dict(step: Step) -> Dict[str, Any]:
    return {
        "game_history_id": step.key.game_history_id,
        "step_time": step.key.step_time.isoformat(),
        "row": step.position.row,
        "column": step.position.column,
        "value": step.value,
    }


def step_from_dict(data: Dict[str, Any]) -> Step:
    if not isinstance(data, dict):
        raise CodecError(f"Step must be a JSON object, got {type(data).__name__}")
    key = StepKey(
        _require(data, "game_history_id", int),
        _parse_time(_require(data, "step_time", str)),
    )
    return Step.of(
        key,
        _require(data, "row", int),
        _require(data, "column", int),
        _require(data, "value", int),
    )


def game_history_to_dict(history: GameHistory) -> Dict[str, Any]:
    """
    Convert a game history to a JSON-compatible dictionary.

    Only the steps are stored; intermediate grids are replayed on decoding.
    """
    return {
        "id": history.id,
        "player": history.player,
        "start_time": history.start_time.isoformat(),
        "sudoku": sudoku_to_dict(history.sudoku),
        "steps": [step_to_dict(step) for step in history.steps],
    }


def game_history_from_dict(data: Dict[str, Any]) -> GameHistory:
    """
    Rebuild a game history, replaying its steps.

    Raises:
        CodecError: If a required key is missing or has the wrong type.
        OrderingViolation, ReplayViolation, OutOfRange: If the decoded
            values break the model's invariants.
    """
    steps = [step_from_dict(s) for s in _require(data, "steps", list)]
    return GameHistory(
        player=_require(data, "player", str),
        start_time=_parse_time(_require(data, "start_time", str)),
        sudoku=sudoku_from_dict(_require(data, "sudoku", dict)),
        steps=tuple(steps),
        id=_optional_id(data),
    )


def load_game(path: str) -> GameHistory:
    """Load a game history from a JSON file."""
    with open(path, "r") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise CodecError(f"{path} is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise CodecError(f"{path} must contain a JSON object")
    history = game_history_from_dict(data)
    logger.debug("Loaded game %s with %d steps from %s", history.id, history.step_count, path)
    return history


def save_game(history: GameHistory, path: str) -> None:
    """Save a game history as a JSON file, creating parent directories as needed."""
    folder = os.path.dirname(path)
    if folder:
        os.makedirs(folder, exist_ok=True)
    with open(path, "w") as f:
        json.dump(game_history_to_dict(history), f, indent=2)
    logger.debug("Saved game %s with %d steps to %s", history.id, history.step_count, path)


def _require(data: Dict[str, Any], key: str, expected: type) -> Any:
    if key not in data:
        raise CodecError(f"Missing key {key!r}")
    value = data[key]
    if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
        raise CodecError(f"Key {key!r} must be of type {expected.__name__}, got {type(value).__name__}")
    return value


def _optional_id(data: Dict[str, Any]) -> Optional[int]:
    value = data.get("id")
    if value is not None and (not isinstance(value, int) or isinstance(value, bool)):
        raise CodecError(f"Key 'id' must be an integer or null, got {type(value).__name__}")
    return value


def _parse_time(text: str) -> datetime:
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as e:
        raise CodecError(f"Invalid timestamp {text!r}") from e
    # Naive and aware times do not compare, so only aware ones are stored
    if parsed.utcoffset() is None:
        raise CodecError(f"Timestamp {text!r} has no UTC offset")
    return parsed
