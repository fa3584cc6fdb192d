"""Unit tests for JSON encoding of games."""

import json

import pytest
from sudoku_game.core.errors import CodecError, ReplayViolation
from sudoku_game.game.codec import (
    game_history_from_dict,
    game_history_to_dict,
    grid_from_dict,
    grid_to_dict,
    load_game,
    save_game,
)
from sudoku_game.game.history import GameHistory

from conftest import START_TIME, TEST_PUZZLE, make_step


@pytest.fixture
def history(sudoku):
    steps = (make_step(1, 0, 2, 4, game_id=5), make_step(2, 0, 3, 6, game_id=5))
    return GameHistory("alice", START_TIME, sudoku, steps, id=5)


class TestCodec:
    """Tests for the JSON codec."""

    def test_grid_dict(self, puzzle_grid):
        data = grid_to_dict(puzzle_grid.with_id(2))
        assert data == {"id": 2, "cells": TEST_PUZZLE}
        assert grid_from_dict(data) == puzzle_grid.with_id(2)

    def test_game_dict_layout(self, history):
        """Test the stored fields of a game."""
        data = game_history_to_dict(history)
        assert data["id"] == 5
        assert data["player"] == "alice"
        assert data["start_time"] == "2025-03-01T12:00:00+00:00"
        assert data["sudoku"]["id"] == 1
        assert data["sudoku"]["start_grid"]["cells"] == TEST_PUZZLE
        assert data["steps"][0] == {
            "game_history_id": 5,
            "step_time": "2025-03-01T12:00:01+00:00",
            "row": 0,
            "column": 2,
            "value": 4,
        }

    def test_save_and_load(self, history, tmp_path):
        """A saved game loads back equal, with its grids replayed."""
        path = str(tmp_path / "games" / "game.json")
        save_game(history, path)
        loaded = load_game(path)
        assert loaded == history
        assert loaded.current_grid() == history.current_grid()

    def test_missing_key(self, history):
        data = game_history_to_dict(history)
        del data["player"]
        with pytest.raises(CodecError):
            game_history_from_dict(data)

    def test_wrong_type(self, history):
        data = game_history_to_dict(history)
        data["steps"][0]["value"] = "4"
        with pytest.raises(CodecError):
            game_history_from_dict(data)

    def test_bad_timestamp(self, history):
        data = game_history_to_dict(history)
        data["start_time"] = "yesterday"
        with pytest.raises(CodecError):
            game_history_from_dict(data)

    def test_invalid_replay_in_file(self, history, tmp_path):
        """Decoding goes through the validated constructor."""
        data = game_history_to_dict(history)
        data["steps"][1]["column"] = 2
        path = tmp_path / "bad.json"
        path.write_text(json.dumps(data))
        with pytest.raises(ReplayViolation):
            load_game(str(path))

    def test_not_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        with pytest.raises(CodecError):
            load_game(str(path))

    @pytest.mark.parametrize("value", ["5", 5.0, True, [5]])
    def test_game_id_must_be_integer(self, history, value):
        data = game_history_to_dict(history)
        data["id"] = value
        with pytest.raises(CodecError):
            game_history_from_dict(data)

    def test_nested_ids_must_be_integers(self, history):
        """Sudoku and grid ids are checked like the game id."""
        data = game_history_to_dict(history)
        data["sudoku"]["id"] = "1"
        with pytest.raises(CodecError):
            game_history_from_dict(data)

        data = game_history_to_dict(history)
        data["sudoku"]["start_grid"]["id"] = "2"
        with pytest.raises(CodecError):
            game_history_from_dict(data)

    def test_null_ids_allowed(self, history):
        data = game_history_to_dict(history.slice(0))
        data["sudoku"]["id"] = None
        loaded = game_history_from_dict(data)
        assert loaded.id is None
        assert loaded.sudoku.id is None

    @pytest.mark.parametrize("field", ["start_time", "step_time"])
    def test_timestamp_without_offset(self, history, field):
        """Timestamps must carry a UTC offset."""
        data = game_history_to_dict(history)
        if field == "start_time":
            data["start_time"] = "2025-03-01T12:00:00"
        else:
            data["steps"][1]["step_time"] = "2025-03-01T12:00:02"
        with pytest.raises(CodecError):
            game_history_from_dict(data)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
