"""Unit tests for game history charts."""

import os

import pytest
from sudoku_game.core.position import Position
from sudoku_game.game.history import GameHistory
from sudoku_game.report.visualizer import CLUE, CONFLICT, EMPTY, MOVE, HistoryVisualizer

from conftest import START_TIME, make_step


@pytest.fixture
def history(sudoku):
    steps = (make_step(1, 0, 2, 4), make_step(2, 0, 3, 6), make_step(3, 1, 1, 6))
    return GameHistory("alice", START_TIME, sudoku, steps, id=1)


class TestHistoryVisualizer:
    """Tests for HistoryVisualizer."""

    def test_categorize(self, history, tmp_path):
        """Clues, moves, conflicts and empty cells are told apart."""
        visualizer = HistoryVisualizer(history, str(tmp_path))
        categories = visualizer.categorize(history.current_grid())
        assert categories[0, 0] == CLUE
        assert categories[0, 2] == MOVE
        assert categories[0, 8] == EMPTY
        # 6 at (1, 1) repeats the clue at (1, 0)
        assert categories[1, 1] == CONFLICT
        assert categories[1, 0] == CONFLICT

    def test_generate_all(self, history, tmp_path):
        """Test that every chart file is written."""
        visualizer = HistoryVisualizer(history, str(tmp_path), dpi=50)
        charts = visualizer.generate_all(show_progress=False)
        names = sorted(os.path.basename(c) for c in charts)
        assert names == sorted([
            "start_grid.png", "current_grid.png", "progress.png",
            "step_001.png", "step_002.png", "step_003.png",
        ])
        for chart in charts:
            assert os.path.getsize(chart) > 0

    def test_generate_without_steps(self, history, tmp_path):
        visualizer = HistoryVisualizer(history, str(tmp_path), dpi=50)
        assert len(visualizer.generate_all(include_steps=False)) == 3

    def test_summary_table(self, history, tmp_path):
        """One table line per step, marking the invalid state."""
        path = HistoryVisualizer(history, str(tmp_path)).generate_summary_table()
        lines = open(path).read().splitlines()
        assert lines[0].startswith("# Game 1 (alice)")
        rows = [line for line in lines if line.startswith("| ") and line[2].isdigit()]
        assert len(rows) == 3
        assert f"| {Position(1, 1)} | 6 |" in rows[2]
        assert "| no | no |" in rows[2]
        assert "| yes | no |" in rows[0]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
