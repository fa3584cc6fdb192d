"""Visualization utilities for Sudoku game histories."""

from __future__ import annotations
import os
from typing import List, Optional

import matplotlib.pyplot as plt
import seaborn as sns
import numpy as np
from tqdm import tqdm

from ..core.grid import Grid
from ..game.history import GameHistory

# Cell categories used as heatmap values
EMPTY, CLUE, MOVE, CONFLICT = 0, 1, 2, 3


class HistoryVisualizer:
    """
    Chart generator for one Sudoku game history.

    Creates grid heatmaps (clues, moves and conflicting cells in different
    colors) and a chart of the game's progress step by step.
    """

    COLORS = [
        "#ffffff",  # Empty
        "#bdc3c7",  # Clue
        "#3498db",  # Move
        "#e74c3c",  # Conflict
    ]

    def __init__(self, history: GameHistory, output_dir: str = "results", dpi: int = 150):
        """
        Initialize the visualizer.

        Args:
            history: The game to visualize.
            output_dir: Directory to save generated charts.
            dpi: Resolution of the saved PNG files.
        """
        self.history = history
        self.output_dir = output_dir
        self.dpi = dpi
        os.makedirs(output_dir, exist_ok=True)

        plt.style.use('seaborn-v0_8-whitegrid')
        sns.set_palette("husl")

    def generate_all(self, include_steps: bool = True, show_progress: bool = True) -> List[str]:
        """
        Generate all charts.

        Returns:
            List of paths to generated chart files.
        """
        charts = [
            self.plot_grid(self.history.sudoku.start_grid, "start_grid"),
            self.plot_grid(self.history.current_grid(), "current_grid"),
            self.plot_progress(),
        ]
        if include_steps:
            charts.extend(self.plot_steps(show_progress=show_progress))
        return charts

    def categorize(self, grid: Grid) -> np.ndarray:
        """Classify every cell of ``grid`` as EMPTY, CLUE, MOVE or CONFLICT."""
        clues = self.history.sudoku.start_grid.to_array() != 0
        filled = grid.to_array() != 0

        categories = np.full(filled.shape, EMPTY, dtype=np.int32)
        categories[filled & clues] = CLUE
        categories[filled & ~clues] = MOVE
        for pos in grid.duplicates():
            categories[pos.row, pos.column] = CONFLICT
        return categories

    def plot_grid(self, grid: Grid, name: str, title: Optional[str] = None) -> str:
        """Create a heatmap of one grid with its digits written in the cells."""
        fig, ax = plt.subplots(figsize=(6, 6))

        values = grid.to_array()
        labels = np.where(values == 0, "", values.astype(str))

        sns.heatmap(
            self.categorize(grid),
            annot=labels,
            fmt="",
            cmap=self.COLORS,
            vmin=EMPTY,
            vmax=CONFLICT,
            cbar=False,
            linewidths=0.5,
            linecolor="#7f8c8d",
            square=True,
            annot_kws={"fontsize": 14},
            ax=ax,
        )

        # Thick lines between blocks
        for i in range(0, 10, 3):
            ax.axhline(i, color="black", linewidth=2)
            ax.axvline(i, color="black", linewidth=2)

        ax.set_xticks([])
        ax.set_yticks([])
        ax.set_title(title or name.replace("_", " ").title(), fontsize=14, fontweight='bold')

        plt.tight_layout()
        path = os.path.join(self.output_dir, f"{name}.png")
        plt.savefig(path, dpi=self.dpi, bbox_inches='tight')
        plt.close()

        return path

    def plot_progress(self) -> str:
        """Create a line chart of filled cells per step, marking invalid states."""
        fig, ax = plt.subplots(figsize=(10, 6))

        grids = [self.history.sudoku.start_grid, *self.history.grid_history()]
        steps = np.arange(len(grids))
        filled = [grid.count_filled() for grid in grids]
        invalid = [i for i, grid in enumerate(grids) if not grid.is_still_valid()]

        ax.plot(steps, filled, marker='o', color="#3498db", label="Filled cells")
        if invalid:
            ax.scatter(invalid, [filled[i] for i in invalid],
                       color="#e74c3c", zorder=3, s=60, label="Invalid state")

        ax.axhline(y=81, color='gray', linestyle='--', alpha=0.3)
        ax.set_xlabel('Step', fontsize=12)
        ax.set_ylabel('Filled Cells', fontsize=12)
        ax.set_title(f'Progress of {self.history.player}', fontsize=14, fontweight='bold')
        ax.set_ylim(0, 85)
        ax.legend(loc='lower right')

        plt.tight_layout()
        path = os.path.join(self.output_dir, "progress.png")
        plt.savefig(path, dpi=self.dpi, bbox_inches='tight')
        plt.close()

        return path

    def plot_steps(self, show_progress: bool = True) -> List[str]:
        """Create one heatmap per step, named step_001.png and so on."""
        paths = []
        grid_history = self.history.grid_history()
        for i, (step, grid) in enumerate(
            tqdm(list(zip(self.history.steps, grid_history)), desc="Rendering steps", disable=not show_progress),
            start=1,
        ):
            title = f"Step {i}: {step.value} at {step.position}"
            paths.append(self.plot_grid(grid, f"step_{i:03d}", title=title))
        return paths

    def generate_summary_table(self) -> str:
        """Generate a markdown table with one line per step."""
        lines = [
            f"# Game {self.history.id if self.history.id is not None else '-'} ({self.history.player})\n",
            "| Step | Time | Position | Value | Filled | Valid | Solved |",
            "|------|------|----------|-------|--------|-------|--------|"
        ]

        for i, (step, grid) in enumerate(zip(self.history.steps, self.history.grid_history()), start=1):
            lines.append(
                f"| {i} | {step.key.step_time.isoformat()} | {step.position} | {step.value} "
                f"| {grid.count_filled()} | {'yes' if grid.is_still_valid() else 'no'} "
                f"| {'yes' if grid.is_solved() else 'no'} |"
            )

        content = "\n".join(lines)

        path = os.path.join(self.output_dir, "game_summary.md")
        with open(path, "w") as f:
            f.write(content)

        return path
