"""Report module for charting game histories."""

from .visualizer import HistoryVisualizer

__all__ = ["HistoryVisualizer"]
