"""Command-line interface for playing and inspecting Sudoku games."""

import argparse
import logging
import os
import sys
from datetime import datetime, timezone

from .core.errors import SudokuError, NotFound
from .core.grid import Grid
from .core.position import Position
from .core.validator import get_candidates, conflicting_positions
from .game.codec import load_game, save_game
from .service import InMemorySudokuService

logger = logging.getLogger(__name__)


def main(argv=None):
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Sudoku game player and history inspector",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Show a grid and the candidates of one cell
  python -m sudoku_game.cli show --grid "5300700..." --candidates 0 2

  # Start a game and make a move
  python -m sudoku_game.cli new --grid "5300700..." --player alice --output game.json
  python -m sudoku_game.cli move game.json --row 0 --column 2 --value 4

  # Replay a game and chart it
  python -m sudoku_game.cli replay game.json --all
  python -m sudoku_game.cli plot game.json --output results/
        """
    )
    parser.add_argument(
        "--log-level", default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Show command
    show_parser = subparsers.add_parser("show", help="Show a grid and its status")
    show_parser.add_argument(
        "--grid", "-g", type=str, required=True,
        help="Grid string (81 chars, 0 or . for empty cells)"
    )
    show_parser.add_argument(
        "--candidates", "-c", type=int, nargs=2, metavar=("ROW", "COLUMN"),
        help="Also list the candidates of this cell"
    )

    # New command
    new_parser = subparsers.add_parser("new", help="Create a sudoku and start a game on it")
    new_parser.add_argument(
        "--grid", "-g", type=str, required=True,
        help="Start grid string (81 chars, 0 or . for empty cells)"
    )
    new_parser.add_argument(
        "--player", "-p", type=str, required=True,
        help="Name of the player"
    )
    new_parser.add_argument(
        "--output", "-o", type=str, required=True,
        help="Game file to write (JSON format)"
    )

    # Move command
    move_parser = subparsers.add_parser("move", help="Fill one empty cell of a game")
    move_parser.add_argument("game", type=str, help="Game file (JSON format)")
    move_parser.add_argument("--row", "-r", type=int, required=True, help="Row (0-8)")
    move_parser.add_argument("--column", "-c", type=int, required=True, help="Column (0-8)")
    move_parser.add_argument("--value", "-v", type=int, required=True, help="Digit (1-9)")

    # Replay command
    replay_parser = subparsers.add_parser("replay", help="Replay the steps of a game")
    replay_parser.add_argument("game", type=str, help="Game file (JSON format)")
    replay_parser.add_argument(
        "--step", "-s", type=int, default=None,
        help="Show the game after this many steps (default: all steps)"
    )
    replay_parser.add_argument(
        "--all", "-a", action="store_true",
        help="Show the grid after every step"
    )

    # Plot command
    plot_parser = subparsers.add_parser("plot", help="Generate charts for a game")
    plot_parser.add_argument("game", type=str, help="Game file (JSON format)")
    plot_parser.add_argument(
        "--output", "-o", type=str, default="results",
        help="Output directory for charts (default: results)"
    )
    plot_parser.add_argument(
        "--no-steps", action="store_true",
        help="Skip the per-step grid charts"
    )
    plot_parser.add_argument(
        "--dpi", type=int, default=150,
        help="Resolution of the charts (default: 150)"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    commands = {
        "show": cmd_show,
        "new": cmd_new,
        "move": cmd_move,
        "replay": cmd_replay,
        "plot": cmd_plot,
    }
    try:
        commands[args.command](args)
    except (SudokuError, NotFound, OSError) as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"Error: {e}")
        sys.exit(1)


def print_status(grid: Grid) -> None:
    print(grid.show())
    print()
    print(f"Filled: {grid.count_filled()}/81")
    print(f"Valid:  {'yes' if grid.is_still_valid() else 'no'}")
    print(f"Solved: {'yes' if grid.is_solved() else 'no'}")
    conflicts = conflicting_positions(grid)
    if conflicts:
        print(f"Conflicting cells: {', '.join(str(p) for p in conflicts)}")


def cmd_show(args):
    """Handle the show command."""
    grid = Grid.from_string(args.grid)
    print_status(grid)

    if args.candidates:
        pos = Position(*args.candidates)
        candidates = sorted(get_candidates(grid, pos))
        print(f"Candidates at {pos}: {' '.join(map(str, candidates)) or 'none'}")


def cmd_new(args):
    """Handle the new command."""
    service = InMemorySudokuService()
    sudoku = service.create_sudoku(Grid.from_string(args.grid))
    history = service.start_game(sudoku.id, args.player, datetime.now(timezone.utc))

    save_game(history, args.output)
    print(f"Started game {history.id} for {history.player}:")
    print_status(history.current_grid())
    print(f"\nGame saved to {args.output}")


def cmd_move(args):
    """Handle the move command."""
    service = InMemorySudokuService()
    history = service.import_game(load_game(args.game))

    history = service.apply_move(
        history.id,
        Position(args.row, args.column),
        args.value,
        datetime.now(timezone.utc),
    )

    save_game(history, args.game)
    print(f"Step {history.step_count}: placed {args.value} at ({args.row}, {args.column})")
    print_status(history.current_grid())
    if history.is_solved():
        print("\nSolved!")


def cmd_replay(args):
    """Handle the replay command."""
    history = load_game(args.game)
    if args.step is not None:
        history = history.slice(args.step)

    print(f"Game {history.id if history.id is not None else '-'} "
          f"by {history.player}, started {history.start_time.isoformat()}")

    if args.all:
        print("\nStart grid:")
        print(history.sudoku.start_grid.show())
        for i, (step, grid) in enumerate(zip(history.steps, history.grid_history()), start=1):
            print(f"\nStep {i}: {step.value} at {step.position}")
            print(grid.show())

    print(f"\nAfter {history.step_count} steps:")
    print_status(history.current_grid())


def cmd_plot(args):
    """Handle the plot command."""
    from .report import HistoryVisualizer

    history = load_game(args.game)
    visualizer = HistoryVisualizer(history, args.output, dpi=args.dpi)

    print("Generating charts...")
    charts = visualizer.generate_all(include_steps=not args.no_steps)
    charts.append(visualizer.generate_summary_table())
    print(f"Charts saved to {args.output}/")
    for chart in charts:
        print(f"  - {os.path.basename(chart)}")


if __name__ == "__main__":
    main()
