"""Exceptions raised by the Sudoku model and service."""

from numbers import Integral


class SudokuError(ValueError):
    """Base class for rejected Sudoku operations."""


class OutOfRange(SudokuError):
    """A coordinate, index or digit lies outside its valid domain."""


class ShapeMismatch(SudokuError):
    """Cells do not match the positional layout of a row, column, block or grid."""


class ReplayViolation(SudokuError):
    """A step of a game history targets a cell that is already filled."""


class OrderingViolation(SudokuError):
    """The steps of a game history are not strictly ascending by step key."""


class InvalidMove(SudokuError):
    """A move would leave the game in a state that breaks the Sudoku rules."""


class IdentityError(SudokuError):
    """A value has (or lacks) a persistent identity where the opposite is required."""


class CodecError(SudokuError):
    """A serialized document lacks the structure needed to decode it."""


class NotFound(LookupError):
    """No stored value exists for the given identity."""


def check_index(value: int, upper: int, what: str) -> int:
    """Return ``value`` if it lies in ``0..upper-1``, else raise OutOfRange."""
    if not isinstance(value, Integral) or isinstance(value, bool) or not 0 <= value < upper:
        raise OutOfRange(f"{what} must be in 0-{upper - 1}, got {value!r}")
    return value


def check_digit(value: int) -> int:
    """Return ``value`` if it is a Sudoku digit 1-9, else raise OutOfRange."""
    if not isinstance(value, Integral) or isinstance(value, bool) or not 1 <= value <= 9:
        raise OutOfRange(f"Value must be 1-9, got {value!r}")
    return value
