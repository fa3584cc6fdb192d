"""Fixed dimensions of a standard 9x9 Sudoku grid."""

ROW_COUNT_IN_GRID = 9
COLUMN_COUNT_IN_GRID = 9
CELL_COUNT_IN_GRID = ROW_COUNT_IN_GRID * COLUMN_COUNT_IN_GRID

CELL_COUNT_IN_BLOCK = 9
ROW_COUNT_IN_BLOCK = 3
COLUMN_COUNT_IN_BLOCK = 3

NUMBER_OF_BLOCK_ROWS = 3
NUMBER_OF_BLOCK_COLUMNS = 3

MIN_DIGIT = 1
MAX_DIGIT = 9
DIGITS = frozenset(range(MIN_DIGIT, MAX_DIGIT + 1))
