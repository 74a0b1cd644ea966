class SudokuError(Exception):
    """Base class for every error raised while reading or solving a puzzle."""


class InputError(SudokuError):
    """Indicates the puzzle file is missing or cannot be read."""


class ParseError(SudokuError):
    """Indicates the puzzle text is not a 9x9 grid of digits and 'x'."""


class InvalidCandidate(SudokuError, ValueError):
    """Indicates a digit outside 1-9 was used as a cell value."""


class SudokuContradiction(SudokuError):
    """Indicates a puzzle is not solvable."""


class ConsistencyViolation(SudokuContradiction):
    """Indicates a group can no longer hold all nine digits."""
