from __future__ import annotations

import collections
import logging

import numpy as np

from .constraints import DIGITS, SIZE, cell_index
from .exceptions import InputError, InvalidCandidate, ParseError

CELL_COUNT = SIZE * SIZE
UNKNOWN = "x"

SEPARATOR = "+---+---+---+---+---+---+---+---+---+"

_file_logger = logging.getLogger(__name__)


class Position(collections.namedtuple("Position", "row col")):
    __slots__ = ()

    def __new__(cls, row, col):
        if not (0 <= row < SIZE and 0 <= col < SIZE):
            raise ValueError(f"Position out of range: ({row}, {col})")
        return super().__new__(cls, row, col)

    @property
    def index(self):
        return cell_index(self.row, self.col)

    @classmethod
    def from_index(cls, index):
        return cls(index // SIZE, index % SIZE)


class Cell:
    """
    A board position and the digits that may still go there.

    ``possibles`` is a boolean mask, ``possibles[d - 1]`` being True while
    ``d`` is a candidate. Cells handed out by a :class:`Board` share their
    mask with the board.
    """

    def __init__(self, pos: Position, possibles: np.ndarray):
        self.pos = Position(*pos)
        self.possibles = possibles

    @classmethod
    def with_all_candidates(cls, pos):
        return cls(pos, np.ones(SIZE).astype(bool))

    @classmethod
    def with_fixed_value(cls, pos, digit):
        if (
            not isinstance(digit, (int, np.integer))
            or isinstance(digit, bool)
            or digit not in DIGITS
        ):
            raise InvalidCandidate(
                "{!r} is not a valid digit, must be one of 1-9".format(digit)
            )
        possibles = np.zeros(SIZE).astype(bool)
        possibles[digit - 1] = True
        return cls(pos, possibles)

    @property
    def candidates(self) -> tuple[int]:
        return tuple(int(i) + 1 for i in np.flatnonzero(self.possibles))

    @property
    def is_resolved(self):
        return bool(self.possibles.sum() == 1)

    @property
    def resolved_value(self):
        if not self.is_resolved:
            return None
        return int(np.argmax(self.possibles)) + 1

    def has_candidate(self, digit):
        return digit in DIGITS and bool(self.possibles[digit - 1])

    def candidate_set_equals(self, other):
        if isinstance(other, Cell):
            return np.array_equal(self.possibles, other.possibles)
        return set(self.candidates) == set(other)

    def remove_candidate(self, digit):
        # Resolved cells are frozen: removing their value would empty them.
        if self.is_resolved or not self.has_candidate(digit):
            return False
        self.possibles[digit - 1] = False
        return True

    def remove_candidates(self, digits):
        if self.is_resolved:
            return 0
        indices = [d - 1 for d in set(digits) if self.has_candidate(d)]
        self.possibles[indices] = False
        return len(indices)

    def describe(self):
        return f"R{self.pos.row + 1}C{self.pos.col + 1}"

    def __repr__(self):
        return "row={}, col={}, options={}".format(
            self.pos.row, self.pos.col, list(self.candidates)
        )


class Board:

    def __init__(self, possibles: np.ndarray = None):
        if possibles is None:
            possibles = np.ones((CELL_COUNT, SIZE)).astype(bool)
        if possibles.shape != (CELL_COUNT, SIZE):
            raise ValueError(
                "Board needs a {}x{} candidate array, got {}".format(
                    CELL_COUNT, SIZE, possibles.shape
                )
            )
        self.possibles = possibles

    @classmethod
    def empty(cls):
        return cls()

    @classmethod
    def from_cells(cls, cells):
        cells = list(cells)
        if len(cells) != CELL_COUNT:
            raise ValueError(
                "Board needs {} cells, got {}".format(CELL_COUNT, len(cells))
            )
        for index, cell in enumerate(cells):
            if cell.pos.index != index:
                raise ValueError(
                    "Cell at {} given in slot {}".format(cell.pos, index)
                )
        return cls(np.stack([cell.possibles for cell in cells]).astype(bool))

    def copy(self):
        return Board(np.copy(self.possibles))

    def __getitem__(self, key):
        if isinstance(key, tuple):
            key = cell_index(*key)
        if not 0 <= key < CELL_COUNT:
            raise IndexError(f"No cell at index {key}")
        return Cell(Position.from_index(key), self.possibles[key])

    def __len__(self):
        return CELL_COUNT

    def __iter__(self):
        for index in range(CELL_COUNT):
            yield self[index]

    def candidate_count(self):
        return int(self.possibles.sum())

    def unresolved_count(self):
        return int((self.possibles.sum(axis=1) != 1).sum())

    def is_solved(self):
        return self.unresolved_count() == 0

    def __str__(self):
        return self.draw()

    def draw(self):
        lines = []
        for row in range(SIZE):
            lines.append(SEPARATOR)
            cells = [self[row, col] for col in range(SIZE)]
            for start in range(0, SIZE, 3):
                line = ""
                for cell in cells:
                    line += "|" + "".join(
                        str(d) if cell.has_candidate(d) else " "
                        for d in DIGITS[start : start + 3]
                    )
                lines.append(line + "|")
        lines.append(SEPARATOR)
        return "\n".join(lines)


def _parse_char(pos, char):
    if char in {str(d) for d in DIGITS}:
        return Cell.with_fixed_value(pos, int(char))
    if char == UNKNOWN:
        return Cell.with_all_candidates(pos)
    raise ParseError(
        "Couldn't parse cell R{}C{}: {!r}".format(pos.row + 1, pos.col + 1, char)
    )


def parse(text: str) -> Board:
    lines = text.strip().splitlines()
    if len(lines) != SIZE:
        raise ParseError(f"Expected {SIZE} rows, got {len(lines)}")

    cells = []
    for row, line in enumerate(lines):
        if len(line) != SIZE:
            raise ParseError(
                "Row {} has {} characters, expected {}: {!r}".format(
                    row + 1, len(line), SIZE, line
                )
            )
        for col, char in enumerate(line):
            cells.append(_parse_char(Position(row, col), char))

    board = Board.from_cells(cells)
    _file_logger.info(
        "Parsed board with %s givens", CELL_COUNT - board.unresolved_count()
    )
    return board


def read_board(path) -> Board:
    try:
        with open(path, encoding="utf-8") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise InputError(f"Could not read file {path}: {e}") from e
    return parse(text)
