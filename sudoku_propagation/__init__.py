from .board import Board, Cell, Position, parse, read_board
from .constraints import DIGITS, Box, Column, Group, Row, all_groups
from .elimination import (
    PassReport,
    PropagationResult,
    propagate,
    remove_singles,
    remove_subsets,
    verify_state,
)
from .exceptions import (
    ConsistencyViolation,
    InputError,
    InvalidCandidate,
    ParseError,
    SudokuContradiction,
    SudokuError,
)
