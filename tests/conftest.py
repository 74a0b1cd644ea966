from pathlib import Path

import pytest

from sudoku_propagation.board import parse

PUZZLES = Path(__file__).resolve().parents[1] / "puzzles"

SOLUTION = """\
534678912
672195348
198342567
859761423
426853791
713924856
961537284
287419635
345286179
"""


@pytest.fixture
def solution_text():
    return SOLUTION


@pytest.fixture
def solution_grid():
    return [[int(c) for c in line] for line in SOLUTION.split()]


@pytest.fixture
def wikipedia_text():
    return (PUZZLES / "wikipedia.txt").read_text()


@pytest.fixture
def wikipedia_board(wikipedia_text):
    return parse(wikipedia_text)


@pytest.fixture
def diagonal_board():
    return parse((PUZZLES / "diagonal.txt").read_text())
