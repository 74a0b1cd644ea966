from __future__ import annotations

import collections

DIGITS = list(range(1, 10))
SIZE = len(DIGITS)
BOX_SIZE = 3


def cell_index(row, col):
    if not (0 <= row < SIZE and 0 <= col < SIZE):
        raise IndexError(f"No cell at row {row}, column {col}")
    return row * SIZE + col


class Group:
    """
    Nine board indices that must hold each digit exactly once.

    Groups only reference board indices; the cells themselves always live
    on the board.
    """

    kind = "group"

    def __init__(self, number: int, cells: list[tuple]):
        self.number = number
        self.cells = tuple(cells)
        self.indices = tuple(cell_index(*cell) for cell in self.cells)
        if len(set(self.indices)) != SIZE:
            raise ValueError(
                "A group must contain {} distinct cells, got {}".format(
                    SIZE, len(set(self.indices))
                )
            )

    @property
    def name(self):
        return f"{self.kind} {self.number + 1}"

    def __iter__(self):
        return iter(self.indices)

    def __len__(self):
        return len(self.indices)

    def __repr__(self):
        return f"{type(self).__name__}({self.number}, {list(self.cells)})"


class Row(Group):

    kind = "row"

    def __init__(self, row):
        super().__init__(row, [(row, i) for i in range(SIZE)])


class Column(Group):

    kind = "column"

    def __init__(self, column):
        super().__init__(column, [(i, column) for i in range(SIZE)])


class Box(Group):

    kind = "box"

    def __init__(self, box):
        rows = [(box // BOX_SIZE) * BOX_SIZE + i for i in range(BOX_SIZE)]
        cols = [(box % BOX_SIZE) * BOX_SIZE + i for i in range(BOX_SIZE)]
        super().__init__(box, [(i, j) for i in rows for j in cols])


def rows():
    return [Row(i) for i in range(SIZE)]


def columns():
    return [Column(i) for i in range(SIZE)]


def boxes():
    return [Box(i) for i in range(SIZE)]


def all_groups():
    return rows() + columns() + boxes()


# Order in which the solver sweeps the families each round.
FAMILIES = collections.OrderedDict(
    [("rows", rows), ("columns", columns), ("boxes", boxes)]
)
