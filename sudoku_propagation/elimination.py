from __future__ import annotations

import collections
import logging

import numpy as np
from tqdm import tqdm

from .board import CELL_COUNT, Board
from .constraints import DIGITS, FAMILIES, all_groups
from .exceptions import ConsistencyViolation

_file_logger = logging.getLogger(__name__)

PassReport = collections.namedtuple("PassReport", "round family rule removed")

PropagationResult = collections.namedtuple(
    "PropagationResult", "rounds removed solved"
)


def remove_singles(board: Board, groups, snapshot: Board = None) -> int:
    """
    Naked singles: a digit placed in a group is removed from the other
    cells of that group.

    Decisions are read from ``snapshot`` (a copy of ``board`` taken now
    if not given), removals are applied to ``board``.
    """
    if snapshot is None:
        snapshot = board.copy()

    removals = 0
    for group in groups:
        singles = [snapshot[i] for i in group if snapshot[i].is_resolved]
        _file_logger.debug(
            "%s singles %s", group.name, [s.resolved_value for s in singles]
        )
        for i in group:
            if snapshot[i].is_resolved:
                continue
            cell = board[i]
            for single in singles:
                if cell.remove_candidate(single.resolved_value):
                    _file_logger.info(
                        "%s: removed %s because of %s = %s",
                        cell.describe(),
                        single.resolved_value,
                        single.describe(),
                        single.resolved_value,
                    )
                    removals += 1
    return removals


def remove_subsets(board: Board, groups, snapshot: Board = None) -> int:
    """
    Naked subsets: when k cells of a group share the same k candidates,
    those candidates are removed from every other cell of the group.

    Reads from ``snapshot``, writes to ``board``, like
    :func:`remove_singles`.
    """
    if snapshot is None:
        snapshot = board.copy()

    removals = 0
    for group in groups:
        for i in group:
            subset = snapshot[i]
            size = len(subset.candidates)
            # Size 1 is a naked single.
            if size < 2:
                continue
            same = [j for j in group if snapshot[j].candidate_set_equals(subset)]
            if len(same) != size:
                continue

            for j in group:
                if j in same:
                    continue
                cell = board[j]
                removed = cell.remove_candidates(subset.candidates)
                if removed:
                    _file_logger.info(
                        "%s: removed %s candidates because of subset %s in %s",
                        cell.describe(),
                        removed,
                        list(subset.candidates),
                        group.name,
                    )
                removals += removed
    return removals


def _describe_group(board, group):
    return "\n".join(f"cell: {board[i]!r}" for i in group)


def verify_state(board: Board, groups=None):
    """Raise ConsistencyViolation if any group can no longer hold 1-9."""
    if groups is None:
        groups = all_groups()

    for group in groups:
        possibles = board.possibles[list(group.indices)]
        union = [d for d in DIGITS if possibles[:, d - 1].any()]

        if not np.all(possibles.any(axis=1)):
            problem = "a cell has no candidates left"
        elif len(union) != len(DIGITS):
            problem = "candidates {} ({})".format(union, len(union))
        else:
            values = [
                board[i].resolved_value for i in group if board[i].is_resolved
            ]
            if len(values) == len(set(values)):
                continue
            problem = "digit placed twice: {}".format(
                sorted(d for d in set(values) if values.count(d) > 1)
            )

        raise ConsistencyViolation(
            "{} is inconsistent, {}\n{}".format(
                group.name, problem, _describe_group(board, group)
            )
        )


RULES = collections.OrderedDict(
    [("remove_subsets", remove_subsets), ("remove_singles", remove_singles)]
)


def propagate(board: Board, on_pass=None, progress=False) -> PropagationResult:
    """
    Apply the elimination rules until a whole round removes nothing.

    Each round sweeps the group families in ``FAMILIES`` order, running
    every rule in ``RULES`` over the family and checking the board after
    each pass. ``on_pass(report, board)`` is called after every pass.

    This only performs local deduction, so the returned board need not be
    solved.
    """
    groups = all_groups()
    total_removed = 0
    rounds = 0

    with tqdm(
        total=max(board.candidate_count() - CELL_COUNT, 0),
        unit="candidate",
        disable=not progress,
    ) as bar:
        removed = 1
        while removed >= 1:
            removed = 0
            rounds += 1
            for family, make_groups in FAMILIES.items():
                family_groups = make_groups()
                for rule_name, rule in RULES.items():
                    pass_removed = rule(board, family_groups)
                    _file_logger.debug(
                        "Round %s %s %s removed %s",
                        rounds,
                        rule_name,
                        family,
                        pass_removed,
                    )
                    removed += pass_removed
                    bar.update(pass_removed)

                    if on_pass is not None:
                        on_pass(
                            PassReport(rounds, family, rule_name, pass_removed),
                            board,
                        )
                    verify_state(board, groups)
            total_removed += removed

    _file_logger.info(
        "Fixed point after %s rounds, %s candidates removed",
        rounds,
        total_removed,
    )
    return PropagationResult(rounds, total_removed, board.is_solved())
