import logging

import click

from .board import read_board
from .elimination import propagate
from .exceptions import SudokuError

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"
LOG_DATEFMT = "%H:%M:%S"
DEFAULT_LOG_FILE = "solve.log"
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def _configure_logging(log_file, log_level):
    logging.basicConfig(
        filename=log_file,
        filemode="w",
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
        level=getattr(logging, log_level),
        force=True,
    )


def _summary(result, board):
    if result.solved:
        return "Solved in {} {} ({} candidates removed)".format(
            result.rounds,
            "round" if result.rounds == 1 else "rounds",
            result.removed,
        )
    return (
        "Stuck after {} {} with {} unresolved cells "
        "({} candidates removed)".format(
            result.rounds,
            "round" if result.rounds == 1 else "rounds",
            board.unresolved_count(),
            result.removed,
        )
    )


@click.command()
@click.argument("puzzle", type=click.Path(dir_okay=False))
@click.option(
    "--log-file",
    default=DEFAULT_LOG_FILE,
    show_default=True,
    type=click.Path(dir_okay=False, writable=True),
    help="File the solver log is written to.",
)
@click.option(
    "--log-level",
    default="ERROR",
    show_default=True,
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    help="INFO logs every removed candidate, DEBUG every pass.",
)
@click.option(
    "--progress/--no-progress",
    default=False,
    help="Show a progress bar of removed candidates.",
)
@click.option(
    "--quiet",
    is_flag=True,
    help="Only print the final board and the summary.",
)
def main(puzzle, log_file, log_level, progress, quiet):
    """Narrow down the candidates of the sudoku in PUZZLE.

    PUZZLE has nine lines of nine characters, each a digit 1-9 or 'x' for
    an unknown cell.
    """
    _configure_logging(log_file, log_level.upper())

    def show_pass(report, board):
        if quiet or not report.removed:
            return
        click.echo(
            "round {} {} {}: {} removed".format(
                report.round, report.rule, report.family, report.removed
            )
        )
        click.echo(board.draw())

    try:
        board = read_board(puzzle)
        if not quiet:
            click.echo(f"file: {puzzle}")
            click.echo(board.draw())
            click.echo()
        result = propagate(board, on_pass=show_pass, progress=progress)
    except SudokuError as e:
        raise click.ClickException(str(e)) from e

    click.echo(board.draw())
    click.echo(_summary(result, board))
