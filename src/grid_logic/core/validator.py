"""Consistency checks between a (possibly partial) board and its hints.

Two distinct predicates live here. The line checks accept any committed
prefix that can still grow into the hint, and are what the search prunes
with. `is_fully_solved` is the exact terminal test and shares none of the
prefix leniency.
"""
from typing import Iterable, List, NamedTuple, Sequence

from grid_logic.core.board import Board, CellState
from grid_logic.core.errors import IndexOutOfRange
from grid_logic.core.hints import HintsModel, line_runs


class LineScan(NamedTuple):
    closed: List[int]
    open_run: int
    complete: bool


def scan_line(line: Iterable[int]) -> LineScan:
    """Splits the committed prefix of a line into closed runs and an open tail.

    Only an EMPTY cell closes a run. Scanning stops at the first UNKNOWN cell,
    so a run touching it stays open. On a line with no UNKNOWN cell the last
    run is closed by the end of the line.
    """
    closed = []
    count = 0
    for cell in line:
        if cell == CellState.UNKNOWN:
            return LineScan(closed, count, False)
        if cell == CellState.FILLED:
            count += 1
        elif count > 0:
            closed.append(count)
            count = 0
    if count > 0:
        closed.append(count)
    return LineScan(closed, 0, True)


def line_is_consistent(line: Iterable[int], runs: Sequence[int]) -> bool:
    scan = scan_line(line)
    if scan.complete:
        return list(scan.closed) == list(runs)
    if len(scan.closed) > len(runs):
        return False
    for position, length in enumerate(scan.closed):
        if length != runs[position]:
            return False
    return True


def _check_shape(board: Board, hints: HintsModel):
    if board.shape != (hints.rows_count, hints.cols_count):
        raise IndexOutOfRange(
            f"Board is {board.rows_count}x{board.cols_count} "
            f"but hints describe {hints.rows_count}x{hints.cols_count}"
        )


def row_is_consistent(board: Board, hints: HintsModel, row: int) -> bool:
    _check_shape(board, hints)
    if not 0 <= row < hints.rows_count:
        raise IndexOutOfRange(f"Row {row} outside hints with {hints.rows_count} rows")
    return line_is_consistent(board.row(row), hints.row_runs[row])


def column_is_consistent(board: Board, hints: HintsModel, col: int) -> bool:
    _check_shape(board, hints)
    if not 0 <= col < hints.cols_count:
        raise IndexOutOfRange(f"Column {col} outside hints with {hints.cols_count} columns")
    return line_is_consistent(board.column(col), hints.col_runs[col])


def is_fully_solved(board: Board, hints: HintsModel) -> bool:
    _check_shape(board, hints)
    if not board.is_fully_assigned():
        return False
    for r, expected in enumerate(hints.row_runs):
        if line_runs(board.row(r)) != list(expected):
            return False
    for c, expected in enumerate(hints.col_runs):
        if line_runs(board.column(c)) != list(expected):
            return False
    return True


def count_violations(board: Board, hints: HintsModel) -> int:
    """Number of rows and columns whose filled runs differ from their hints."""
    _check_shape(board, hints)
    errors = 0
    for r, expected in enumerate(hints.row_runs):
        if line_runs(board.row(r)) != list(expected):
            errors += 1
    for c, expected in enumerate(hints.col_runs):
        if line_runs(board.column(c)) != list(expected):
            errors += 1
    return errors
