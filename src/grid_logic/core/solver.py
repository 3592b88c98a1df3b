import logging
import time
from enum import Enum
from typing import List, NamedTuple, Optional, Tuple

from grid_logic.core.board import Board, CellState
from grid_logic.core.errors import IndexOutOfRange
from grid_logic.core.hints import HintsModel
from grid_logic.core.validator import column_is_consistent, is_fully_solved, row_is_consistent
from grid_logic.utils.log import get_logger

logger = get_logger(__name__)

# Filled is tried first, which fixes the solution returned for ambiguous puzzles
BRANCH_ORDER = (CellState.FILLED, CellState.EMPTY)
DEFAULT_MAX_STEPS = None
MS_PER_SECOND = 1000


class SearchState(Enum):
    SEARCHING = "searching"
    SOLVED = "solved"
    EXHAUSTED = "exhausted"
    ABORTED = "aborted"


class SolveStatus(Enum):
    SOLVED = "solved"
    UNSATISFIABLE = "unsatisfiable"
    ABORTED = "aborted"


class SolveResult(NamedTuple):
    status: SolveStatus
    board: Optional[Board]
    steps: int
    elapsed_ms: float

    @property
    def solved(self) -> bool:
        return self.status is SolveStatus.SOLVED


class BacktrackingSolver:
    """Depth-first search over cell assignments in row-major order.

    The search runs on an explicit stack: `trials[i]` holds how many values of
    BRANCH_ORDER have been tried at cell i, so retreating to a cell resumes
    with its next alternative. A cell that runs out of alternatives is reset
    to UNKNOWN before the cursor moves back. Cells already assigned on the
    seed board are committed: they are validated when the cursor passes them
    but never branched on or reset.
    """

    def __init__(self, max_steps: Optional[int] = DEFAULT_MAX_STEPS):
        if max_steps is not None and max_steps < 0:
            raise ValueError(f"max_steps must be non-negative or None, got {max_steps}")
        self.max_steps = max_steps
        self.state = SearchState.SEARCHING
        self.steps = 0

    def _cell_is_consistent(self, board: Board, hints: HintsModel, row: int, col: int) -> bool:
        return row_is_consistent(board, hints, row) and column_is_consistent(board, hints, col)

    def _budget_spent(self) -> bool:
        return self.max_steps is not None and self.steps >= self.max_steps

    def _prepare_board(self, hints: HintsModel, seed: Optional[Board]) -> Board:
        if seed is None:
            return Board.new(hints.rows_count, hints.cols_count)
        if seed.shape != (hints.rows_count, hints.cols_count):
            raise IndexOutOfRange(
                f"Seed board is {seed.rows_count}x{seed.cols_count} "
                f"but hints describe {hints.rows_count}x{hints.cols_count}"
            )
        return seed.copy()

    def search(self, board: Board, hints: HintsModel) -> SearchState:
        """Runs the search in place on `board` and returns the terminal state."""
        cells: List[Tuple[int, int]] = [
            (r, c) for r in range(hints.rows_count) for c in range(hints.cols_count)
        ]
        committed = [board.get(r, c) is not CellState.UNKNOWN for r, c in cells]
        trials = [0] * len(cells)
        cursor = 0
        self.state = SearchState.SEARCHING

        while self.state is SearchState.SEARCHING:
            if cursor < 0:
                self.state = SearchState.EXHAUSTED
                break

            if cursor == len(cells):
                if is_fully_solved(board, hints):
                    self.state = SearchState.SOLVED
                    break
                logger.warning("Search reached the last cell with an unsolved board; backtracking")
                cursor -= 1
                continue

            row, col = cells[cursor]

            if committed[cursor]:
                if trials[cursor] == 0 and self._cell_is_consistent(board, hints, row, col):
                    trials[cursor] = 1
                    cursor += 1
                else:
                    trials[cursor] = 0
                    cursor -= 1
                continue

            advanced = False
            while trials[cursor] < len(BRANCH_ORDER):
                if self._budget_spent():
                    self.state = SearchState.ABORTED
                    break
                board.set(row, col, BRANCH_ORDER[trials[cursor]])
                trials[cursor] += 1
                self.steps += 1
                if self._cell_is_consistent(board, hints, row, col):
                    advanced = True
                    break

            if self.state is SearchState.ABORTED:
                break

            if advanced:
                cursor += 1
            else:
                board.set(row, col, CellState.UNKNOWN)
                trials[cursor] = 0
                cursor -= 1

        return self.state

    def solve(self, hints: HintsModel, board: Optional[Board] = None) -> SolveResult:
        working = self._prepare_board(hints, board)
        self.steps = 0
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Solving %dx%d puzzle (%d unknown cells)",
                hints.rows_count, hints.cols_count, working.unknown_count(),
            )

        start_time = time.perf_counter()
        state = self.search(working, hints)
        elapsed_ms = (time.perf_counter() - start_time) * MS_PER_SECOND

        if state is SearchState.SOLVED:
            status = SolveStatus.SOLVED
        elif state is SearchState.ABORTED:
            status = SolveStatus.ABORTED
        else:
            status = SolveStatus.UNSATISFIABLE

        logger.info("Search %s after %d steps in %.2f ms", status.value, self.steps, elapsed_ms)
        return SolveResult(
            status=status,
            board=working if status is SolveStatus.SOLVED else None,
            steps=self.steps,
            elapsed_ms=elapsed_ms,
        )


def solve(hints: HintsModel, board: Optional[Board] = None, max_steps: Optional[int] = None) -> SolveResult:
    return BacktrackingSolver(max_steps=max_steps).solve(hints, board)
