import itertools
from typing import Iterable, List, Sequence, Tuple, Union

import msgspec
import numpy as np

from grid_logic.core.board import Board, CellState
from grid_logic.core.errors import DegenerateInputError, IndexOutOfRange, MalformedHints
from grid_logic.schemas.nonogram import NonogramHints

Runs = Tuple[int, ...]


def line_runs(line: Iterable[int]) -> List[int]:
    """Lengths of the maximal blocks of filled cells in a line, in scan order."""
    return [len(list(g)) for k, g in itertools.groupby(line) if k == CellState.FILLED]


def line_capacity(runs: Sequence[int]) -> int:
    """Minimum line length able to hold `runs` with one gap between blocks."""
    if not runs:
        return 0
    return sum(runs) + len(runs) - 1


def _freeze_runs(raw_lines, line_length: int, kind: str) -> Tuple[Runs, ...]:
    frozen = []
    for index, raw in enumerate(raw_lines):
        if isinstance(raw, (str, bytes)) or not isinstance(raw, (Sequence, np.ndarray)):
            raise MalformedHints(f"{kind} {index}: runs {raw!r} are not a sequence")
        runs = []
        for value in raw:
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
                raise MalformedHints(f"{kind} {index}: run {value!r} is not an integer")
            if value < 0:
                raise MalformedHints(f"{kind} {index}: negative run {value}")
            # zero padding is tolerated and dropped
            if value > 0:
                runs.append(int(value))
        needed = line_capacity(runs)
        if needed > line_length:
            raise MalformedHints(
                f"{kind} {index}: runs {runs} need {needed} cells but the line has {line_length}"
            )
        frozen.append(tuple(runs))
    return tuple(frozen)


class HintsModel:
    """Run-length description of a nonogram, fixed once constructed.

    `row_runs[r]` lists the block lengths of row r left to right and
    `col_runs[c]` those of column c top to bottom. Every line must be able to
    hold its blocks with a one-cell gap between them; anything else is
    rejected here so that an impossible puzzle never reaches the solver.
    """

    def __init__(self, row_runs: Sequence[Sequence[int]], col_runs: Sequence[Sequence[int]]):
        row_runs = list(row_runs)
        col_runs = list(col_runs)
        if not row_runs or not col_runs:
            raise DegenerateInputError(
                f"Hints need at least one row and one column, got {len(row_runs)}x{len(col_runs)}"
            )
        self._rows_count = len(row_runs)
        self._cols_count = len(col_runs)
        self._row_runs = _freeze_runs(row_runs, self._cols_count, "Row")
        self._col_runs = _freeze_runs(col_runs, self._rows_count, "Column")

    @classmethod
    def derive_from_board(cls, board: Union[Board, Sequence[Sequence[int]], np.ndarray]) -> "HintsModel":
        """Run-length encodes a board; only FILLED (or 1) cells count as filled."""
        if isinstance(board, Board):
            cells = board.to_bits()
        else:
            cells = np.asarray(board)
            if cells.ndim != 2:
                if cells.size == 0:
                    raise DegenerateInputError("Cannot derive hints from an empty board")
                raise ValueError(f"Board must be two-dimensional, got shape {cells.shape}")
            cells = (cells == CellState.FILLED).astype(np.uint8)

        rows_count, cols_count = cells.shape
        if rows_count == 0 or cols_count == 0:
            raise DegenerateInputError(f"Cannot derive hints from a {rows_count}x{cols_count} board")

        row_runs = [line_runs(cells[r, :].tolist()) for r in range(rows_count)]
        col_runs = [line_runs(cells[:, c].tolist()) for c in range(cols_count)]
        return cls(row_runs, col_runs)

    @classmethod
    def from_schema(cls, schema: NonogramHints) -> "HintsModel":
        return cls(schema.rows, schema.cols)

    @classmethod
    def from_canonical_text(cls, text: Union[str, bytes]) -> "HintsModel":
        try:
            schema = msgspec.json.decode(text, type=NonogramHints)
        except msgspec.DecodeError as e:
            raise MalformedHints(f"Invalid hint description: {e}") from e
        return cls.from_schema(schema)

    @property
    def rows_count(self) -> int:
        return self._rows_count

    @property
    def cols_count(self) -> int:
        return self._cols_count

    @property
    def row_runs(self) -> Tuple[Runs, ...]:
        return self._row_runs

    @property
    def col_runs(self) -> Tuple[Runs, ...]:
        return self._col_runs

    def row_run(self, row: int, index: int) -> int:
        if not 0 <= row < self._rows_count:
            raise IndexOutOfRange(f"Row {row} outside hints with {self._rows_count} rows")
        runs = self._row_runs[row]
        if not 0 <= index < len(runs):
            raise IndexOutOfRange(f"Run {index} outside row {row} with {len(runs)} runs")
        return runs[index]

    def col_run(self, col: int, index: int) -> int:
        if not 0 <= col < self._cols_count:
            raise IndexOutOfRange(f"Column {col} outside hints with {self._cols_count} columns")
        runs = self._col_runs[col]
        if not 0 <= index < len(runs):
            raise IndexOutOfRange(f"Run {index} outside column {col} with {len(runs)} runs")
        return runs[index]

    def to_schema(self) -> NonogramHints:
        return NonogramHints(
            rows=[list(runs) for runs in self._row_runs],
            cols=[list(runs) for runs in self._col_runs],
        )

    def to_canonical_text(self) -> str:
        return msgspec.json.encode(self.to_schema()).decode()

    def __eq__(self, other):
        if not isinstance(other, HintsModel):
            return NotImplemented
        return self._row_runs == other._row_runs and self._col_runs == other._col_runs

    def __hash__(self):
        return hash((self._row_runs, self._col_runs))

    def __repr__(self):
        return f"HintsModel({self._rows_count}x{self._cols_count})"
