from enum import IntEnum
from typing import Iterable, List, Sequence

import numpy as np

from grid_logic.core.errors import DegenerateInputError, IndexOutOfRange

CELL_DTYPE = np.int8


class CellState(IntEnum):
    UNKNOWN = -1
    EMPTY = 0
    FILLED = 1


class Board:
    """Mutable rows x cols grid of tri-state cells backed by one numpy array.

    The board holds no knowledge of hints: it is the hypothesis the solver
    mutates, and the validator is the only place where it gets judged.
    """

    def __init__(self, rows_count: int, cols_count: int):
        if rows_count <= 0 or cols_count <= 0:
            raise DegenerateInputError(
                f"Board needs at least one row and one column, got {rows_count}x{cols_count}"
            )
        self._cells = np.full((rows_count, cols_count), CellState.UNKNOWN, dtype=CELL_DTYPE)

    @classmethod
    def new(cls, rows_count: int, cols_count: int) -> "Board":
        return cls(rows_count, cols_count)

    @classmethod
    def from_cells(cls, cells: Iterable[Sequence[int]]) -> "Board":
        """Builds a board from tri-state codes (-1 unknown, 0 empty, 1 filled)."""
        array = np.asarray([list(row) for row in cells], dtype=CELL_DTYPE)
        if array.ndim != 2 or array.size == 0:
            raise DegenerateInputError(f"Board cells must be a non-empty 2D grid, got shape {array.shape}")
        if not np.isin(array, [s.value for s in CellState]).all():
            raise ValueError("Board cells must be -1, 0 or 1")
        board = cls(*array.shape)
        board._cells[:] = array
        return board

    @classmethod
    def from_bits(cls, bits) -> "Board":
        """Builds a fully assigned board from 0/1 values, 1 meaning filled."""
        array = np.asarray(bits)
        if array.ndim != 2 or array.size == 0:
            raise DegenerateInputError(f"Bitmap must be a non-empty 2D grid, got shape {array.shape}")
        board = cls(*array.shape)
        board._cells[:] = np.where(array > 0, CellState.FILLED, CellState.EMPTY)
        return board

    @property
    def rows_count(self) -> int:
        return self._cells.shape[0]

    @property
    def cols_count(self) -> int:
        return self._cells.shape[1]

    @property
    def shape(self):
        return self._cells.shape

    def _check_bounds(self, row: int, col: int):
        if not (0 <= row < self.rows_count and 0 <= col < self.cols_count):
            raise IndexOutOfRange(
                f"Cell ({row}, {col}) outside {self.rows_count}x{self.cols_count} board"
            )

    def get(self, row: int, col: int) -> CellState:
        self._check_bounds(row, col)
        return CellState(int(self._cells[row, col]))

    def set(self, row: int, col: int, value: CellState):
        self._check_bounds(row, col)
        self._cells[row, col] = CellState(value)

    def row(self, row: int) -> List[int]:
        if not 0 <= row < self.rows_count:
            raise IndexOutOfRange(f"Row {row} outside board with {self.rows_count} rows")
        return self._cells[row, :].tolist()

    def column(self, col: int) -> List[int]:
        if not 0 <= col < self.cols_count:
            raise IndexOutOfRange(f"Column {col} outside board with {self.cols_count} columns")
        return self._cells[:, col].tolist()

    def is_fully_assigned(self) -> bool:
        return not bool((self._cells == CellState.UNKNOWN).any())

    def unknown_count(self) -> int:
        return int((self._cells == CellState.UNKNOWN).sum())

    def copy(self) -> "Board":
        clone = Board(self.rows_count, self.cols_count)
        clone._cells[:] = self._cells
        return clone

    def to_bits(self) -> np.ndarray:
        """0/1 view for encoders; unknown cells come out as 0."""
        return (self._cells == CellState.FILLED).astype(np.uint8)

    def to_array(self) -> np.ndarray:
        return self._cells.copy()

    def __eq__(self, other):
        if not isinstance(other, Board):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self._cells, other._cells))

    def __repr__(self):
        return f"Board({self.rows_count}x{self.cols_count}, unknown={self.unknown_count()})"
