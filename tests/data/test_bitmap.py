import numpy as np
import pytest
from pathlib import Path

from grid_logic.core.board import Board, CellState
from grid_logic.core.errors import BitmapFormatError
from grid_logic.data.bitmap import read_bitmap, read_board, read_seed, write_board


@pytest.fixture
def plain_pbm(tmp_path: Path) -> Path:
    path = tmp_path / "board.pbm"
    path.write_text("P1\n# sample\n3 2\n1 0 1\n0 1 0\n")
    return path


def test_read_plain_pbm(plain_pbm: Path):
    bits = read_bitmap(plain_pbm)
    assert bits.shape == (2, 3)
    assert bits.tolist() == [[1, 0, 1], [0, 1, 0]]


def test_read_board_is_fully_assigned(plain_pbm: Path):
    board = read_board(plain_pbm)
    assert board.is_fully_assigned()
    assert board.get(0, 0) is CellState.FILLED
    assert board.get(0, 1) is CellState.EMPTY


def test_read_seed_leaves_white_pixels_unknown(plain_pbm: Path):
    seed = read_seed(plain_pbm)
    assert seed.get(0, 0) is CellState.FILLED
    assert seed.get(0, 1) is CellState.UNKNOWN
    assert seed.unknown_count() == 3


def test_write_board_round_trip(tmp_path: Path):
    board = Board.from_bits([[1, 1, 0, 0, 1], [0, 0, 1, 0, 0]])
    path = write_board(board, tmp_path / "solved" / "out.pbm")

    assert path.exists()
    assert np.array_equal(read_bitmap(path), board.to_bits())


def test_missing_bitmap(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        read_bitmap(tmp_path / "nope.pbm")


def test_non_pbm_is_rejected(tmp_path: Path):
    garbage = tmp_path / "garbage.pbm"
    garbage.write_bytes(b"definitely not an image")
    with pytest.raises(BitmapFormatError):
        read_bitmap(garbage)


def test_greyscale_pnm_is_rejected(tmp_path: Path):
    grey = tmp_path / "grey.pgm"
    grey.write_text("P2\n2 1\n255\n0 255\n")
    with pytest.raises(BitmapFormatError, match="not a PBM"):
        read_bitmap(grey)
