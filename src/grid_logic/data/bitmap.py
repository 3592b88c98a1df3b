from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image, UnidentifiedImageError

from grid_logic.core.board import Board, CellState
from grid_logic.core.errors import BitmapFormatError

PBM_FORMAT = "PPM"  # Pillow reads and writes PBM through its PPM plugin
BITMAP_MODE = "1"
WHITE = 255
BLACK = 0


def read_bitmap(path: Union[str, Path]) -> np.ndarray:
    """Loads a PBM (P1 or P4) as a 0/1 array where 1 is a black, filled pixel."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Bitmap missing at {path}")
    try:
        with Image.open(path) as img:
            if img.format != PBM_FORMAT or img.mode != BITMAP_MODE:
                raise BitmapFormatError(f"{path} is not a PBM bitmap (format={img.format}, mode={img.mode})")
            pixels = np.array(img)
    except (UnidentifiedImageError, OSError) as e:
        raise BitmapFormatError(f"Could not read bitmap {path}: {e}") from e
    # mode "1" pixels are True for white
    return (~pixels.astype(bool)).astype(np.uint8)


def read_board(path: Union[str, Path]) -> Board:
    return Board.from_bits(read_bitmap(path))


def read_seed(path: Union[str, Path]) -> Board:
    """Seed board for the solver: black pixels are committed FILLED, the rest stays UNKNOWN."""
    bits = read_bitmap(path)
    cells = np.where(bits > 0, CellState.FILLED, CellState.UNKNOWN)
    return Board.from_cells(cells.tolist())


def write_board(board: Board, path: Union[str, Path]) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    grey = np.where(board.to_bits() > 0, BLACK, WHITE).astype(np.uint8)
    img = Image.fromarray(grey).convert(BITMAP_MODE, dither=Image.Dither.NONE)
    img.save(path, format=PBM_FORMAT)
    return path
