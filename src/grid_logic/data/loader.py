from pathlib import Path
from typing import Union

from grid_logic.core.errors import MalformedHints
from grid_logic.core.hints import HintsModel

HINTS_ENCODING = "utf-8"


def decode_hints(data: Union[str, bytes]) -> HintsModel:
    return HintsModel.from_canonical_text(data)


def load_hints(path: Union[str, Path]) -> HintsModel:
    """Reads a `{"rows": [...], "cols": [...]}` hint file."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Hint file missing at {path}")
    try:
        return decode_hints(path.read_bytes())
    except MalformedHints as e:
        raise MalformedHints(f"{path}: {e}") from e


def save_hints(hints: HintsModel, path: Union[str, Path]) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(hints.to_canonical_text(), encoding=HINTS_ENCODING)
    return path
