class NonogramError(Exception):
    """Base class for every error raised by grid_logic."""


class DegenerateInputError(NonogramError, ValueError):
    """A puzzle or board was declared with zero rows or zero columns."""


class IndexOutOfRange(NonogramError, IndexError):
    """An accessor was called outside the declared dimensions."""


class MalformedHints(NonogramError, ValueError):
    """A run sequence cannot fit its line, or hint data could not be decoded."""


class BitmapFormatError(NonogramError, ValueError):
    """A board bitmap could not be read as PBM."""
