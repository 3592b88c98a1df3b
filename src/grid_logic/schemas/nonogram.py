from typing import List

import msgspec


class NonogramHints(msgspec.Struct):
    rows: List[List[int]]
    cols: List[List[int]]
