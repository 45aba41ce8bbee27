"""
Board keys - canonical string identifiers for board snapshots.
"""

import numpy as np

from tictactoe_ai.core.types import BOARD_CELLS, KEY_CHARS


def state_key(board: np.ndarray) -> str:
    """
    Canonical key for a board: one character per cell, row-major.

    Example: center taken by X -> "----X----".
    """
    return "".join(KEY_CHARS[int(v)] for v in np.ravel(board))


def is_state_key(key: str) -> bool:
    """Return True if key has the shape produced by state_key()."""
    return (
        isinstance(key, str)
        and len(key) == BOARD_CELLS
        and all(ch in KEY_CHARS.values() for ch in key)
    )
