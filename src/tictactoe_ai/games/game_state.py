"""
GameState - board plus side to move.
"""

from __future__ import annotations

import numpy as np


class GameState:
    """
    Lightweight game state container.

    Uses a flat int8 board:
        0 = empty
        1 = X
        2 = O
    """
    __slots__ = ('board', 'current_player')

    def __init__(self, board: np.ndarray, current_player: int):
        self.board = board
        self.current_player = current_player

    def copy(self) -> "GameState":
        """Fast copy - board.copy() is optimized for contiguous int arrays."""
        return GameState(self.board.copy(), self.current_player)
