"""
Core module - fundamental types, errors, board keys and the search.

This module provides the building blocks used throughout the engine.
"""

from tictactoe_ai.core.types import (
    EMPTY,
    X,
    O,
    BANNED,
    Banned,
    BiasValue,
    Mode,
    Outcome,
    State,
    WIN_REWARD,
    DRAW_REWARD,
    CELL_PREFERENCE,
    opponent,
)
from tictactoe_ai.core.errors import (
    TicTacToeError,
    InvalidMoveError,
    InvalidBoardError,
    GameOverError,
    NoLegalMoveError,
    PersistenceError,
)
from tictactoe_ai.core.hashing import state_key
from tictactoe_ai.core.search import evaluate, immediate_winning_move, winning_moves

__all__ = [
    # Marks
    "EMPTY",
    "X",
    "O",
    "opponent",
    # Types
    "BANNED",
    "Banned",
    "BiasValue",
    "Mode",
    "Outcome",
    "State",
    # Constants
    "WIN_REWARD",
    "DRAW_REWARD",
    "CELL_PREFERENCE",
    # Errors
    "TicTacToeError",
    "InvalidMoveError",
    "InvalidBoardError",
    "GameOverError",
    "NoLegalMoveError",
    "PersistenceError",
    # Functions
    "state_key",
    "evaluate",
    "immediate_winning_move",
    "winning_moves",
]
