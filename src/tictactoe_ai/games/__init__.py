"""
Games module - the 3x3 board and a single game of tic-tac-toe.
"""

from tictactoe_ai.games.game_state import GameState
from tictactoe_ai.games.game_rules import (
    WIN_LINES,
    as_board,
    board_full,
    check_move,
    empty_cells,
    has_line,
    new_board,
    outcome,
    placed,
    winner,
)
from tictactoe_ai.games.tic_tac_toe import TicTacToe

__all__ = [
    "GameState",
    "TicTacToe",
    "WIN_LINES",
    "as_board",
    "board_full",
    "check_move",
    "empty_cells",
    "has_line",
    "new_board",
    "outcome",
    "placed",
    "winner",
]
