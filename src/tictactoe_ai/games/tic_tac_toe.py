"""
TicTacToe game implementation.

Uses a flat int8 board:
    0 = empty
    1 = player 1 (X)
    2 = player 2 (O)
"""

from __future__ import annotations

import numpy as np

from tictactoe_ai.core.errors import GameOverError
from tictactoe_ai.core.types import CELL_STRINGS, EMPTY, X, Outcome, State, opponent
from tictactoe_ai.games.game_rules import (
    WIN_TRIPLES,
    as_board,
    check_move,
    empty_cells,
    new_board,
    outcome,
    winner,
)
from tictactoe_ai.games.game_state import GameState


class TicTacToe:
    """A single game: board, side to move and winner."""

    __slots__ = ('state', 'winner')

    def __init__(self, first_player: int = X):
        self.state = GameState(new_board(), current_player=first_player)
        self.winner = 0  # 0=none, 1=X, 2=O

    def deep_clone(self) -> "TicTacToe":
        g = TicTacToe.__new__(TicTacToe)
        g.state = self.state.copy()
        g.winner = self.winner
        return g

    def set_state(self, game_state: GameState) -> None:
        self.state = GameState(as_board(game_state.board), game_state.current_player)
        self.winner = winner(self.state.board)

    @property
    def board(self) -> np.ndarray:
        return self.state.board

    def current_player(self) -> int:
        return self.state.current_player

    def valid_moves(self) -> list[int]:
        """Empty cell indices, or none once the game is over."""
        if self.is_over():
            return []
        return empty_cells(self.state.board)

    def apply_move(self, move: int) -> None:
        if self.is_over():
            raise GameOverError(f"Game is over ({self.outcome().name}), no more moves")

        board = self.state.board
        cell = check_move(board, move)

        player = self.state.current_player
        board[cell] = player

        for line in WIN_TRIPLES:
            if cell in line and all(board[i] == player for i in line):
                self.winner = player
                break

        self.state.current_player = opponent(player)

    def outcome(self) -> Outcome:
        return outcome(self.state.board)

    def is_over(self) -> bool:
        return self.winner != 0 or not np.any(self.state.board == EMPTY)

    def get_result(self, player: int) -> State:
        """
        Return the result for one player:
            WIN / TIE / NEUTRAL / LOSS
        """
        if self.winner == player:
            return State.WIN
        if self.winner != 0:
            return State.LOSS
        if not np.any(self.state.board == EMPTY):
            return State.TIE
        return State.NEUTRAL

    def state_string(self) -> str:
        board = self.state.board.reshape(3, 3)
        lines = ["╭───┬───┬───╮"]
        for i in range(3):
            row = "│ " + " │ ".join(CELL_STRINGS[int(board[i, j])] for j in range(3)) + " │"
            lines.append(row)
            if i < 2:
                lines.append("├───┼───┼───┤")
        lines.append("╰───┴───┴───╯")
        return "\n".join(lines)
