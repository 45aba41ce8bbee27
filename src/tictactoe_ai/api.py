"""
Public API for playing games against a human or the computer.

Usage:
    from tictactoe_ai import GameSession, MoveSelector, Mode
    from tictactoe_ai import memory

    with memory.for_path("data/memory/experience.db") as store:
        session = GameSession(Mode.AI, MoveSelector(store))
        session.play(0)        # human X at 0, computer answers
        print(session.game.state_string())
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from tictactoe_ai.agent.agent import MoveSelector
from tictactoe_ai.core.errors import GameOverError, InvalidMoveError
from tictactoe_ai.core.types import X, Mode, Outcome
from tictactoe_ai.games.tic_tac_toe import TicTacToe

logger = logging.getLogger(__name__)


@dataclass
class Scoreboard:
    """Running totals across games in a session."""

    x_wins: int = 0
    o_wins: int = 0
    draws: int = 0

    def record(self, outcome: Outcome) -> None:
        if outcome is Outcome.X_WINS:
            self.x_wins += 1
        elif outcome is Outcome.O_WINS:
            self.o_wins += 1
        elif outcome is Outcome.DRAW:
            self.draws += 1
        else:
            raise ValueError(f"Game is not finished: {outcome.name}")

    @property
    def games(self) -> int:
        return self.x_wins + self.o_wins + self.draws


class GameSession:
    """
    Drives a series of games in one of two modes.

    HUMAN: both marks are played through play(), X first.
    AI:    the human plays through play() and the computer answers at
           once. Each finished game is reported to the selector exactly
           once.
    """

    def __init__(self, mode: Mode = Mode.AI, selector: Optional[MoveSelector] = None):
        self.selector = selector
        self.scores = Scoreboard()
        self.game = TicTacToe()
        self._finished = False
        self.mode = Mode.HUMAN
        self.set_mode(mode)

    @property
    def computer(self) -> Optional[int]:
        if self.mode is Mode.AI and self.selector is not None:
            return self.selector.computer
        return None

    @property
    def board(self) -> np.ndarray:
        return self.game.board

    def outcome(self) -> Outcome:
        return self.game.outcome()

    def is_over(self) -> bool:
        return self.game.is_over()

    def set_mode(self, mode: Mode) -> None:
        """Switch mode and start a new game."""
        mode = Mode(mode)
        if mode is Mode.AI and self.selector is None:
            raise ValueError("AI mode needs a MoveSelector")
        self.mode = mode
        self.reset()

    def reset(self) -> None:
        """Start a new game. Scores are kept."""
        self.game = TicTacToe(first_player=X)
        self._finished = False
        if self.selector is not None:
            self.selector.new_game()
        if self.computer == X:
            self._computer_turn()

    def play(self, cell: int) -> List[int]:
        """
        Play the human's move at cell.

        In AI mode the computer's reply follows immediately.

        Returns:
            Cells played by this call, in order
        """
        if self.game.is_over():
            raise GameOverError("Game is over, call reset() to play again")
        if self.game.current_player() == self.computer:
            raise InvalidMoveError("It is the computer's turn")

        played = [self._apply(cell)]
        if self.mode is Mode.AI and not self.game.is_over():
            played.append(self._computer_turn())
        return played

    def _computer_turn(self) -> int:
        move = self.selector.choose_move(self.game.board)
        self._apply(move)
        logger.debug("Computer played %d", move)
        return move

    def _apply(self, cell: int) -> int:
        self.game.apply_move(cell)
        if self.game.is_over():
            self._finish()
        return int(cell)

    def _finish(self) -> None:
        if self._finished:
            return
        self._finished = True

        outcome = self.game.outcome()
        self.scores.record(outcome)
        logger.info("Game over: %s", outcome.name)

        if self.computer is not None:
            self.selector.report_outcome(self.game.get_result(self.computer))


__all__ = [
    "GameSession",
    "Scoreboard",
    "MoveSelector",
]
