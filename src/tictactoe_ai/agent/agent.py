"""
The computer player: chooses moves and learns from finished games.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from tictactoe_ai.core.errors import PersistenceError
from tictactoe_ai.core.hashing import state_key
from tictactoe_ai.core.types import DRAW_REWARD, O, WIN_REWARD, State, opponent
from tictactoe_ai.games.game_rules import BoardLike, as_board
from tictactoe_ai.memory.experience_store import ExperienceStore
from tictactoe_ai.selection import select_move

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MoveRecord:
    state_key: str  # Board before the move
    move: int


@dataclass
class MoveSelector:
    """
    Chooses the computer's moves and feeds game results back into memory.

    The store is injected and owned by the caller; the selector never
    closes it.
    """

    memory: ExperienceStore
    computer: int = O
    win_reward: float = WIN_REWARD
    draw_reward: float = DRAW_REWARD
    debug: bool = False
    _history: List[MoveRecord] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self):
        opponent(self.computer)  # validates the mark

    @property
    def human(self) -> int:
        return opponent(self.computer)

    @property
    def history(self) -> Tuple[MoveRecord, ...]:
        """The computer's moves so far this game, oldest first."""
        return tuple(self._history)

    def new_game(self) -> None:
        """Forget the current game's moves without learning from them."""
        self._history.clear()

    def choose_move(self, board: BoardLike) -> int:
        """Pick the computer's cell for this board and remember it for learning."""
        board = as_board(board)
        move = select_move(board, self.memory, self.computer, debug=self.debug)
        self._history.append(MoveRecord(state_key(board), move))
        return move

    def report_outcome(self, result: State) -> None:
        """
        Learn from a finished game, seen from the computer's side.

            LOSS -> every move played this game is banned from its state
            WIN  -> every move gets win_reward
            TIE  -> every move gets draw_reward

        History is cleared whatever happens. If storage fails, the
        remaining moves are still learned in memory and the first
        PersistenceError is raised afterwards.
        """
        records, self._history = self._history, []

        if result is State.NEUTRAL:
            raise ValueError("Cannot learn from a game that is still in progress")
        if result not in (State.WIN, State.LOSS, State.TIE):
            raise ValueError(f"Unknown result: {result!r}")

        logger.info("Game result %s, updating %d moves", result.name, len(records))

        failure: Optional[PersistenceError] = None
        for record in records:
            try:
                if result is State.LOSS:
                    self.memory.ban(record.state_key, record.move)
                elif result is State.WIN:
                    self.memory.apply_reward(record.state_key, record.move, self.win_reward)
                elif self.draw_reward:
                    self.memory.apply_reward(record.state_key, record.move, self.draw_reward)
            except PersistenceError as e:
                logger.error("Could not persist %s: %s", record, e)
                if failure is None:
                    failure = e

        if failure is not None:
            raise failure
