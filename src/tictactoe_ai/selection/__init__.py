"""
Selection module - how the computer picks a cell.

Provides the main entry points:
- select_move(): one decision from a board and an experience store
- allowed_moves(): the empty cells not banned for the current state
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List

import numpy as np

from tictactoe_ai.core.errors import NoLegalMoveError
from tictactoe_ai.core.hashing import state_key
from tictactoe_ai.core.search import evaluate, immediate_winning_move
from tictactoe_ai.core.types import O, opponent
from tictactoe_ai.games.game_rules import BoardLike, as_board, empty_cells, placed
from tictactoe_ai.selection import inference
from tictactoe_ai.selection.inference import Candidate

if TYPE_CHECKING:
    from tictactoe_ai.memory.experience_store import ExperienceStore

logger = logging.getLogger(__name__)


def allowed_moves(board: np.ndarray, memory: "ExperienceStore") -> List[int]:
    """
    Empty cells that are not banned for this board.

    If every empty cell is banned the ban cannot be honoured, and all
    empty cells are returned.
    """
    empty = empty_cells(board)
    if not empty:
        return []
    banned = memory.banned_moves(state_key(board))
    allowed = [cell for cell in empty if cell not in banned]
    return allowed or empty


def score_candidates(board: np.ndarray, memory: "ExperienceStore", moves: List[int], computer: int = O) -> List[Candidate]:
    """Search score and stored bias for each move, in the given order."""
    key = state_key(board)
    candidates = []
    for move in moves:
        with placed(board, move, computer):
            score = evaluate(board, 0, False, computer)
        candidates.append(Candidate(move, score, memory.get_bias(key, move)))
    return candidates


def select_move(
    board: BoardLike,
    memory: "ExperienceStore",
    computer: int = O,
    debug: bool = False,
) -> int:
    """
    Select the computer's move.

    1. Win now if a line can be completed
    2. Otherwise block the opponent's immediate win
    3. Otherwise rank every allowed cell by search score, then stored
       bias, then cell preference, and take the first that does not lose

    Args:
        board: Current board (left unchanged)
        memory: Experience store with bans and rewards
        computer: The computer's mark
        debug: If True, show the candidate table

    Returns:
        Chosen cell index
    """
    board = as_board(board)
    allowed = allowed_moves(board, memory)
    if not allowed:
        raise NoLegalMoveError("Board is full, no move to choose")

    win = immediate_winning_move(board, computer, allowed)
    if win is not None:
        logger.debug("Winning move %d", win)
        return win

    block = immediate_winning_move(board, opponent(computer), allowed)
    if block is not None:
        logger.debug("Blocking move %d", block)
        return block

    ranked = inference.rank_candidates(score_candidates(board, memory, allowed, computer))
    chosen = inference.pick(ranked)

    if debug:
        from tictactoe_ai.debug.viz import render_candidates
        render_candidates(board, ranked, chosen.move)

    logger.debug("Searched move %d (score %d, bias %s)", chosen.move, chosen.score, chosen.bias)
    return chosen.move


__all__ = [
    "Candidate",
    "allowed_moves",
    "score_candidates",
    "select_move",
]
