"""
Exhaustive adversarial search over the 3x3 game tree.

Scores are from the computer's point of view (the maximizer):
- computer line complete  -> +(10 - depth)
- opponent line complete  -> -(10 - depth)
- board full              -> 0

The depth adjustment makes the search prefer the fastest win and the
slowest loss.

Recursion runs on immutable tuples (one new tuple per ply), memoised with
lru_cache. The caller's board is never written to.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Collection, List, Optional, Tuple

import numpy as np

from tictactoe_ai.core.types import EMPTY, O, opponent
from tictactoe_ai.games.game_rules import WIN_TRIPLES, BoardLike, as_board, has_line, placed

WIN_SCORE = 10

Cells = Tuple[int, ...]


def _has_line(cells: Cells, player: int) -> bool:
    for a, b, c in WIN_TRIPLES:
        if cells[a] == player and cells[b] == player and cells[c] == player:
            return True
    return False


@lru_cache(maxsize=None)
def _minimax(cells: Cells, depth: int, maximizing: bool, computer: int) -> int:
    human = opponent(computer)

    if _has_line(cells, computer):
        return WIN_SCORE - depth
    if _has_line(cells, human):
        return depth - WIN_SCORE
    if EMPTY not in cells:
        return 0

    mover = computer if maximizing else human
    scores = []
    for i, v in enumerate(cells):
        if v != EMPTY:
            continue
        child = cells[:i] + (mover,) + cells[i + 1:]
        scores.append(_minimax(child, depth + 1, not maximizing, computer))

    return max(scores) if maximizing else min(scores)


def evaluate(board: BoardLike, depth: int = 0, maximizing: bool = True, computer: int = O) -> int:
    """
    Best achievable score for the side to move, with optimal play by both.

    Args:
        board: 9 cells (numpy int8 array or any sequence of marks)
        depth: Plies already played below the caller's root
        maximizing: True if the computer is to move
        computer: The computer's mark (the maximizer)

    Returns:
        Integer score in [-10, 10]
    """
    opponent(computer)  # validates the mark
    cells = tuple(int(v) for v in as_board(board))
    return _minimax(cells, int(depth), bool(maximizing), computer)


def winning_moves(board: BoardLike, player: int, allowed: Optional[Collection[int]] = None) -> List[int]:
    """
    Every empty cell that completes a line for player, ascending.

    Each candidate is tried in place and removed again before the next.
    """
    board = as_board(board)
    wins: List[int] = []
    for cell in np.flatnonzero(board == EMPTY):
        cell = int(cell)
        if allowed is not None and cell not in allowed:
            continue
        with placed(board, cell, player):
            if has_line(board, player):
                wins.append(cell)
    return wins


def immediate_winning_move(board: BoardLike, player: int, allowed: Optional[Collection[int]] = None) -> Optional[int]:
    """Lowest empty cell that completes a line for player, or None."""
    wins = winning_moves(board, player, allowed)
    return wins[0] if wins else None

