"""
Candidate ranking for the computer's move.

Ranking rule, in order:
1. Search score, higher first (the game-theoretic value dominates)
2. Stored bias, higher first (breaks ties between equally good moves,
   so a move that previously drew or lost gives way to an untried one)
3. Cell preference: center, then corners, then edges
"""

from __future__ import annotations

from typing import List, NamedTuple, Sequence

from tictactoe_ai.core.types import BANNED, CELL_PREFERENCE, BiasValue

_PREFERENCE_RANK = {cell: rank for rank, cell in enumerate(CELL_PREFERENCE)}


class Candidate(NamedTuple):
    """A legal move with its search score and stored bias."""

    move: int
    score: int
    bias: BiasValue = 0.0

    @property
    def bias_score(self) -> float:
        return float("-inf") if self.bias is BANNED else float(self.bias)

    @property
    def is_safe(self) -> bool:
        """Search says this move does not lose against best play."""
        return self.score >= 0


def rank_key(candidate: Candidate):
    return (-candidate.score, -candidate.bias_score, _PREFERENCE_RANK[candidate.move])


def rank_candidates(candidates: Sequence[Candidate]) -> List[Candidate]:
    """Best first."""
    return sorted(candidates, key=rank_key)


def pick(ranked: Sequence[Candidate]) -> Candidate:
    """
    First non-negative candidate; if every move loses, the best of them.

    Args:
        ranked: Candidates sorted by rank_candidates()

    Returns:
        The chosen candidate
    """
    if not ranked:
        raise ValueError("No candidates to pick from")
    for candidate in ranked:
        if candidate.is_safe:
            return candidate
    return ranked[0]
