"""
Core types, constants, and data structures.

This module contains the fundamental types used throughout the engine:
- Cell marks and their display / key characters
- Game outcome and per-player result enums
- Learning reward constants
- The BANNED bias sentinel
"""

from __future__ import annotations

from enum import Enum, auto
from typing import Union


# ---------------------------------------------------------------------------
# Cell marks (int8 board encoding)
# ---------------------------------------------------------------------------

EMPTY = 0
X = 1  # Player A, moves first
O = 2  # Player B, the computer by default

MARKS = (X, O)
BOARD_CELLS = 9

# Display strings for each cell value
CELL_STRINGS = {EMPTY: " ", X: "X", O: "O"}

# Characters used to build state keys. Empty cells get a visible
# placeholder so that keys stay fixed-length and unambiguous.
KEY_CHARS = {EMPTY: "-", X: "X", O: "O"}


def opponent(mark: int) -> int:
    """Return the other player's mark."""
    if mark not in MARKS:
        raise ValueError(f"Not a player mark: {mark!r}")
    return 3 - mark  # Toggle 1↔2


class State(Enum):
    """Result of a game from one player's point of view."""
    WIN = auto()
    TIE = auto()
    LOSS = auto()
    NEUTRAL = auto()


class Outcome(Enum):
    """Result of a game as read off the board."""
    X_WINS = auto()
    O_WINS = auto()
    DRAW = auto()
    IN_PROGRESS = auto()


class Mode(Enum):
    HUMAN = "human"
    AI = "ai"


# ╔═════════════════════════════════════════════════════════════════════════════╗
# ║                        CONFIGURABLE LEARNING REWARDS                        ║
# ║                                                                             ║
# ║  Applied to every move the computer made in a finished game:                ║
# ║                                                                             ║
# ║  Win:   WIN_REWARD added to the move's bias                                 ║
# ║  Draw:  DRAW_REWARD added (small penalty, nudges play toward other          ║
# ║         equally-scored lines next time; 0.0 disables it)                    ║
# ║  Loss:  the move is BANNED from that state for good                         ║
# ╚═════════════════════════════════════════════════════════════════════════════╝

WIN_REWARD = 1.0
DRAW_REWARD = -0.1

# Tie-break order when search score and bias are equal:
# center, then corners, then edges.
CELL_PREFERENCE = (4, 0, 2, 6, 8, 1, 3, 5, 7)


class Banned:
    """
    Bias sentinel meaning "never play this move from this state again".

    A tagged singleton rather than a very negative number, so a banned
    move can never be confused with a low accumulated reward.
    """

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "BANNED"

    def __reduce__(self):
        return (Banned, ())

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self


BANNED = Banned()

BiasValue = Union[float, Banned]
