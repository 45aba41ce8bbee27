"""
Tic-tac-toe AI - exhaustive search plus a learned move-ban memory.

The computer plays by full minimax over the 3x3 game tree. A persistent
experience table bans every move that was part of a lost game and
rewards moves from won games, so the same mistake is never repeated from
the same position.

Quick Start:
    from tictactoe_ai import GameSession, MoveSelector, Mode, memory

    with memory.for_path("data/memory/experience.db") as store:
        session = GameSession(Mode.AI, MoveSelector(store))
        session.play(4)

Modules:
    core       - Marks, outcome types, errors, state keys and the search
    games      - Board rules and a single game
    memory     - Experience stores (SQLite and JSON backends)
    selection  - Candidate ranking for the computer's move
    agent      - MoveSelector, the learning computer player
    api        - GameSession for human-vs-human and human-vs-computer play
"""

from tictactoe_ai import memory
from tictactoe_ai.api import GameSession, Scoreboard, MoveSelector
from tictactoe_ai.core import (
    BANNED,
    X,
    O,
    Mode,
    Outcome,
    State,
    evaluate,
    immediate_winning_move,
    state_key,
    InvalidMoveError,
    NoLegalMoveError,
    PersistenceError,
)
from tictactoe_ai.memory import ExperienceStore, SqliteExperienceStore, JsonExperienceStore

__version__ = "1.0.0"

__all__ = [
    # Main API
    "GameSession",
    "Scoreboard",
    "MoveSelector",
    "memory",
    "ExperienceStore",
    "SqliteExperienceStore",
    "JsonExperienceStore",
    # Search
    "evaluate",
    "immediate_winning_move",
    "state_key",
    # Types
    "BANNED",
    "X",
    "O",
    "Mode",
    "Outcome",
    "State",
    # Errors
    "InvalidMoveError",
    "NoLegalMoveError",
    "PersistenceError",
]
