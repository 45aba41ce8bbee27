"""
NumPy utilities for the 3x3 board.

Boards are flat int8 arrays of 9 cells, row-major:
    0 1 2
    3 4 5
    6 7 8
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, List, Sequence, Union

import numpy as np

from tictactoe_ai.core.errors import InvalidBoardError, InvalidMoveError
from tictactoe_ai.core.types import BOARD_CELLS, EMPTY, MARKS, O, X, Outcome

# Pre-computed winning lines (indices into the flattened board)
WIN_LINES = np.array([
    [0, 1, 2], [3, 4, 5], [6, 7, 8],  # rows
    [0, 3, 6], [1, 4, 7], [2, 5, 8],  # cols
    [0, 4, 8], [2, 4, 6],             # diagonals
], dtype=np.int8)

# Same lines as plain tuples for the search hot path
WIN_TRIPLES = tuple(tuple(int(i) for i in line) for line in WIN_LINES)

BoardLike = Union[np.ndarray, Sequence[int]]


def new_board() -> np.ndarray:
    """Return an empty board."""
    return np.zeros(BOARD_CELLS, dtype=np.int8)


def as_board(cells: BoardLike) -> np.ndarray:
    """
    Validate cells and return them as a flat int8 board.

    numpy boards of the right dtype and shape are returned as-is (not
    copied), so callers keep identity with their own array.
    """
    if isinstance(cells, np.ndarray) and cells.dtype == np.int8 and cells.shape == (BOARD_CELLS,):
        board = cells
    else:
        try:
            board = np.asarray(cells, dtype=np.int8).ravel()
        except (TypeError, ValueError, OverflowError) as e:
            raise InvalidBoardError(f"Board is not a sequence of marks: {cells!r}") from e

    if board.size != BOARD_CELLS:
        raise InvalidBoardError(f"Board must have {BOARD_CELLS} cells, got {board.size}")
    if not np.all((board == EMPTY) | (board == X) | (board == O)):
        raise InvalidBoardError(f"Board holds unknown marks: {board.tolist()}")
    return board


def check_move(board: np.ndarray, move) -> int:
    """Return move as an int, or raise InvalidMoveError if it can't be played."""
    if isinstance(move, (bool, np.bool_)) or not isinstance(move, (int, np.integer)):
        raise InvalidMoveError(f"Move must be an integer cell index, got {move!r}")
    cell = int(move)
    if not 0 <= cell < BOARD_CELLS:
        raise InvalidMoveError(f"Cell {cell} is outside 0-{BOARD_CELLS - 1}")
    if board[cell] != EMPTY:
        raise InvalidMoveError(f"Cell {cell} is occupied")
    return cell


def empty_cells(board: np.ndarray) -> List[int]:
    """Indices of empty cells, ascending."""
    return [int(i) for i in np.flatnonzero(board == EMPTY)]


def board_full(board: np.ndarray) -> bool:
    """Return True if no cell is empty."""
    return not np.any(board == EMPTY)


def has_line(board: np.ndarray, player: int) -> bool:
    """Return True if player holds any complete line."""
    return bool(np.any(np.all(board[WIN_LINES] == player, axis=1)))


def winner(board: np.ndarray) -> int:
    """Return the mark holding a complete line, or 0."""
    for line in WIN_TRIPLES:
        v = board[line[0]]
        if v != EMPTY and board[line[1]] == v and board[line[2]] == v:
            return int(v)
    return 0


def outcome(board: np.ndarray) -> Outcome:
    """Read the game outcome off the board."""
    w = winner(board)
    if w == X:
        return Outcome.X_WINS
    if w == O:
        return Outcome.O_WINS
    if board_full(board):
        return Outcome.DRAW
    return Outcome.IN_PROGRESS


@contextmanager
def placed(board: np.ndarray, cell: int, player: int) -> Iterator[np.ndarray]:
    """
    Temporarily put player's mark on an empty cell.

    The cell is cleared again on exit, including when the body raises or
    returns early.
    """
    if player not in MARKS:
        raise ValueError(f"Not a player mark: {player!r}")
    cell = check_move(board, cell)
    board[cell] = player
    try:
        yield board
    finally:
        board[cell] = EMPTY
