"""
Exception hierarchy.

Move and board errors subclass ValueError so callers that only know
about ValueError keep working.
"""


class TicTacToeError(Exception):
    """Base class for all engine errors."""


class InvalidMoveError(TicTacToeError, ValueError):
    """Cell index out of range, not an integer, or already occupied."""


class GameOverError(InvalidMoveError):
    """A move was attempted on a finished game."""


class InvalidBoardError(TicTacToeError, ValueError):
    """Board does not have 9 cells or holds an unknown mark."""


class NoLegalMoveError(TicTacToeError):
    """The computer was asked to move on a board with no empty cell."""


class PersistenceError(TicTacToeError):
    """The experience store could not write its table to storage."""
