"""
Base class for experience store implementations.

Holds the (state_key -> move -> bias) table in memory and provides the
shared read, learning and lifecycle logic. Subclasses implement the
backend-specific loading and writing.

Every mutation is written through to storage before it returns. If the
write fails the in-memory change is kept and PersistenceError is raised.
"""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Set, Tuple

import numpy as np

from tictactoe_ai.core.errors import InvalidMoveError, PersistenceError
from tictactoe_ai.core.hashing import is_state_key
from tictactoe_ai.core.types import BANNED, BOARD_CELLS, BiasValue

logger = logging.getLogger(__name__)

Table = Dict[str, Dict[int, BiasValue]]
Row = Tuple[Any, Any, Any]


class ExperienceStore(ABC):
    """Abstract base for persistent move-bias memory."""

    backend: str  # Subclasses define: "sqlite" or "json"

    # Errors that mean "the file on disk is not a valid store"
    corrupt_errors: Tuple[type, ...] = ()
    # Subset of corrupt_errors raised by a healthy file that can't be read
    # right now (locked, busy); these propagate and the file is kept
    unavailable_errors: Tuple[type, ...] = ()
    # Errors a failed write can raise
    write_errors: Tuple[type, ...] = (OSError,)

    def __init__(self, path: str | Path, read_only: bool = False):
        self.path = Path(path).resolve()
        self.read_only = read_only
        self._closed = False
        self._table: Table = {}

        if not read_only:
            self.path.parent.mkdir(parents=True, exist_ok=True)

        self._table = self._rehydrate()
        logger.info(
            "Opened %s experience store at %s (%d states)",
            self.backend, self.path, len(self._table),
        )

    # -------------------------------------------------------------------------
    # Abstract Methods (subclasses must implement)
    # -------------------------------------------------------------------------

    @abstractmethod
    def _open(self) -> None:
        """Open the backing storage, creating it if needed."""
        pass

    @abstractmethod
    def _load_rows(self) -> Iterable[Row]:
        """Yield raw (state_key, move, value) rows from storage."""
        pass

    @abstractmethod
    def _persist(self, state_key: str, move: int, value: BiasValue) -> None:
        """Durably write a single entry."""
        pass

    @abstractmethod
    def _persist_all(self) -> None:
        """Durably replace the stored table with the in-memory one."""
        pass

    @abstractmethod
    def _close(self) -> None:
        """Release backend resources."""
        pass

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    def _rehydrate(self) -> Table:
        try:
            self._open()
            rows = list(self._load_rows())
        except self.corrupt_errors as e:
            if isinstance(e, self.unavailable_errors):
                logger.error("Experience store %s could not be opened: %s", self.path, e)
                self._close()
                raise
            logger.warning("Experience store %s is corrupt (%s), starting empty", self.path, e)
            self._recover_from_corruption()
            return {}

        table: Table = {}
        skipped = 0
        for row in rows:
            entry = _coerce_row(*row)
            if entry is None:
                skipped += 1
                continue
            state_key, move, value = entry
            table.setdefault(state_key, {})[move] = value

        if skipped:
            logger.warning("Skipped %d invalid rows while loading %s", skipped, self.path)
        return table

    def _recover_from_corruption(self) -> None:
        """Move the bad file aside and start over with fresh storage."""
        self._close()
        if self.read_only:
            return

        if self.path.exists():
            aside = self.path.with_name(self.path.name + ".corrupt")
            self.path.replace(aside)
            logger.warning("Moved corrupt store to %s", aside)
        self._open()

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get_bias(self, state_key: str, move: int) -> BiasValue:
        """Stored bias for a move from a state: a float, BANNED, or 0.0 if absent."""
        move = _check_entry(state_key, move)
        return self._table.get(state_key, {}).get(move, 0.0)

    def is_banned(self, state_key: str, move: int) -> bool:
        return self.get_bias(state_key, move) is BANNED

    def banned_moves(self, state_key: str) -> Set[int]:
        """Every move banned from this state."""
        return {m for m, v in self._table.get(state_key, {}).items() if v is BANNED}

    def snapshot(self) -> Table:
        """Independent copy of the whole table."""
        return {k: dict(moves) for k, moves in self._table.items()}

    def __len__(self) -> int:
        return sum(len(moves) for moves in self._table.values())

    def get_info(self) -> Dict[str, Any]:
        """Get summary statistics."""
        values = [v for moves in self._table.values() for v in moves.values()]
        banned = sum(1 for v in values if v is BANNED)
        return {
            "backend": self.backend,
            "path": str(self.path),
            "states": len(self._table),
            "entries": len(values),
            "banned": banned,
            "rewarded": len(values) - banned,
        }

    # -------------------------------------------------------------------------
    # Learning
    # -------------------------------------------------------------------------

    def apply_reward(self, state_key: str, move: int, delta: float) -> None:
        """
        Add delta to a move's bias, then persist.

        A banned move stays banned; rewards never lift a ban.
        """
        self._check_writable()
        move = _check_entry(state_key, move)
        delta = float(delta)
        if not math.isfinite(delta):
            raise ValueError(f"Reward must be finite, got {delta}")

        moves = self._table.setdefault(state_key, {})
        current = moves.get(move, 0.0)
        if current is BANNED:
            logger.debug("Ignoring reward %+.3f for banned move %s/%d", delta, state_key, move)
            return

        moves[move] = current + delta
        logger.debug("Reward %+.3f for %s/%d -> %.3f", delta, state_key, move, moves[move])
        self._save(state_key, move)

    def ban(self, state_key: str, move: int) -> None:
        """Mark a move as never to be played from this state again, then persist."""
        self._check_writable()
        move = _check_entry(state_key, move)
        self._table.setdefault(state_key, {})[move] = BANNED
        logger.debug("Banned %s/%d", state_key, move)
        self._save(state_key, move)

    def replace_table(self, table: Table) -> None:
        """Swap in a whole table (import), then persist."""
        self._check_writable()
        new_table: Table = {}
        for state_key, moves in table.items():
            for move, value in moves.items():
                entry = _coerce_row(state_key, move, value)
                if entry is None:
                    raise ValueError(f"Invalid entry {state_key!r}/{move!r}: {value!r}")
                new_table.setdefault(entry[0], {})[entry[1]] = entry[2]

        self._table = new_table
        self._save_all()

    def reset(self) -> None:
        """Forget everything learned so far."""
        self.replace_table({})
        logger.info("Reset experience store at %s", self.path)

    # -------------------------------------------------------------------------
    # Writing
    # -------------------------------------------------------------------------

    def _check_writable(self) -> None:
        if self.read_only:
            raise RuntimeError("Cannot modify experience store in read-only mode")
        if self._closed:
            raise RuntimeError("Experience store is closed")

    def _save(self, state_key: str, move: int) -> None:
        try:
            self._persist(state_key, move, self._table[state_key][move])
        except self.write_errors as e:
            raise PersistenceError(
                f"Could not save {state_key}/{move} to {self.path}: {e}"
            ) from e

    def _save_all(self) -> None:
        try:
            self._persist_all()
        except self.write_errors as e:
            raise PersistenceError(f"Could not save experience table to {self.path}: {e}") from e

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Release storage. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        self._close()

    def __enter__(self):
        return self

    def __exit__(self, *_):
        self.close()


# -----------------------------------------------------------------------------
# Validation
# -----------------------------------------------------------------------------

def _check_entry(state_key: str, move: int) -> int:
    if not is_state_key(state_key):
        raise ValueError(f"Not a state key: {state_key!r}")
    if isinstance(move, (bool, np.bool_)) or not isinstance(move, (int, np.integer)):
        raise InvalidMoveError(f"Move must be an integer cell index, got {move!r}")
    move = int(move)
    if not 0 <= move < BOARD_CELLS:
        raise InvalidMoveError(f"Cell {move} is outside 0-{BOARD_CELLS - 1}")
    return move


def _coerce_row(state_key: Any, move: Any, value: Any) -> Optional[Tuple[str, int, BiasValue]]:
    """Normalize a stored row, or return None if it can't be trusted."""
    if not is_state_key(state_key):
        return None
    try:
        move = int(move)
    except (TypeError, ValueError):
        return None
    if not 0 <= move < BOARD_CELLS:
        return None

    if value is BANNED:
        return state_key, move, BANNED
    if isinstance(value, bool):
        return None
    try:
        bias = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(bias):
        return None
    return state_key, move, bias
