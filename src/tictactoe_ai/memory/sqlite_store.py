"""
SQLite-backed experience store: one row per (state_key, move).

Each mutation is committed before the call returns.
"""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path
from typing import Iterable, Optional

from tictactoe_ai.core.types import BANNED, BiasValue
from tictactoe_ai.memory.experience_store import ExperienceStore, Row
from tictactoe_ai.memory.schema import SCHEMA, SCHEMA_VERSION

logger = logging.getLogger(__name__)

_UPSERT = """
INSERT INTO experience (state_key, move, bias, banned)
VALUES (?,?,?,?)
ON CONFLICT(state_key, move) DO UPDATE SET
    bias = excluded.bias,
    banned = excluded.banned
"""


class SqliteExperienceStore(ExperienceStore):
    """SQLite experience store implementation."""

    backend = "sqlite"
    corrupt_errors = (sqlite3.DatabaseError,)
    # Locked, busy or unopenable; also covers a foreign table layout
    unavailable_errors = (sqlite3.OperationalError,)
    write_errors = (sqlite3.Error, OSError)

    def __init__(self, db_path: str | Path, read_only: bool = False):
        self.conn: Optional[sqlite3.Connection] = None
        super().__init__(db_path, read_only=read_only)

    @property
    def db_path(self) -> Path:
        return self.path

    def _open(self) -> None:
        if self.read_only and not self.path.exists():
            return  # nothing learned yet; don't create the file

        self.conn = sqlite3.connect(str(self.path))
        if self.read_only:
            return

        self.conn.execute("PRAGMA journal_mode=WAL")
        self.conn.execute("PRAGMA synchronous=FULL")
        self.conn.executescript(SCHEMA)
        self.conn.execute(
            "INSERT OR IGNORE INTO metadata (key, value) VALUES ('schema_version', ?)",
            (SCHEMA_VERSION,),
        )
        self.conn.commit()

    def _load_rows(self) -> Iterable[Row]:
        if self.conn is None:
            return []
        rows = self.conn.execute(
            "SELECT state_key, move, bias, banned FROM experience"
        ).fetchall()
        return [(k, m, BANNED if banned else bias) for k, m, bias, banned in rows]

    def _persist(self, state_key: str, move: int, value: BiasValue) -> None:
        self.conn.execute(_UPSERT, _to_row(state_key, move, value))
        self.conn.commit()

    def _persist_all(self) -> None:
        cur = self.conn.cursor()
        try:
            cur.execute("DELETE FROM experience")
            cur.executemany(
                _UPSERT,
                [
                    _to_row(state_key, move, value)
                    for state_key, moves in self._table.items()
                    for move, value in moves.items()
                ],
            )
            self.conn.commit()
        except sqlite3.Error:
            self.conn.rollback()
            raise

    def _close(self) -> None:
        if self.conn is None:
            return
        conn, self.conn = self.conn, None
        if not self.read_only:
            try:
                conn.execute("PRAGMA wal_checkpoint(TRUNCATE)")
            except sqlite3.Error as e:
                logger.warning("WAL checkpoint failed for %s: %s", self.path, e)
        conn.close()


def _to_row(state_key: str, move: int, value: BiasValue):
    if value is BANNED:
        return (state_key, move, 0.0, 1)
    return (state_key, move, float(value), 0)
