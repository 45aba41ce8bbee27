"""
JSON-file experience store: the whole table as one document.

Layout:
    {
        "version": 1,
        "experience": {
            "----X----": {"0": 1.0, "1": "banned"}
        }
    }

The file is rewritten on every mutation through a temporary file and an
atomic replace, so a crash leaves either the old or the new table.
"""

from __future__ import annotations

import json
import os
import tempfile
from typing import Any, Dict, Iterable, List

from tictactoe_ai.core.types import BANNED, BiasValue
from tictactoe_ai.memory.experience_store import ExperienceStore, Row, Table
from tictactoe_ai.memory.schema import JSON_BANNED

FORMAT_VERSION = 1


class JsonExperienceStore(ExperienceStore):
    """JSON document experience store implementation."""

    backend = "json"
    corrupt_errors = (ValueError, UnicodeDecodeError)
    write_errors = (OSError, TypeError, ValueError)

    def _open(self) -> None:
        # Nothing held open between writes
        pass

    def _load_rows(self) -> Iterable[Row]:
        if not self.path.exists():
            return []
        with open(self.path, "r", encoding="utf-8") as f:
            doc = json.load(f)
        return _rows_from_document(doc)

    def _persist(self, state_key: str, move: int, value: BiasValue) -> None:
        self._persist_all()

    def _persist_all(self) -> None:
        write_document(self.path, to_document(self._table))

    def _close(self) -> None:
        pass


def to_document(table: Table) -> Dict[str, Any]:
    """Encode a table as a JSON-safe document."""
    experience = {
        state_key: {
            str(move): JSON_BANNED if value is BANNED else float(value)
            for move, value in sorted(moves.items())
        }
        for state_key, moves in sorted(table.items())
        if moves
    }
    return {"version": FORMAT_VERSION, "experience": experience}


def write_document(path, doc: Dict[str, Any]) -> None:
    """Atomically write doc to path."""
    fd, tmp = tempfile.mkstemp(dir=str(path.parent), prefix=path.name, suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(doc, f, indent=1, allow_nan=False)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp, path)
    except BaseException:
        if os.path.exists(tmp):
            os.unlink(tmp)
        raise


def _rows_from_document(doc: Any) -> List[Row]:
    if not isinstance(doc, dict) or not isinstance(doc.get("experience"), dict):
        raise ValueError("Missing 'experience' mapping")
    if doc.get("version") != FORMAT_VERSION:
        raise ValueError(f"Unsupported format version: {doc.get('version')!r}")

    rows: List[Row] = []
    for state_key, moves in doc["experience"].items():
        if not isinstance(moves, dict):
            rows.append((state_key, None, None))  # counted as skipped
            continue
        for move, value in moves.items():
            rows.append((state_key, move, BANNED if value == JSON_BANNED else value))
    return rows
