"""
Experience memory module - persistent move bias for the computer player.

Two storage backends behind one interface:
- SqliteExperienceStore: one row per (state, move), committed per write
- JsonExperienceStore: whole table as a single JSON document

Use `for_path()` factory or instantiate directly.
"""

from __future__ import annotations

from pathlib import Path

from tictactoe_ai.memory.experience_store import ExperienceStore, Table
from tictactoe_ai.memory.sqlite_store import SqliteExperienceStore
from tictactoe_ai.memory.json_store import JsonExperienceStore

JSON_SUFFIXES = {".json"}


def store_class(path: str | Path) -> type:
    """Backend class for a path, chosen by file suffix."""
    if Path(path).suffix.lower() in JSON_SUFFIXES:
        return JsonExperienceStore
    return SqliteExperienceStore


def for_path(path: str | Path, **kwargs) -> ExperienceStore:
    """
    Open (or create) the experience store at path.

    Args:
        path: Store file. ".json" selects the JSON backend, anything else SQLite.
        **kwargs: Additional arguments (e.g., read_only=True)

    Returns:
        SqliteExperienceStore or JsonExperienceStore instance
    """
    return store_class(path)(path, **kwargs)


def open_readonly(path: str | Path) -> ExperienceStore:
    """Open an existing store in read-only mode."""
    return for_path(path, read_only=True)


__all__ = [
    "ExperienceStore",
    "SqliteExperienceStore",
    "JsonExperienceStore",
    "Table",
    "for_path",
    "open_readonly",
    "store_class",
]
