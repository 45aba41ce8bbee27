"""
Shared test fixtures for tictactoe_ai tests.

Design principles:
- Backend-agnostic store fixtures where possible
- Clean imports at module level
- Minimal, focused fixtures
"""

import tempfile
from pathlib import Path
from typing import Callable, Generator

import numpy as np
import pytest

from tictactoe_ai.agent.agent import MoveSelector
from tictactoe_ai.core.types import EMPTY, O, X
from tictactoe_ai.memory import ExperienceStore, JsonExperienceStore, SqliteExperienceStore


# =============================================================================
# Path Fixtures
# =============================================================================

@pytest.fixture
def temp_db_path() -> Generator[Path, None, None]:
    """Temporary database file with cleanup."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        path = Path(f.name)
    path.unlink()  # let the store create it
    yield path
    for suffix in ["", "-wal", "-shm", ".corrupt"]:
        p = Path(str(path) + suffix)
        if p.exists():
            p.unlink()


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Temporary directory with cleanup."""
    with tempfile.TemporaryDirectory() as d:
        yield Path(d)


# =============================================================================
# Board Fixtures
# =============================================================================

_CHARS = {"-": EMPTY, "X": X, "O": O}


@pytest.fixture
def parse_board() -> Callable[[str], np.ndarray]:
    """
    Build a board from a picture, e.g. "XO- -X- --O".

    Spaces and '|' are ignored; '-' is an empty cell.
    """
    def parse(picture: str) -> np.ndarray:
        cells = [_CHARS[ch] for ch in picture if ch not in " |"]
        assert len(cells) == 9, picture
        return np.array(cells, dtype=np.int8)
    return parse


@pytest.fixture
def empty_board() -> np.ndarray:
    return np.zeros(9, dtype=np.int8)


# =============================================================================
# Memory Fixtures
# =============================================================================

@pytest.fixture
def memory(temp_db_path: Path) -> Generator[SqliteExperienceStore, None, None]:
    """SQLite experience store with a temporary database."""
    mem = SqliteExperienceStore(temp_db_path)
    yield mem
    mem.close()


@pytest.fixture(params=["sqlite", "json"])
def store_path(request, temp_dir: Path) -> Path:
    """Store file for each backend."""
    suffix = ".db" if request.param == "sqlite" else ".json"
    return temp_dir / f"experience{suffix}"


@pytest.fixture
def any_store(store_path: Path) -> Generator[ExperienceStore, None, None]:
    """Experience store of each backend."""
    cls = JsonExperienceStore if store_path.suffix == ".json" else SqliteExperienceStore
    mem = cls(store_path)
    yield mem
    mem.close()


# =============================================================================
# Selector Fixtures
# =============================================================================

@pytest.fixture
def selector(memory: SqliteExperienceStore) -> MoveSelector:
    """Computer playing O on a fresh store."""
    return MoveSelector(memory, computer=O)
