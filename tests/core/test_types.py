"""
Tests for tictactoe_ai.core.types

Tests marks, enums and the BANNED sentinel.
"""

import copy
import pickle

import pytest

from tictactoe_ai.core.types import (
    BANNED, Banned,
    CELL_PREFERENCE, DRAW_REWARD, WIN_REWARD,
    EMPTY, O, X,
    Mode, Outcome, State,
    opponent,
)


class TestMarks:
    """Mark constants and opponent()."""

    def test_distinct(self):
        """Empty and both marks are distinct int8-friendly values."""
        assert len({EMPTY, X, O}) == 3
        assert EMPTY == 0

    def test_opponent_toggles(self):
        """opponent() swaps X and O."""
        assert opponent(X) == O
        assert opponent(O) == X

    @pytest.mark.parametrize("bad", [EMPTY, 3, -1])
    def test_opponent_rejects_non_marks(self, bad):
        """opponent() rejects anything but X or O."""
        with pytest.raises(ValueError):
            opponent(bad)


class TestEnums:
    """State, Outcome and Mode enums."""

    def test_all_states_exist(self):
        """All expected states are defined."""
        assert all(hasattr(State, s) for s in ['WIN', 'TIE', 'LOSS', 'NEUTRAL'])

    def test_outcomes_exist(self):
        """All expected outcomes are defined."""
        assert {o.name for o in Outcome} == {"X_WINS", "O_WINS", "DRAW", "IN_PROGRESS"}

    def test_mode_from_string(self):
        """Modes can be looked up by value."""
        assert Mode("ai") is Mode.AI
        assert Mode("human") is Mode.HUMAN


class TestBanned:
    """BANNED sentinel tests."""

    def test_singleton(self):
        """Every Banned() is the same object."""
        assert Banned() is BANNED

    def test_not_a_number(self):
        """BANNED never compares equal to a number."""
        assert BANNED != float("-inf")
        assert BANNED != -1e300
        assert not isinstance(BANNED, (int, float))

    def test_copy_keeps_identity(self):
        """copy, deepcopy and pickle all return the singleton."""
        assert copy.copy(BANNED) is BANNED
        assert copy.deepcopy({"k": BANNED})["k"] is BANNED
        assert pickle.loads(pickle.dumps(BANNED)) is BANNED

    def test_repr(self):
        assert repr(BANNED) == "BANNED"


class TestConstants:
    """Learning constants."""

    def test_rewards(self):
        """Wins reward, draws penalise lightly."""
        assert WIN_REWARD > 0
        assert -WIN_REWARD < DRAW_REWARD <= 0

    def test_cell_preference_covers_board(self):
        """Preference order is a permutation of all cells, center first."""
        assert sorted(CELL_PREFERENCE) == list(range(9))
        assert CELL_PREFERENCE[0] == 4
