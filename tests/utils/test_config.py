"""
Tests for tictactoe_ai.utils.config

Tests configuration and mode registry.
"""

from pathlib import Path

import pytest

from tictactoe_ai.core.types import DRAW_REWARD, WIN_REWARD, Mode, O, X
from tictactoe_ai.utils.config import DEFAULT_CONFIG, DEFAULT_MEMORY_PATH, MODES, Config


class TestModeRegistry:
    """MODES registry tests."""

    def test_both_modes(self):
        assert MODES == {"human": Mode.HUMAN, "ai": Mode.AI}


class TestConfig:
    """Config class tests."""

    def test_defaults(self):
        """Default values are set."""
        config = Config()
        assert config.mode is Mode.AI
        assert config.memory_path == DEFAULT_MEMORY_PATH
        assert config.computer == O
        assert config.win_reward == WIN_REWARD
        assert config.draw_reward == DRAW_REWARD

    def test_default_config_exists(self):
        assert isinstance(DEFAULT_CONFIG, Config)

    def test_custom_values(self):
        config = Config(mode="human", memory_path="games.json", computer=X, draw_reward=0)
        assert config.mode is Mode.HUMAN
        assert config.memory_path == Path("games.json")
        assert config.computer == X
        assert config.draw_reward == 0.0

    def test_unknown_mode(self):
        """Unknown names are rejected with the valid choices listed."""
        with pytest.raises(ValueError, match="human"):
            Config(mode="online")

    @pytest.mark.parametrize("mode", [Mode.AI, Mode.HUMAN])
    def test_mode_enum_accepted(self, mode):
        assert Config(mode=mode).mode is mode

    def test_bad_computer(self):
        with pytest.raises(ValueError):
            Config(computer=0)

    @pytest.mark.parametrize("kwargs", [
        {"win_reward": 0},
        {"win_reward": -1},
        {"draw_reward": 0.5},
    ])
    def test_bad_rewards(self, kwargs):
        with pytest.raises(ValueError):
            Config(**kwargs)

    def test_memory_path_in_package_data(self):
        assert DEFAULT_MEMORY_PATH.name == "experience.db"
        assert DEFAULT_MEMORY_PATH.parent.name == "memory"
