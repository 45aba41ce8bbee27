"""
Factory functions for creating stores, selectors and sessions.
"""

from typing import Optional

from tictactoe_ai.agent.agent import MoveSelector
from tictactoe_ai.api import GameSession
from tictactoe_ai.core.types import Mode
from tictactoe_ai.memory import ExperienceStore, for_path
from tictactoe_ai.utils.config import DEFAULT_CONFIG, Config


def create_store(config: Config = DEFAULT_CONFIG, read_only: bool = False) -> ExperienceStore:
    """Open the experience store named by config.memory_path."""
    return for_path(config.memory_path, read_only=read_only)


def create_selector(store: ExperienceStore, config: Config = DEFAULT_CONFIG) -> MoveSelector:
    """
    Create the computer player on an already opened store.

    Args:
        store: Experience store (owned by the caller)
        config: Computer mark and reward settings

    Returns:
        Configured MoveSelector
    """
    return MoveSelector(
        store,
        computer=config.computer,
        win_reward=config.win_reward,
        draw_reward=config.draw_reward,
    )


def create_session(config: Config = DEFAULT_CONFIG, store: Optional[ExperienceStore] = None) -> GameSession:
    """
    Create a game session in config.mode.

    AI mode needs a store; human mode ignores it.
    """
    if config.mode is Mode.HUMAN:
        return GameSession(Mode.HUMAN)
    if store is None:
        raise ValueError("AI mode needs an experience store")
    return GameSession(Mode.AI, create_selector(store, config))
