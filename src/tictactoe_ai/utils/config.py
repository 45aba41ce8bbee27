"""
Configuration and mode registry.
"""

from pathlib import Path

from tictactoe_ai.core.types import DRAW_REWARD, O, WIN_REWARD, Mode, opponent


# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------

PACKAGE_DIR = Path(__file__).parent.parent  # src/tictactoe_ai/
DATA_DIR = PACKAGE_DIR / "data"
MEMORY_DIR = DATA_DIR / "memory"
DEFAULT_MEMORY_PATH = MEMORY_DIR / "experience.db"


# ---------------------------------------------------------------------------
# Mode Registry
# ---------------------------------------------------------------------------

MODES = {
    "human": Mode.HUMAN,
    "ai": Mode.AI,
}


# ---------------------------------------------------------------------------
# Default Settings
# ---------------------------------------------------------------------------

class Config:
    """Engine configuration with sensible defaults."""

    def __init__(
        self,
        mode: str | Mode = "ai",
        memory_path: str | Path = DEFAULT_MEMORY_PATH,
        computer: int = O,
        win_reward: float = WIN_REWARD,
        draw_reward: float = DRAW_REWARD,
    ):
        if isinstance(mode, Mode):
            self.mode = mode
        elif mode in MODES:
            self.mode = MODES[mode]
        else:
            raise ValueError(f"Unknown mode {mode!r}, expected one of {sorted(MODES)}")
        self.memory_path = Path(memory_path)
        self.computer = computer
        self.win_reward = float(win_reward)
        self.draw_reward = float(draw_reward)

        opponent(computer)  # validates the mark
        if self.win_reward <= 0:
            raise ValueError(f"win_reward must be positive, got {win_reward}")
        if self.draw_reward > 0:
            raise ValueError(f"draw_reward must be zero or negative, got {draw_reward}")


# Default configuration
DEFAULT_CONFIG = Config()
