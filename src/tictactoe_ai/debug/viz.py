"""
Terminal visualizer for the computer's move choice.

Shows the board next to a table of every candidate cell with its search
score and stored bias, best first.
"""

from __future__ import annotations

import re
from typing import List, Sequence

import numpy as np

from tictactoe_ai.core.types import BANNED, CELL_STRINGS
from tictactoe_ai.selection.inference import Candidate

# ═══════════════════════════════════════════════════════════════════════════════
# ANSI Colors & Styling
# ═══════════════════════════════════════════════════════════════════════════════

RESET = "\033[0m"
BOLD = "\033[1m"
DIM = "\033[2m"

FG = {
    "green": "\033[38;5;28m",
    "red": "\033[38;5;124m",
    "yellow": "\033[38;5;142m",
    "gray": "\033[38;5;245m",
}

BG = {
    "selected": "\033[48;5;22m",  # Dark green
}


def score_color(score: int) -> str:
    if score > 0:
        return FG["green"]
    if score == 0:
        return FG["yellow"]
    return FG["red"]


# ═══════════════════════════════════════════════════════════════════════════════
# Text utilities
# ═══════════════════════════════════════════════════════════════════════════════

_ANSI_RE = re.compile(r"\033\[[0-9;]*m")


def strip_ansi(text: str) -> str:
    return _ANSI_RE.sub("", text)


def pad(text: str, width: int) -> str:
    gap = max(0, width - len(strip_ansi(text)))
    return text + " " * gap


# ═══════════════════════════════════════════════════════════════════════════════
# Rendering
# ═══════════════════════════════════════════════════════════════════════════════

def board_lines(board: np.ndarray, chosen: int = -1) -> List[str]:
    """Board as 3 text rows; empty cells show their index, the chosen cell is highlighted."""
    lines = []
    for r in range(3):
        cells = []
        for c in range(3):
            i = r * 3 + c
            v = int(board[i])
            text = CELL_STRINGS[v] if v else f"{DIM}{i}{RESET}"
            if i == chosen:
                text = f"{BG['selected']}{BOLD}{i}{RESET}"
            cells.append(f" {text} ")
        lines.append("│".join(cells))
    return lines


def format_bias(bias) -> str:
    if bias is BANNED:
        return f"{FG['red']}banned{RESET}"
    if bias == 0:
        return f"{FG['gray']}0{RESET}"
    return f"{bias:+.2f}"


def candidate_lines(ranked: Sequence[Candidate], chosen: int) -> List[str]:
    lines = [f"{BOLD}cell  score  bias{RESET}"]
    for c in ranked:
        marker = "▶" if c.move == chosen else " "
        score = f"{score_color(c.score)}{c.score:+d}{RESET}"
        lines.append(f"{marker} {c.move}   {pad(score, 5)}  {format_bias(c.bias)}")
    return lines


def render_candidates(board: np.ndarray, ranked: Sequence[Candidate], chosen: int) -> str:
    """Print board and candidate table side by side; returns the printed text."""
    left = board_lines(board, chosen)
    right = candidate_lines(ranked, chosen)
    height = max(len(left), len(right))
    width = max(len(strip_ansi(line)) for line in left)

    rows = []
    for i in range(height):
        l = left[i] if i < len(left) else ""
        r = right[i] if i < len(right) else ""
        rows.append(f"{pad(l, width)}   {r}")

    text = "\n".join(rows)
    print(text)
    return text
