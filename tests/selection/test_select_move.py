"""
Tests for tictactoe_ai.selection

Tests the full move decision: win, block, search ranking and bans.
"""

import numpy as np
import pytest

from tictactoe_ai.core.errors import InvalidBoardError, NoLegalMoveError
from tictactoe_ai.core.hashing import state_key
from tictactoe_ai.core.types import O, X
from tictactoe_ai.games.game_rules import WIN_TRIPLES
from tictactoe_ai.selection import allowed_moves, score_candidates, select_move


def two_of_line(line, player, other, others=2):
    """Board where player holds the first two cells of line and other holds cells off it."""
    board = np.zeros(9, dtype=np.int8)
    board[line[0]] = player
    board[line[1]] = player
    off = [c for c in range(9) if c not in line][:others]
    board[off] = other
    return board


class TestFastPaths:
    """Immediate win and block."""

    @pytest.mark.parametrize("line", WIN_TRIPLES)
    def test_completes_every_line(self, memory, line):
        board = two_of_line(line, O, X)
        assert select_move(board, memory, computer=O) == line[2]

    @pytest.mark.parametrize("line", WIN_TRIPLES)
    def test_blocks_every_line(self, memory, line):
        board = two_of_line(line, X, O, others=1)
        assert select_move(board, memory, computer=O) == line[2]

    def test_win_beats_block(self, memory, parse_board):
        board = parse_board("OO- XX- --X")
        assert select_move(board, memory, computer=O) == 2

    def test_block(self, memory, parse_board):
        assert select_move(parse_board("XX- -O- ---"), memory, computer=O) == 2

    def test_block_as_x(self, memory, parse_board):
        assert select_move(parse_board("OO- -X- --X"), memory, computer=X) == 2


class TestSearchRanking:
    """Moves chosen by search score, bias and cell preference."""

    def test_center_on_empty_board(self, memory, empty_board):
        assert select_move(empty_board, memory, computer=O) == 4
        assert select_move(empty_board, memory, computer=X) == 4

    def test_corner_against_center(self, memory, parse_board):
        """Edges lose against a center opening, corners draw."""
        board = parse_board("--- -X- ---")
        assert select_move(board, memory, computer=O) == 0

        scores = {c.move: c.score for c in score_candidates(board, memory, [0, 1, 2, 3], O)}
        assert scores[0] == scores[2] == 0
        assert scores[1] < 0
        assert scores[3] < 0

    def test_bias_breaks_ties(self, memory, parse_board):
        board = parse_board("--- -X- ---")
        memory.apply_reward(state_key(board), 8, 1.0)
        assert select_move(board, memory, computer=O) == 8

    def test_negative_bias_gives_way(self, memory, parse_board):
        board = parse_board("--- -X- ---")
        memory.apply_reward(state_key(board), 0, -0.1)
        assert select_move(board, memory, computer=O) == 2

    def test_bias_never_beats_score(self, memory, parse_board):
        """A rewarded losing move still ranks below a drawing one."""
        board = parse_board("--- -X- ---")
        memory.apply_reward(state_key(board), 1, 100.0)
        assert select_move(board, memory, computer=O) == 0

    def test_forced_loss_still_moves(self, memory, parse_board):
        """With every move losing, the best-ranked one is still played."""
        board = parse_board("XX- XO- --O")
        key = state_key(board)
        assert select_move(board, memory, computer=O) == 2
        memory.ban(key, 2)
        assert select_move(board, memory, computer=O) == 6
        memory.ban(key, 6)
        assert select_move(board, memory, computer=O) == 5


class TestBans:
    """Banned moves are never chosen while another cell is free."""

    def test_banned_cell_skipped(self, memory, parse_board):
        board = parse_board("--- -X- ---")
        memory.ban(state_key(board), 0)
        assert select_move(board, memory, computer=O) == 2

    def test_banned_win_skipped(self, memory, parse_board):
        """A banned winning cell is not taken; the block is played instead."""
        board = parse_board("OO- XX- X--")
        memory.ban(state_key(board), 2)
        assert select_move(board, memory, computer=O) == 5

    def test_banned_block_skipped(self, memory, parse_board):
        board = parse_board("XX- -O- ---")
        memory.ban(state_key(board), 2)
        assert select_move(board, memory, computer=O) == 6

    def test_all_banned_falls_back(self, memory, parse_board):
        """If every empty cell is banned, bans are ignored."""
        board = parse_board("XOX XOO OX-")
        memory.ban(state_key(board), 8)
        assert select_move(board, memory, computer=O) == 8

    def test_allowed_moves(self, memory, parse_board):
        board = parse_board("X-- -O- ---")
        memory.ban(state_key(board), 1)
        memory.ban(state_key(board), 8)
        assert allowed_moves(board, memory) == [2, 3, 5, 6, 7]

    def test_bans_are_per_state(self, memory, parse_board):
        memory.ban(state_key(parse_board("--- X-- ---")), 0)
        assert select_move(parse_board("--- -X- ---"), memory, computer=O) == 0


class TestErrorsAndSideEffects:
    """Bad input and board integrity."""

    def test_full_board(self, memory, parse_board):
        with pytest.raises(NoLegalMoveError):
            select_move(parse_board("XOX XOO OXX"), memory)

    def test_invalid_board(self, memory):
        with pytest.raises(InvalidBoardError):
            select_move([0] * 7, memory)

    @pytest.mark.parametrize("picture", ["--- --- ---", "--- -X- ---", "XX- XO- --O", "OO- XX- X--"])
    def test_board_unchanged(self, memory, parse_board, picture):
        board = parse_board(picture)
        before = board.copy()
        select_move(board, memory, computer=O)
        np.testing.assert_array_equal(board, before)

    def test_store_unchanged(self, memory, empty_board):
        """Choosing a move does not write to the store."""
        select_move(empty_board, memory)
        assert len(memory) == 0

    def test_debug_prints_table(self, memory, parse_board, capsys):
        select_move(parse_board("--- -X- ---"), memory, computer=O, debug=True)
        out = capsys.readouterr().out
        assert "score" in out
        assert "▶" in out
