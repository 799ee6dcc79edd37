# -*- coding: utf-8 -*-
"""
棋盘规则测试 - 开局布局、合法落子、翻转、棋子差
"""

import sys
from pathlib import Path

import numpy as np
import pytest

# 添加项目根目录到路径
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from othello_zero.board import Board


def test_initial_board_4():
    board = Board(4)
    expected = [0, 0, 0, 0, 0, -1, 1, 0, 0, 1, -1, 0, 0, 0, 0, 0]
    assert board.pieces.tolist() == expected


def test_initial_board_6():
    board = Board(6)
    expected = [0] * 36
    expected[14], expected[15], expected[20], expected[21] = -1, 1, 1, -1
    assert board.pieces.tolist() == expected


@pytest.mark.parametrize("n", [4, 6, 8, 10])
def test_initial_board_has_four_pieces(n):
    board = Board(n)
    assert np.count_nonzero(board.pieces) == 4
    assert board.count_diff(1) == 0
    half = n // 2
    assert board[(half - 1, half)] == 1
    assert board[(half, half - 1)] == 1
    assert board[(half - 1, half - 1)] == -1
    assert board[(half, half)] == -1


def test_pieces_are_copied():
    pieces = Board(4).pieces
    board = Board(4, pieces)
    board[(0, 0)] = 1
    assert pieces[0] == 0


def test_legal_moves_initial():
    board = Board(4)
    assert board.get_legal_moves(1) == {(0, 1), (1, 0), (2, 3), (3, 2)}
    assert board.get_legal_moves(-1) == {(0, 2), (1, 3), (2, 0), (3, 1)}
    assert board.has_legal_moves(1)
    assert board.has_legal_moves(-1)


def test_legal_moves_deduplicated():
    # (2,2) 可以由 (2,0) 和 (0,2) 两条射线得到
    board = Board(4, np.zeros(16))
    board[(2, 0)] = 1
    board[(2, 1)] = -1
    board[(0, 2)] = 1
    board[(1, 2)] = -1

    moves = board.get_legal_moves(1)
    assert moves == {(2, 2)}

    board.execute_move((2, 2), 1)
    assert board[(2, 1)] == 1
    assert board[(1, 2)] == 1
    assert board[(2, 2)] == 1
    assert board.count_diff(1) == 5


def test_ray_needs_opponent_piece():
    # 紧邻空格或己方棋子的射线不产生落子点
    board = Board(4, np.zeros(16))
    board[(0, 0)] = 1
    board[(0, 1)] = 1
    assert board.get_legal_moves(1) == set()
    assert not board.has_legal_moves(1)


def test_ray_running_off_board():
    board = Board(4, np.zeros(16))
    board[(0, 1)] = 1
    board[(0, 0)] = -1
    assert not board.has_legal_moves(1)
    assert board.get_legal_moves(-1) == {(0, 2)}


def test_unclosed_run_is_not_flipped():
    board = Board(4, np.zeros(16))
    board[(0, 0)] = 1
    board[(0, 1)] = -1
    board[(1, 0)] = -1
    board[(2, 0)] = 1
    # (0,2) 只夹住 (0,1)；(0,0)->(1,0)->(2,0) 这一列不受影响
    board.execute_move((0, 2), 1)
    assert board[(0, 1)] == 1
    assert board[(1, 0)] == -1
    assert board.get_flips((0, 3), (0, -1), -1) == []


def test_execute_move_on_occupied_square_fails():
    board = Board(4)
    with pytest.raises(AssertionError):
        board.execute_move((1, 1), 1)


def test_execute_move_without_flips_fails():
    board = Board(4)
    with pytest.raises(AssertionError):
        board.execute_move((0, 0), 1)


def test_no_double_flip_during_random_games():
    rng = np.random.RandomState(0)

    for _ in range(5):
        board = Board(6)
        color = 1
        while board.has_legal_moves(1) or board.has_legal_moves(-1):
            moves = sorted(board.get_legal_moves(color))
            if not moves:
                color = -color
                continue

            move = moves[rng.randint(len(moves))]
            before = board.pieces.copy()
            diff_before = board.count_diff(color)
            board.execute_move(move, color)

            changed = np.flatnonzero(before != board.pieces)
            flipped = [i for i in changed if i != move[0] * 6 + move[1]]
            # 只有对方棋子会被翻转，己方棋子和其他空格不变
            assert all(before[i] == -color and board.pieces[i] == color for i in flipped)
            assert len(flipped) > 0
            assert board.count_diff(color) == diff_before + 2 * len(flipped) + 1
            assert move not in board.get_legal_moves(color)

            color = -color

        assert not board.has_legal_moves(1)
        assert not board.has_legal_moves(-1)


def test_count_diff():
    board = Board(4, [1, 1, 1, -1, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, -1])
    assert board.count_diff(1) == 1
    assert board.count_diff(-1) == -1
