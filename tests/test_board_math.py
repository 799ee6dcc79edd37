# -*- coding: utf-8 -*-
"""对称变换表测试"""

import sys
from pathlib import Path

import numpy as np
import pytest

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from othello_zero.board_math import BoardMath


@pytest.mark.parametrize("n", [4, 6, 8])
def test_tables_are_permutations(n):
    bm = BoardMath(n)
    tables = bm.transforms()
    assert len(tables) == 7
    for table in tables:
        assert sorted(table.tolist()) == list(range(n * n))

    # 7 个变换互不相同，且都不是恒等变换
    identity = tuple(range(n * n))
    distinct = {tuple(t.tolist()) for t in tables}
    assert len(distinct) == 7
    assert identity not in distinct


def test_known_tables_4():
    bm = BoardMath(4)
    coords = np.arange(16).reshape(4, 4)
    assert bm.mirror.tolist() == np.fliplr(coords).flatten().tolist()
    assert bm.l180.tolist() == list(range(15, -1, -1))
    assert bm.l90_mirror.tolist() == coords.T.flatten().tolist()
    # 左旋 90° 与右旋 90° 互逆
    assert BoardMath.inverse(bm.l90).tolist() == bm.r90.tolist()


@pytest.mark.parametrize("n", [4, 6])
def test_round_trip_restores_board(n):
    bm = BoardMath(n)
    rng = np.random.RandomState(1)
    board = rng.randint(-1, 2, size=n * n).astype(np.int8)

    for table in bm.transforms():
        transformed = BoardMath.apply(board, table)
        restored = BoardMath.apply(transformed, BoardMath.inverse(table))
        assert np.array_equal(restored, board)


def test_apply_keeps_pass_entry():
    bm = BoardMath(4)
    pi = np.arange(17, dtype=np.float32) / 136.0
    for table in bm.transforms():
        result = BoardMath.apply(pi, table)
        assert result[-1] == pi[-1]
        assert np.isclose(result.sum(), pi.sum())


def test_apply_does_not_modify_input():
    bm = BoardMath(4)
    board = np.arange(16)
    BoardMath.apply(board, bm.mirror)
    assert board.tolist() == list(range(16))
