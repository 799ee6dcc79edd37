# -*- coding: utf-8 -*-
"""
游戏抽象 - MCTS / 自我对弈依赖的接口，以及黑白棋实现

约定：玩家用 1 和 -1 表示，棋盘为一维 numpy 数组
"""

from abc import ABC, abstractmethod

import numpy as np

from .board import Board
from .board_math import BoardMath


class Game(ABC):
    """
    双人、零和、轮流行动的完全信息博弈

    子类需要实现以下全部方法
    """

    @abstractmethod
    def get_init_board(self):
        """开局棋盘（即神经网络的输入形式）"""

    @abstractmethod
    def get_board_size(self):
        """棋盘尺寸 (x, y)"""

    @abstractmethod
    def get_action_size(self):
        """动作空间大小"""

    @abstractmethod
    def get_next_state(self, board, player, action):
        """
        Returns:
            (next_board, next_player)
        """

    @abstractmethod
    def get_valid_moves(self, board, player):
        """长度为 get_action_size() 的 0/1 掩码"""

    @abstractmethod
    def get_game_ended(self, board, player):
        """
        Returns:
            0 表示未结束；1 表示 player 赢，-1 表示输，平局为一个很小的非零值
        """

    @abstractmethod
    def get_canonical_form(self, board, player):
        """与玩家无关的规范形式（当前玩家视为 1）"""

    @abstractmethod
    def get_symmetries(self, board, pi):
        """
        Returns:
            [(board, pi), ...] 所有对称形式及对应的策略向量
        """

    @abstractmethod
    def string_representation(self, board):
        """MCTS 用作哈希键的字符串"""


class OthelloGame(Game):
    """n×n 黑白棋"""

    SQUARE_CONTENT = {-1: "X", 0: "-", 1: "O"}

    # 双方棋子数相同
    DRAW_VALUE = 1e-4

    def __init__(self, n=6):
        if n < 4 or n % 2 != 0:
            raise ValueError(f"棋盘边长必须是不小于 4 的偶数，实际为 {n}")
        self.n = n
        self.board_math = BoardMath(n)

    def get_init_board(self):
        return Board(self.n).pieces

    def get_board_size(self):
        return self.n, self.n

    def get_action_size(self):
        # 所有格子 + 1 个 pass
        return self.n * self.n + 1

    def get_next_state(self, board, player, action):
        assert 0 <= action < self.get_action_size(), f"动作 {action} 越界"

        if action == self.n * self.n:
            return np.array(board, copy=True), -player

        b = Board(self.n, board)
        b.execute_move((int(action) // self.n, int(action) % self.n), player)
        return b.pieces, -player

    def get_valid_moves(self, board, player):
        valids = np.zeros(self.get_action_size(), dtype=np.int8)
        b = Board(self.n, board)
        legal_moves = b.get_legal_moves(player)

        if len(legal_moves) == 0:
            valids[-1] = 1
            return valids

        for x, y in legal_moves:
            valids[self.n * x + y] = 1
        return valids

    def get_game_ended(self, board, player):
        b = Board(self.n, board)
        if b.has_legal_moves(player):
            return 0
        if b.has_legal_moves(-player):
            return 0

        diff = b.count_diff(player)
        if diff > 0:
            return 1
        if diff < 0:
            return -1
        return self.DRAW_VALUE

    def get_canonical_form(self, board, player):
        return (player * np.asarray(board)).astype(np.int8)

    def get_symmetries(self, board, pi):
        assert len(pi) == self.get_action_size()

        symmetries = [(np.array(board, copy=True), np.array(pi, copy=True))]
        for table in self.board_math.transforms():
            symmetries.append((BoardMath.apply(board, table), BoardMath.apply(pi, table)))
        return symmetries

    def string_representation(self, board):
        return "".join(self.SQUARE_CONTENT[int(square)] for square in board)

    def display(self, board):
        """打印棋盘"""
        n = self.n
        print("   " + " ".join(str(y) for y in range(n)))
        print("-" * (2 * n + 4))
        for x in range(n):
            row = " ".join(self.SQUARE_CONTENT[int(board[x * n + y])] for y in range(n))
            print(f"{x} | {row} |")
        print("-" * (2 * n + 4))
