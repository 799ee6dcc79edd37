# -*- coding: utf-8 -*-
"""
黑白棋棋盘规则引擎
扁平数组表示：index = row * n + col，1=己方，-1=对方，0=空
"""

import numpy as np


class Board:
    """
    n×n 黑白棋棋盘

    坐标使用 (row, col) 元组，内部存储为长度 n² 的一维数组
    """

    # 8 个方向
    DIRECTIONS = [(1, 1), (1, 0), (1, -1), (0, -1), (-1, -1), (-1, 0), (-1, 1), (0, 1)]

    def __init__(self, n, pieces=None):
        """
        初始化棋盘

        Args:
            n: 棋盘边长（偶数）
            pieces: 已有的一维棋盘数组（会被复制），为 None 时使用开局布局
        """
        self.n = n
        if pieces is None:
            self.pieces = np.zeros(n * n, dtype=np.int8)
            half = n // 2
            self[(half - 1, half)] = 1
            self[(half, half - 1)] = 1
            self[(half - 1, half - 1)] = -1
            self[(half, half)] = -1
        else:
            self.pieces = np.array(pieces, dtype=np.int8).reshape(n * n)

    def __getitem__(self, square):
        x, y = square
        return self.pieces[x * self.n + y]

    def __setitem__(self, square, color):
        x, y = square
        self.pieces[x * self.n + y] = color

    def count_diff(self, color):
        """己方棋子数 - 对方棋子数"""
        return int(np.sum(self.pieces == color)) - int(np.sum(self.pieces == -color))

    def get_legal_moves(self, color):
        """
        返回 color 的所有合法落子点

        Returns:
            set: {(row, col), ...}，同一落点可能由多条射线得到，这里去重
        """
        moves = set()
        for x in range(self.n):
            for y in range(self.n):
                if self[(x, y)] == color:
                    moves.update(self.get_moves_for_square((x, y)))
        return moves

    def has_legal_moves(self, color):
        """找到第一条可吃子的射线就返回 True"""
        for x in range(self.n):
            for y in range(self.n):
                if self[(x, y)] == color:
                    for direction in self.DIRECTIONS:
                        if self.discover_move((x, y), direction) is not None:
                            return True
        return False

    def get_moves_for_square(self, square):
        """以 square 上的棋子为起点，沿 8 个方向寻找落子点"""
        color = self[square]
        if color == 0:
            return []

        moves = []
        for direction in self.DIRECTIONS:
            move = self.discover_move(square, direction)
            if move is not None:
                moves.append(move)
        return moves

    def execute_move(self, move, color):
        """
        在 move 处落子并翻转所有被夹住的对方棋子

        非法落子（非空格或不吃子）属于调用方错误，直接断言失败
        """
        assert self[move] == 0, f"落子点 {move} 不是空格"

        flips = []
        for direction in self.DIRECTIONS:
            flips.extend(self.get_flips(move, direction, color))
        assert len(flips) > 0, f"落子 {move} 没有翻转任何棋子"

        for square in flips:
            self[square] = color
        self[move] = color

    def discover_move(self, origin, direction):
        """
        从 origin 沿 direction 前进：越过至少一个对方棋子后遇到空格，即为落子点
        """
        color = self[origin]
        flips = []

        for square in self._increment_move(origin, direction):
            value = self[square]
            if value == 0:
                if flips:
                    return square
                return None
            if value == color:
                return None
            flips.append(square)

        return None

    def get_flips(self, origin, direction, color):
        """
        单个方向上会被翻转的棋子

        Returns:
            list: 被己方棋子封口的连续对方棋子；未封口时为空
        """
        flips = []
        for square in self._increment_move(origin, direction):
            value = self[square]
            if value == 0:
                return []
            if value == -color:
                flips.append(square)
            else:
                return flips
        return []

    def _increment_move(self, move, direction):
        """沿 direction 生成棋盘内的坐标，直到出界"""
        x, y = move[0] + direction[0], move[1] + direction[1]
        while 0 <= x < self.n and 0 <= y < self.n:
            yield x, y
            x += direction[0]
            y += direction[1]
