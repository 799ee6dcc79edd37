# -*- coding: utf-8 -*-
"""
棋盘对称变换表 - 用于训练数据增强

对每个棋盘尺寸预先计算 7 个非恒等的一维下标置换表
"""

import numpy as np


class BoardMath:
    """
    8 种对称（恒等、镜像、左/右旋 90°、旋转 180° 及其镜像）的置换表

    置换表 t 的含义：变换后第 i 格的值取自变换前的第 t[i] 格
    """

    def __init__(self, n):
        self.n = n
        coords = np.arange(n * n).reshape(n, n)

        # 镜像：每行反转
        self.mirror = np.fliplr(coords).flatten()

        # 左旋 90°：转置后每行反转
        self.l90 = np.fliplr(coords.T).flatten()
        self.l90_mirror = coords.T.flatten()

        # 右旋 90°：转置后行顺序反转
        self.r90 = np.flipud(coords.T).flatten()
        self.r90_mirror = np.fliplr(np.flipud(coords.T)).flatten()

        # 旋转 180°：行顺序反转且每行反转
        self.l180 = np.flipud(np.fliplr(coords)).flatten()
        self.l180_mirror = np.flipud(coords).flatten()

    def transforms(self):
        """按固定顺序返回 7 个置换表"""
        return [
            self.mirror,
            self.l90,
            self.l90_mirror,
            self.r90,
            self.r90_mirror,
            self.l180,
            self.l180_mirror,
        ]

    @staticmethod
    def apply(values, table):
        """
        按置换表重排一维数组

        values 长于置换表时（策略向量末尾的 pass 动作），多出的部分原样保留
        """
        result = np.array(values, copy=True)
        result[:len(table)] = np.asarray(values)[table]
        return result

    @staticmethod
    def inverse(table):
        """置换表的逆"""
        return np.argsort(table)
