# -*- coding: utf-8 -*-
"""估值器接口 - MCTS 和 Coach 只通过这四个方法使用神经网络"""

from abc import ABC, abstractmethod


class NeuralNet(ABC):
    """
    神经网络估值器基类

    网络不关心当前玩家，只处理规范形式的棋盘
    """

    @abstractmethod
    def train(self, examples):
        """
        用自我对弈数据训练（阻塞，原地更新参数）

        Args:
            examples: [(board, pi, v), ...]，board 为规范形式
        """

    @abstractmethod
    def predict(self, board):
        """
        Args:
            board: 规范形式的棋盘

        Returns:
            pi: 长度为 action_size 的策略向量
            v: [-1, 1] 之间的价值
        """

    @abstractmethod
    def save_checkpoint(self, folder, filename):
        """保存参数到 folder/filename"""

    @abstractmethod
    def load_checkpoint(self, folder, filename):
        """从 folder/filename 加载参数"""
