# -*- coding: utf-8 -*-
"""
蒙特卡洛树搜索 (MCTS) - AlphaZero 核心组件
所有统计量都属于 MCTS 实例本身，每局自我对弈新建一个实例
"""

import math
import logging

import numpy as np

logger = logging.getLogger(__name__)

EPS = 1e-8


class MCTS:
    """
    神经网络引导的 MCTS（PUCT 选择）

    统计量以 string_representation(棋盘) 为键：
        Qsa: Q(s,a) 平均回传价值
        Nsa: N(s,a) 状态-动作访问次数
        Ns:  N(s) 状态访问次数
        Ps:  P(s) 网络给出的先验策略
        Es:  游戏结束值（0 = 未结束）
        Vs:  合法动作掩码
    """

    def __init__(self, game, nnet, args):
        """
        Args:
            game: 游戏环境实例
            nnet: 估值器（predict 接口）
            args: 配置参数（num_simulations, cpuct）
        """
        self.game = game
        self.nnet = nnet
        self.args = args

        self.Qsa = {}
        self.Nsa = {}
        self.Ns = {}
        self.Ps = {}

        self.Es = {}
        self.Vs = {}

    def get_action_prob(self, canonical_board, temp=1):
        """
        从 canonical_board 执行 num_simulations 次模拟，返回动作概率

        Args:
            canonical_board: 规范形式的棋盘
            temp: 温度
                  - temp = 0: 访问次数最多的动作（并列时随机选一个）
                  - temp > 0: 概率 ∝ N(s,a)^(1/temp)

        Returns:
            np.array: 动作概率分布
        """
        for _ in range(self.args['num_simulations']):
            self.search(canonical_board)

        s = self.game.string_representation(canonical_board)
        counts = np.array(
            [self.Nsa.get((s, a), 0) for a in range(self.game.get_action_size())],
            dtype=np.float64
        )

        if np.sum(counts) == 0:
            # 模拟次数不足以展开根节点的任何子节点
            logger.warning(f"状态 {s[:50]} 没有访问记录，使用合法动作上的均匀分布")
            counts = self.game.get_valid_moves(canonical_board, 1).astype(np.float64)

        if temp == 0:
            best_actions = np.flatnonzero(counts == np.max(counts))
            best_action = np.random.choice(best_actions)
            probs = np.zeros(len(counts), dtype=np.float32)
            probs[best_action] = 1.0
            return probs

        counts = counts ** (1.0 / temp)
        probs = counts / np.sum(counts)
        return probs.astype(np.float32)

    def search(self, canonical_board):
        """
        执行一次模拟：沿 PUCT 最大的动作向下直到叶子节点，再回溯更新

        叶子节点由神经网络给出先验策略和价值；终局节点直接返回结果。

        注意：返回值是当前局面价值的相反数。v 是当前玩家视角的价值，
        对上一层（对手）来说就是 -v。

        Returns:
            float: 当前 canonical_board 价值的相反数
        """
        s = self.game.string_representation(canonical_board)

        # === 1. 终局检查 ===
        if s not in self.Es:
            self.Es[s] = self.game.get_game_ended(canonical_board, 1)
        if self.Es[s] != 0:
            return -self.Es[s]

        # === 2. 叶子节点扩展 ===
        if s not in self.Ps:
            pi, v = self.nnet.predict(canonical_board)
            valids = self.game.get_valid_moves(canonical_board, 1)
            pi = np.asarray(pi, dtype=np.float64) * valids

            sum_ps_s = np.sum(pi)
            if sum_ps_s > 0:
                pi /= sum_ps_s
            else:
                # 网络给所有合法动作的概率都是 0：网络欠训练或过拟合，
                # 这条警告大量出现时需要检查网络和训练过程
                logger.warning("所有合法动作都被屏蔽，改为在合法动作上重新归一化")
                pi = pi + valids
                pi /= np.sum(pi)

            self.Ps[s] = pi
            self.Vs[s] = valids
            self.Ns[s] = 0
            return -v

        # === 3. 选择动作（PUCT）===
        valids = self.Vs[s]
        cpuct = self.args['cpuct']
        cur_best = -float('inf')
        best_act = -1

        for a in range(self.game.get_action_size()):
            if valids[a]:
                if (s, a) in self.Qsa:
                    u = self.Qsa[(s, a)] + cpuct * self.Ps[s][a] * math.sqrt(self.Ns[s]) / (
                        1 + self.Nsa[(s, a)])
                else:
                    u = cpuct * self.Ps[s][a] * math.sqrt(self.Ns[s] + EPS)

                # 严格大于：并列时保留先遇到的动作
                if u > cur_best:
                    cur_best = u
                    best_act = a

        a = best_act

        # === 4. 递归搜索 ===
        next_board, next_player = self.game.get_next_state(canonical_board, 1, a)
        next_board = self.game.get_canonical_form(next_board, next_player)

        v = self.search(next_board)

        # === 5. 回溯更新 ===
        if (s, a) in self.Qsa:
            self.Qsa[(s, a)] = (self.Nsa[(s, a)] * self.Qsa[(s, a)] + v) / (self.Nsa[(s, a)] + 1)
            self.Nsa[(s, a)] += 1
        else:
            self.Qsa[(s, a)] = v
            self.Nsa[(s, a)] = 1

        self.Ns[s] += 1
        return -v

    def reset(self):
        """重置 MCTS 树（清空所有统计量）"""
        self.Qsa.clear()
        self.Nsa.clear()
        self.Ns.clear()
        self.Ps.clear()
        self.Es.clear()
        self.Vs.clear()
        logger.debug("MCTS 树已重置")

    def get_search_statistics(self, canonical_board):
        """
        获取搜索统计信息（用于调试和分析）

        Returns:
            dict: 总访问次数以及每个已探索动作的访问次数、Q 值和先验
        """
        s = self.game.string_representation(canonical_board)
        stats = {
            'total_visits': self.Ns.get(s, 0),
            'actions': []
        }

        for a in range(self.game.get_action_size()):
            if (s, a) in self.Nsa:
                stats['actions'].append({
                    'action': a,
                    'visits': self.Nsa[(s, a)],
                    'q_value': self.Qsa[(s, a)],
                    'prior': float(self.Ps[s][a]),
                })

        stats['actions'].sort(key=lambda x: x['visits'], reverse=True)
        return stats
