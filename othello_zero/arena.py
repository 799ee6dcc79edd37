# -*- coding: utf-8 -*-
"""
Arena - 两个玩家对战多局，统计胜负
新模型 vs 旧模型，只有胜率 >= 阈值才接受新模型
"""

import logging

import numpy as np
from tqdm import tqdm

from .board import Board
from .mcts import MCTS

logger = logging.getLogger(__name__)


class Arena:
    """
    Arena 对战系统

    玩家是可调用对象：player(canonical_board) -> action
    可以是 MCTS+神经网络、随机、贪心或人类玩家
    """

    def __init__(self, player1, player2, game, display=None):
        """
        Args:
            player1: 先手编号为 1 的玩家
            player2: 编号为 -1 的玩家
            game: 游戏环境
            display: 打印棋盘的函数，verbose 模式需要
        """
        self.player1 = player1
        self.player2 = player2
        self.game = game
        self.display = display

    def play_game(self, start_player=1, verbose=False):
        """
        进行一局游戏

        Args:
            start_player: 先手方（1 = player1，-1 = player2）
            verbose: 是否逐步打印棋盘

        Returns:
            1: player1 赢
            -1: player2 赢
            其他非零值: 平局
        """
        players = {1: self.player1, -1: self.player2}
        cur_player = start_player
        board = self.game.get_init_board()
        it = 0

        while self.game.get_game_ended(board, cur_player) == 0:
            it += 1
            if verbose:
                assert self.display is not None, "verbose 模式需要 display 函数"
                print(f"Turn {it} Player {cur_player}")
                self.display(board)

            canonical_board = self.game.get_canonical_form(board, cur_player)
            action = players[cur_player](canonical_board)

            valids = self.game.get_valid_moves(canonical_board, 1)
            if valids[action] == 0:
                logger.error(f"动作 {action} 不合法, valids = {valids}")
                assert valids[action] > 0, f"玩家 {cur_player} 选择了非法动作 {action}"

            board, cur_player = self.game.get_next_state(board, cur_player, action)

        if verbose:
            print(f"Game over: Turn {it} Result {self.game.get_game_ended(board, 1)}")
            self.display(board)

        return cur_player * self.game.get_game_ended(board, cur_player)

    def play_games(self, num, verbose=False):
        """
        进行 num 局对战：player1 先手 num/2 局，player2 先手 num/2 局

        Returns:
            (one_won, two_won, draws)
        """
        num = num // 2
        one_won = 0
        two_won = 0
        draws = 0

        for _ in tqdm(range(num), desc=f'{"Arena (1)":<30}'):
            result = self.play_game(start_player=1, verbose=verbose)
            if result == 1:
                one_won += 1
            elif result == -1:
                two_won += 1
            else:
                draws += 1

        for _ in tqdm(range(num), desc=f'{"Arena (2)":<30}'):
            result = self.play_game(start_player=-1, verbose=verbose)
            if result == 1:
                one_won += 1
            elif result == -1:
                two_won += 1
            else:
                draws += 1

        return one_won, two_won, draws


class MCTSPlayer:
    """神经网络玩家 (使用MCTS，贪心选择)"""

    def __init__(self, game, nnet, args):
        self.game = game
        self.mcts = MCTS(game, nnet, args)

    def __call__(self, canonical_board):
        # temp=0 得到 one-hot，argmax 即为访问次数最多的动作
        probs = self.mcts.get_action_prob(canonical_board, temp=0)
        return int(np.argmax(probs))


class RandomPlayer:
    """随机玩家 (baseline)"""

    def __init__(self, game):
        self.game = game

    def __call__(self, canonical_board):
        valid_moves = self.game.get_valid_moves(canonical_board, 1)
        return int(np.random.choice(np.flatnonzero(valid_moves)))


class GreedyOthelloPlayer:
    """贪心玩家 - 选择落子后棋子差最大的动作"""

    def __init__(self, game):
        self.game = game

    def __call__(self, canonical_board):
        n = self.game.n
        valid_moves = self.game.get_valid_moves(canonical_board, 1)
        candidates = []
        for a in np.flatnonzero(valid_moves):
            next_board, _ = self.game.get_next_state(canonical_board, 1, int(a))
            score = Board(n, next_board).count_diff(1)
            candidates.append((-score, int(a)))
        candidates.sort()
        return candidates[0][1]


def compare_models(game, new_nnet, old_nnet, args):
    """
    新旧模型对战：player1 = 旧模型，player2 = 新模型

    Args:
        game: 游戏环境
        new_nnet: 新训练的模型
        old_nnet: 训练前的模型
        args: 配置参数（arena_compare, update_threshold, verbose ...）

    Returns:
        (new_wins, old_wins, draws, should_accept)
    """
    old_player = MCTSPlayer(game, old_nnet, args)
    new_player = MCTSPlayer(game, new_nnet, args)

    arena = Arena(old_player, new_player, game, display=game.display)
    old_wins, new_wins, draws = arena.play_games(args['arena_compare'], verbose=args['verbose'])

    should_accept = accept_new_model(new_wins, old_wins, args['update_threshold'])

    decision = '✅ 接受' if should_accept else '❌ 拒绝'
    print(f"Arena: 新模型 {new_wins}胜 vs 旧模型 {old_wins}胜 (平{draws}局) | {decision}")

    return new_wins, old_wins, draws, should_accept


def accept_new_model(new_wins, old_wins, threshold):
    """分出胜负的对局中新模型胜率 >= threshold 才接受；全部平局视为拒绝"""
    total_decisive = new_wins + old_wins
    if total_decisive == 0:
        return False
    return new_wins / total_decisive >= threshold
