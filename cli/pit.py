#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Arena 对战工具 - 任意两个玩家对战

玩家类型: mcts（需要 --checkpoint）、random、greedy、human
"""

import os
import sys
import logging
import argparse

project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

import numpy as np

from othello_zero.game import OthelloGame
from othello_zero.model import NNetWrapper
from othello_zero.arena import Arena, MCTSPlayer, RandomPlayer, GreedyOthelloPlayer
from othello_zero.config import load_config_from_yaml


class HumanOthelloPlayer:
    """人类玩家 - 从标准输入读取 "行 列"，无子可下时输入 pass"""

    def __init__(self, game):
        self.game = game

    def __call__(self, canonical_board):
        n = self.game.n
        valid = self.game.get_valid_moves(canonical_board, 1)
        moves = [(int(a) // n, int(a) % n) for a in np.flatnonzero(valid[:-1])]
        print(f"合法落子: {moves if moves else 'pass'}")

        while True:
            text = input("输入 '行 列' 或 pass: ").strip().lower()
            if text == 'pass':
                if valid[-1]:
                    return n * n
            else:
                try:
                    x, y = (int(part) for part in text.split())
                except ValueError:
                    print("格式错误")
                    continue
                if 0 <= x < n and 0 <= y < n and valid[n * x + y]:
                    return n * x + y
            print("非法动作，请重新输入")


def make_player(kind, game, args, checkpoint):
    if kind == 'random':
        return RandomPlayer(game)
    if kind == 'greedy':
        return GreedyOthelloPlayer(game)
    if kind == 'human':
        return HumanOthelloPlayer(game)
    if kind == 'mcts':
        if checkpoint is None:
            raise ValueError("mcts 玩家需要 --checkpoint")
        nnet = NNetWrapper(game, args)
        nnet.load_checkpoint(os.path.dirname(checkpoint) or '.', os.path.basename(checkpoint))
        return MCTSPlayer(game, nnet, args)
    raise ValueError(f"未知的玩家类型: {kind}")


def build_pit_args(config_path=None, board_size=None, simulations=None, cpuct=None):
    """
    对战参数：有配置文件时沿用其中的网络结构与 MCTS 参数，命令行给出的值优先

    Returns:
        (args, board_size)
    """
    args = load_config_from_yaml(config_path) if config_path else {}
    if board_size is None:
        board_size = args.get('board_size', 6)
    args['board_size'] = board_size
    if simulations is not None:
        args['num_simulations'] = simulations
    if cpuct is not None:
        args['cpuct'] = cpuct
    args.setdefault('num_simulations', 50)
    args.setdefault('cpuct', 1.0)
    return args, board_size


def main():
    parser = argparse.ArgumentParser(description='Othello Arena')
    parser.add_argument('--config', type=str, default=None,
                        help='训练时使用的 YAML 配置（网络结构须与检查点一致）')
    parser.add_argument('--player1', choices=['mcts', 'random', 'greedy', 'human'], default='mcts')
    parser.add_argument('--player2', choices=['mcts', 'random', 'greedy', 'human'], default='greedy')
    parser.add_argument('--checkpoint1', type=str, default=None, help='player1 的模型检查点')
    parser.add_argument('--checkpoint2', type=str, default=None, help='player2 的模型检查点')
    parser.add_argument('--board-size', type=int, default=None, help='默认取配置文件，否则为 6')
    parser.add_argument('--games', type=int, default=2, help='对战局数（偶数，双方各先手一半）')
    parser.add_argument('--simulations', type=int, default=None, help='MCTS 模拟次数（默认取配置文件，否则为 50）')
    parser.add_argument('--cpuct', type=float, default=None)
    parser.add_argument('--verbose', action='store_true', help='逐步打印棋盘')
    cli_args = parser.parse_args()

    logging.basicConfig(level=logging.WARNING)

    args, board_size = build_pit_args(cli_args.config, cli_args.board_size,
                                      cli_args.simulations, cli_args.cpuct)
    game = OthelloGame(board_size)

    player1 = make_player(cli_args.player1, game, args, cli_args.checkpoint1)
    player2 = make_player(cli_args.player2, game, args, cli_args.checkpoint2)

    verbose = cli_args.verbose or 'human' in (cli_args.player1, cli_args.player2)
    arena = Arena(player1, player2, game, display=game.display)
    one_won, two_won, draws = arena.play_games(cli_args.games, verbose=verbose)

    print(f"\n{cli_args.player1} (player1) {one_won}胜 | "
          f"{cli_args.player2} (player2) {two_won}胜 | 平局 {draws}")


if __name__ == '__main__':
    main()
