#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""Othello AlphaZero 训练 - 自我对弈 + Arena 验证"""

import os
import sys
import logging
import argparse

# 添加项目根目录到 Python 路径
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from othello_zero.game import OthelloGame
from othello_zero.model import NNetWrapper
from othello_zero.coach import Coach
from othello_zero.config import load_config_from_yaml


def main():
    parser = argparse.ArgumentParser(description='Othello AlphaZero 训练')
    parser.add_argument('--config', type=str, default='config/config.yaml',
                        help='YAML 配置文件路径')
    cli_args = parser.parse_args()

    logging.basicConfig(level=logging.INFO,
                        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    args = load_config_from_yaml(cli_args.config)

    print("=" * 80)
    print("🧠 Othello AlphaZero 训练系统")
    print("=" * 80)
    print(f"棋盘: {args['board_size']}x{args['board_size']}")
    print(f"训练迭代: {args['num_iterations']} 次")
    print(f"每次迭代: {args['num_episodes']} 局自我对弈 | MCTS={args['num_simulations']}次")
    print(f"Arena验证: {args['arena_compare']} 局 | 更新阈值: {args['update_threshold'] * 100}% 胜率")
    print(f"训练规模: Batch={args['batch_size']}, Epochs={args['epochs']}, LR={args['lr']}")
    print("=" * 80)

    game = OthelloGame(args['board_size'])
    nnet = NNetWrapper(game, args)

    if args['load_model']:
        print(f"加载检查点 {args['load_folder']}/{args['load_folder_file']} ...")
        nnet.load_checkpoint(args['load_folder'], args['load_folder_file'])
    else:
        print("⚠️  未加载检查点，使用随机初始化的模型")

    coach = Coach(game, nnet, args)

    if args['load_model']:
        print("加载训练样本 ...")
        coach.load_train_examples()

    print("\n🚀 开始训练...")
    try:
        coach.learn()
    except KeyboardInterrupt:
        print("\n⚠️  训练被用户中断")
        nnet.save_checkpoint(args['checkpoint'], 'interrupted.pth')
        print(f"✓ 模型已保存到 {args['checkpoint']}/interrupted.pth")
        return

    print("\n" + "=" * 80)
    print("🎉 训练完成!")
    print(f"最佳模型保存在: {args['checkpoint']}/best.pth")
    print("=" * 80)


if __name__ == '__main__':
    main()
