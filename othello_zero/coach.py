# -*- coding: utf-8 -*-
"""
AlphaZero 训练教练 - 自我对弈 → 训练 → Arena 对战 → 接受/拒绝新模型
"""

import os
import copy
import time
import pickle
import logging
from collections import deque

import numpy as np
from tqdm import tqdm

from .mcts import MCTS
from .arena import compare_models

logger = logging.getLogger(__name__)


def execute_episode(game, mcts, args):
    """
    用给定的 MCTS 进行一局自我对弈

    每一步把 (规范棋盘, 策略) 的 8 种对称形式都加入样本，
    对局结束后按照样本记录的行动方回填结果。

    Returns:
        训练样本列表 [(canonical_board, pi, v), ...]
    """
    train_examples = []
    board = game.get_init_board()
    cur_player = 1
    episode_step = 0

    while True:
        episode_step += 1
        canonical_board = game.get_canonical_form(board, cur_player)
        temp = int(episode_step < args['temp_threshold'])

        pi = mcts.get_action_prob(canonical_board, temp=temp)
        for b, p in game.get_symmetries(canonical_board, pi):
            train_examples.append([b, cur_player, p, None])

        # 按概率采样（temp=0 时 pi 为 one-hot）
        p = np.asarray(pi, dtype=np.float64)
        action = np.random.choice(len(p), p=p / np.sum(p))
        board, cur_player = game.get_next_state(board, cur_player, action)

        r = game.get_game_ended(board, cur_player)
        if r != 0:
            if abs(r) != 1:
                # 平局
                return [(x[0], x[2], 0) for x in train_examples]
            return [(x[0], x[2], r * ((-1) ** (x[1] != cur_player))) for x in train_examples]


def _execute_episode_worker(task):
    """多进程自我对弈 - 每个进程独立的 MCTS 树"""
    game, nnet, args, seed = task
    np.random.seed(seed)
    mcts = MCTS(game, nnet, args)
    return execute_episode(game, mcts, args)


class Coach:
    """
    AlphaZero 训练流程:
    1. 自我对弈收集数据（每局新建 MCTS）
    2. 训练神经网络得到新模型
    3. Arena 对战: 新模型 vs 训练前的模型
    4. 新模型胜率 >= update_threshold 才接受，否则恢复训练前的参数
    """

    def __init__(self, game, nnet, args):
        self.game = game
        self.nnet = nnet
        self.pnet = copy.deepcopy(nnet)  # 训练前的模型，Arena 对手
        self.args = args
        self.mcts = None  # 每局自我对弈时新建
        self.train_examples_history = []
        self.skip_first_self_play = False

        self.writer = None
        if args.get('tensorboard', False):
            from torch.utils.tensorboard import SummaryWriter
            log_dir = args.get('log_dir', 'results/logs')
            self.writer = SummaryWriter(log_dir=log_dir)
            logger.info(f"TensorBoard 日志目录: {log_dir}")

    def execute_episode(self):
        """
        新建 MCTS 并执行一局自我对弈

        Returns:
            训练样本列表 [(canonical_board, pi, v), ...]
        """
        self.mcts = MCTS(self.game, self.nnet, self.args)
        return execute_episode(self.game, self.mcts, self.args)

    def collect_self_play_data(self):
        """
        收集一次迭代的自我对弈数据

        num_workers > 1 时多进程并行，结果按任务顺序合并

        Returns:
            deque: 最多 max_queue_length 个样本
        """
        iteration_train_examples = deque([], maxlen=self.args['max_queue_length'])
        num_episodes = self.args['num_episodes']
        num_workers = self.args.get('num_workers', 1)

        if num_workers > 1:
            import multiprocessing as mp

            mp_context = mp.get_context('spawn')
            tasks = [
                (self.game, self.nnet, self.args, np.random.randint(0, 2 ** 31 - 1))
                for _ in range(num_episodes)
            ]
            desc = f'{f"Self Play({num_workers}进程)":<30}'
            with mp_context.Pool(num_workers) as pool:
                for examples in tqdm(pool.imap(_execute_episode_worker, tasks),
                                     total=num_episodes, desc=desc):
                    iteration_train_examples += examples
        else:
            for _ in tqdm(range(num_episodes), desc=f'{"Self Play":<30}'):
                iteration_train_examples += self.execute_episode()

        return iteration_train_examples

    def learn(self):
        """
        主训练循环，共 num_iterations 次迭代

        加载了历史样本时跳过第一次自我对弈
        """
        for i in range(1, self.args['num_iterations'] + 1):
            print(f'\n{"=" * 70}')
            print(f'📍 迭代 {i}/{self.args["num_iterations"]}')
            print(f'{"=" * 70}')
            start_time = time.time()

            # ========== 1. 自我对弈 ==========
            if not self.skip_first_self_play or i > 1:
                iteration_train_examples = self.collect_self_play_data()
                self.train_examples_history.append(iteration_train_examples)

                if self.writer is not None:
                    self.writer.add_scalar('Data/IterationSamples', len(iteration_train_examples), i)

            if len(self.train_examples_history) > self.args['num_iters_for_train_examples_history']:
                logger.warning(f"移除最早的一批训练样本, "
                               f"len(train_examples_history) = {len(self.train_examples_history)}")
                self.train_examples_history.pop(0)

            # 这些样本是上一次迭代的模型产生的，所以编号为 i - 1
            self.save_train_examples(i - 1)

            train_examples = []
            for e in self.train_examples_history:
                train_examples.extend(e)
            np.random.shuffle(train_examples)

            print(f"✓ 训练集: {len(train_examples):,} 样本 (保留 {len(self.train_examples_history)} 次迭代)")
            if self.writer is not None:
                self.writer.add_scalar('Data/TotalSamples', len(train_examples), i)

            # ========== 2. 训练神经网络（保留训练前的副本）==========
            checkpoint = self.args['checkpoint']
            self.nnet.save_checkpoint(folder=checkpoint, filename='temp.pth')
            self.pnet.load_checkpoint(folder=checkpoint, filename='temp.pth')

            self.nnet.train(train_examples)

            # ========== 3. Arena 对战 ==========
            print('🥊 Arena: 新模型 vs 训练前的模型')
            new_wins, old_wins, draws, should_accept = compare_models(
                self.game, self.nnet, self.pnet, self.args
            )

            if self.writer is not None:
                decisive = new_wins + old_wins
                self.writer.add_scalar('Arena/WinRate', new_wins / decisive if decisive else 0.0, i)
                self.writer.add_scalar('Arena/Draws', draws, i)
                self.writer.add_scalar('Arena/Accepted', 1 if should_accept else 0, i)

            # ========== 4. 接受 / 拒绝 ==========
            if should_accept:
                print('✅ 接受新模型')
                self.nnet.save_checkpoint(folder=checkpoint, filename=self.get_checkpoint_file(i))
                self.nnet.save_checkpoint(folder=checkpoint, filename='best.pth')
            else:
                print('❌ 拒绝新模型，恢复训练前的参数')
                self.nnet.load_checkpoint(folder=checkpoint, filename='temp.pth')

            print(f'⏱  本次迭代耗时 {time.time() - start_time:.1f}s')

        if self.writer is not None:
            self.writer.close()

    def get_checkpoint_file(self, iteration):
        return f'checkpoint_{iteration}.pth'

    def get_examples_file(self, iteration):
        return f'checkpoint_{iteration}.examples'

    def save_train_examples(self, iteration):
        """把训练样本历史序列化到 checkpoint 目录"""
        folder = self.args['checkpoint']
        os.makedirs(folder, exist_ok=True)
        filepath = os.path.join(folder, self.get_examples_file(iteration))
        with open(filepath, 'wb') as f:
            pickle.dump(self.train_examples_history, f)

    def load_train_examples(self):
        """
        从 load_folder/load_examples_file 加载训练样本历史

        文件不存在时直接抛出异常，加载成功后跳过第一次自我对弈
        """
        filepath = os.path.join(self.args['load_folder'], self.args['load_examples_file'])
        if not os.path.isfile(filepath):
            raise FileNotFoundError(f"训练样本文件不存在: {filepath}")

        with open(filepath, 'rb') as f:
            self.train_examples_history = pickle.load(f)
        logger.info(f"已加载训练样本: {filepath} ({len(self.train_examples_history)} 次迭代)")

        self.skip_first_self_play = True
