# -*- coding: utf-8 -*-
"""
神经网络估值器 - AlphaZero 风格
残差塔 + 策略头 / 价值头，NNetWrapper 实现 NeuralNet 接口
"""

import os
import logging

import numpy as np
import torch
import torch.nn as nn
import torch.nn.functional as F
import torch.optim as optim
from tqdm import tqdm

from .neural_net import NeuralNet

logger = logging.getLogger(__name__)


class SEBlock(nn.Module):
    """Squeeze-and-Excitation Block - 通道注意力"""
    def __init__(self, channels, reduction=16):
        super(SEBlock, self).__init__()
        hidden = max(1, channels // reduction)
        self.squeeze = nn.AdaptiveAvgPool2d(1)
        self.excitation = nn.Sequential(
            nn.Linear(channels, hidden, bias=False),
            nn.ReLU(inplace=True),
            nn.Linear(hidden, channels, bias=False),
            nn.Sigmoid()
        )

    def forward(self, x):
        b, c, _, _ = x.size()
        y = self.squeeze(x).view(b, c)
        y = self.excitation(y).view(b, c, 1, 1)
        return x * y


class ResidualBlock(nn.Module):
    """
    残差块
    - GroupNorm（多进程自我对弈时比 BatchNorm 稳定）
    - Dropout 正则化
    - SE 注意力
    """
    def __init__(self, num_filters, dropout=0.3, use_se=True):
        super(ResidualBlock, self).__init__()
        groups = max(1, min(32, num_filters // 4))
        self.conv1 = nn.Conv2d(num_filters, num_filters, 3, padding=1, bias=False)
        self.gn1 = nn.GroupNorm(groups, num_filters)

        self.conv2 = nn.Conv2d(num_filters, num_filters, 3, padding=1, bias=False)
        self.gn2 = nn.GroupNorm(groups, num_filters)

        self.dropout = nn.Dropout2d(dropout) if dropout > 0 else nn.Identity()

        self.use_se = use_se
        if use_se:
            self.se = SEBlock(num_filters, reduction=16)

    def forward(self, x):
        residual = x

        out = F.relu(self.gn1(self.conv1(x)))
        out = self.dropout(out)
        out = self.gn2(self.conv2(out))

        if self.use_se:
            out = self.se(out)

        out += residual
        out = F.relu(out)
        return out


class OthelloNet(nn.Module):
    """
    黑白棋策略-价值网络

    输入为 (batch, n*n) 或 (batch, n, n) 的规范棋盘，单通道
    """
    def __init__(self, game, num_filters=64, num_res_blocks=4, dropout=0.3, use_se=True):
        super(OthelloNet, self).__init__()

        self.board_x, self.board_y = game.get_board_size()
        self.board_size = self.board_x * self.board_y
        self.action_size = game.get_action_size()

        logger.info(f"初始化 OthelloNet: "
                    f"filters={num_filters}, blocks={num_res_blocks}, "
                    f"dropout={dropout}, board={self.board_x}x{self.board_y}, "
                    f"actions={self.action_size}")

        groups = max(1, min(32, num_filters // 4))

        # === 特征提取 ===
        self.conv1 = nn.Conv2d(1, num_filters, 3, padding=1, bias=False)
        self.gn1 = nn.GroupNorm(groups, num_filters)

        # === 残差塔 ===
        self.res_blocks = nn.ModuleList([
            ResidualBlock(num_filters, dropout=dropout, use_se=use_se)
            for _ in range(num_res_blocks)
        ])

        # === 策略头 ===
        self.policy_conv = nn.Conv2d(num_filters, 32, 1, bias=False)
        self.policy_gn = nn.GroupNorm(8, 32)
        self.policy_fc = nn.Linear(32 * self.board_size, self.action_size)

        # === 价值头 ===
        self.value_conv = nn.Conv2d(num_filters, 16, 1, bias=False)
        self.value_gn = nn.GroupNorm(4, 16)
        self.value_fc1 = nn.Linear(16 * self.board_size, 128)
        self.value_fc2 = nn.Linear(128, 1)
        self.value_dropout = nn.Dropout(dropout)

    def forward(self, x):
        """
        Returns:
            policy: (batch_size, action_size) log 概率
            value: (batch_size, 1) 价值估计 [-1, 1]
        """
        x = x.view(-1, 1, self.board_x, self.board_y)
        x = F.relu(self.gn1(self.conv1(x)))

        for block in self.res_blocks:
            x = block(x)

        policy = F.relu(self.policy_gn(self.policy_conv(x)))
        policy = policy.view(policy.size(0), -1)
        policy = F.log_softmax(self.policy_fc(policy), dim=1)

        value = F.relu(self.value_gn(self.value_conv(x)))
        value = value.view(value.size(0), -1)
        value = F.relu(self.value_fc1(value))
        value = self.value_dropout(value)
        value = torch.tanh(self.value_fc2(value))

        return policy, value


class NNetWrapper(NeuralNet):
    """OthelloNet 的训练 / 推理 / 存取封装"""

    def __init__(self, game, args=None):
        self.game = game
        self.args = dict(args or {})
        self.action_size = game.get_action_size()

        use_cuda = self.args.get('cuda', False) and torch.cuda.is_available()
        self.device = torch.device('cuda' if use_cuda else 'cpu')

        self.nnet = OthelloNet(
            game,
            num_filters=self.args.get('num_filters', 64),
            num_res_blocks=self.args.get('num_res_blocks', 4),
            dropout=self.args.get('dropout', 0.3),
        ).to(self.device)

    def train(self, examples):
        """
        训练神经网络

        Args:
            examples: 训练样本列表 [(board, pi, v), ...]

        Returns:
            dict: 每个 epoch 的平均损失
        """
        pi_losses = []
        v_losses = []

        if len(examples) == 0:
            logger.warning("没有训练样本，跳过训练")
            return {'pi_losses': pi_losses, 'v_losses': v_losses}

        weight_decay = float(self.args.get('weight_decay', 1e-4))
        optimizer = optim.Adam(
            self.nnet.parameters(),
            lr=float(self.args.get('lr', 0.001)),
            weight_decay=weight_decay
        )

        batch_size = self.args.get('batch_size', 64)
        epochs = self.args.get('epochs', 10)
        num_batches = max(1, len(examples) // batch_size)

        self.nnet.train()
        epoch_iter = tqdm(range(epochs), desc=f'{"Train":<30}', unit='epoch')

        for _ in epoch_iter:
            epoch_pi_loss = 0.0
            epoch_v_loss = 0.0

            for _ in range(num_batches):
                sample_ids = np.random.randint(len(examples), size=batch_size)
                boards, pis, vs = list(zip(*[examples[i] for i in sample_ids]))

                boards = torch.FloatTensor(np.array(boards, dtype=np.float32)).to(self.device)
                target_pis = torch.FloatTensor(np.array(pis, dtype=np.float32)).to(self.device)
                target_vs = torch.FloatTensor(np.array(vs, dtype=np.float32)).to(self.device)

                out_pi, out_v = self.nnet(boards)
                l_pi = -torch.sum(target_pis * out_pi) / target_pis.size(0)
                l_v = torch.sum((target_vs - out_v.view(-1)) ** 2) / target_vs.size(0)
                total_loss = l_pi + l_v

                optimizer.zero_grad()
                total_loss.backward()
                torch.nn.utils.clip_grad_norm_(
                    self.nnet.parameters(),
                    self.args.get('grad_clip', 5.0)
                )
                optimizer.step()

                epoch_pi_loss += l_pi.item()
                epoch_v_loss += l_v.item()

            avg_pi_loss = epoch_pi_loss / num_batches
            avg_v_loss = epoch_v_loss / num_batches
            pi_losses.append(avg_pi_loss)
            v_losses.append(avg_v_loss)

            epoch_iter.set_postfix({
                'pi_loss': f'{avg_pi_loss:.3f}',
                'v_loss': f'{avg_v_loss:.3f}',
            })

        self.nnet.eval()
        return {'pi_losses': pi_losses, 'v_losses': v_losses}

    def predict(self, board):
        """
        单个棋盘的预测（用于 MCTS）

        Returns:
            pi: (action_size,) 策略概率
            v: float 价值估计
        """
        board = torch.FloatTensor(np.asarray(board, dtype=np.float32)).unsqueeze(0).to(self.device)

        self.nnet.eval()
        with torch.no_grad():
            log_pi, v = self.nnet(board)

        pi = torch.exp(log_pi).cpu().numpy()[0]
        return pi, v.item()

    def save_checkpoint(self, folder='checkpoint', filename='checkpoint.pth'):
        os.makedirs(folder, exist_ok=True)
        filepath = os.path.join(folder, filename)
        torch.save({'state_dict': self.nnet.state_dict()}, filepath)
        logger.debug(f"模型已保存到: {filepath}")

    def load_checkpoint(self, folder='checkpoint', filename='checkpoint.pth'):
        filepath = os.path.join(folder, filename)
        if not os.path.exists(filepath):
            raise FileNotFoundError(f"检查点不存在: {filepath}")

        checkpoint = torch.load(filepath, map_location=self.device)
        self.nnet.load_state_dict(checkpoint['state_dict'])
        logger.debug(f"模型已从 {filepath} 加载")
