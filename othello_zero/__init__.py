# -*- coding: utf-8 -*-
"""
Othello AlphaZero
=================

Core Components:
- Board / BoardMath: flat-array Othello rules and the 8 board symmetries
- OthelloGame: Game abstraction consumed by search and self-play
- NNetWrapper: ResNet policy/value estimator (PyTorch)
- MCTS: Monte Carlo Tree Search with neural network guidance
- Arena: head-to-head evaluation between two players
- Coach: self-play / train / arena accept-reject loop
"""

from .board import Board
from .board_math import BoardMath
from .game import Game, OthelloGame
from .neural_net import NeuralNet
from .model import OthelloNet, NNetWrapper
from .mcts import MCTS
from .arena import Arena, MCTSPlayer, RandomPlayer, GreedyOthelloPlayer
from .coach import Coach

__version__ = "1.0.0"

__all__ = [
    'Board',
    'BoardMath',
    'Game',
    'OthelloGame',
    'NeuralNet',
    'OthelloNet',
    'NNetWrapper',
    'MCTS',
    'Arena',
    'MCTSPlayer',
    'RandomPlayer',
    'GreedyOthelloPlayer',
    'Coach',
]
