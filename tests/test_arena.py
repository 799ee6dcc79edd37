# -*- coding: utf-8 -*-
"""
Arena 测试 - 先后手公平性、非法动作、胜负统计、接受阈值
"""

import sys
from pathlib import Path

import numpy as np
import pytest

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from othello_zero.arena import (
    Arena, MCTSPlayer, RandomPlayer, GreedyOthelloPlayer, accept_new_model, compare_models
)
from othello_zero.game import OthelloGame


class UniformNet:
    def __init__(self, action_size):
        self.action_size = action_size

    def predict(self, board):
        return np.ones(self.action_size, dtype=np.float32) / self.action_size, 0.0


@pytest.fixture
def game():
    return OthelloGame(4)


def test_play_games_alternates_start_player(game, monkeypatch):
    arena = Arena(RandomPlayer(game), RandomPlayer(game), game)
    starts = []

    def fake_play_game(start_player=1, verbose=False):
        starts.append(start_player)
        return 1

    monkeypatch.setattr(arena, 'play_game', fake_play_game)
    one_won, two_won, draws = arena.play_games(6)

    assert starts == [1, 1, 1, -1, -1, -1]
    # 结果总是以 player1 的视角计数
    assert (one_won, two_won, draws) == (6, 0, 0)


def test_play_games_counts_results(game, monkeypatch):
    arena = Arena(RandomPlayer(game), RandomPlayer(game), game)
    results = iter([1, -1, OthelloGame.DRAW_VALUE, -1])
    monkeypatch.setattr(arena, 'play_game', lambda start_player=1, verbose=False: next(results))

    assert arena.play_games(4) == (1, 2, 1)


def test_play_games_odd_number(game, monkeypatch):
    arena = Arena(RandomPlayer(game), RandomPlayer(game), game)
    monkeypatch.setattr(arena, 'play_game', lambda start_player=1, verbose=False: 1)
    assert sum(arena.play_games(5)) == 4


def test_random_games_total(game):
    np.random.seed(0)
    arena = Arena(RandomPlayer(game), RandomPlayer(game), game)
    one_won, two_won, draws = arena.play_games(10)
    assert one_won + two_won + draws == 10


def test_play_game_result_values(game):
    player = GreedyOthelloPlayer(game)
    arena = Arena(player, RandomPlayer(game), game)
    for start_player in (1, -1):
        result = arena.play_game(start_player=start_player)
        assert result in (1, -1) or np.isclose(abs(result), OthelloGame.DRAW_VALUE)


def test_illegal_action_raises(game):
    arena = Arena(lambda board: 0, RandomPlayer(game), game)
    with pytest.raises(AssertionError):
        arena.play_game(start_player=1)


def test_verbose_requires_display(game):
    arena = Arena(RandomPlayer(game), RandomPlayer(game), game)
    with pytest.raises(AssertionError):
        arena.play_game(verbose=True)


def test_verbose_prints_turns(game, capsys):
    arena = Arena(RandomPlayer(game), GreedyOthelloPlayer(game), game, display=game.display)
    arena.play_game(verbose=True)
    out = capsys.readouterr().out
    assert "Turn 1 Player 1" in out
    assert "Game over" in out


def test_random_player_picks_valid_moves(game):
    player = RandomPlayer(game)
    board = game.get_init_board()
    for _ in range(20):
        assert player(board) in (1, 4, 11, 14)


def test_greedy_player_maximizes_count_diff(game):
    board = np.zeros(16, dtype=np.int8)
    # 第一行 O X X -：落在 (0,3) 翻两子；其余落点只翻一子
    board[0], board[1], board[2] = 1, -1, -1
    board[4], board[5] = 1, -1
    assert GreedyOthelloPlayer(game)(board) == 3


def test_mcts_player_returns_valid_action(game):
    player = MCTSPlayer(game, UniformNet(game.get_action_size()), {'num_simulations': 10, 'cpuct': 1.0})
    board = game.get_init_board()
    assert game.get_valid_moves(board, 1)[player(board)] == 1


@pytest.mark.parametrize("new_wins, old_wins, threshold, expected", [
    (6, 4, 0.6, True),
    (5, 5, 0.6, False),
    (0, 0, 0.6, False),
    (3, 0, 1.0, True),
    (0, 3, 0.0, True),
])
def test_accept_new_model(new_wins, old_wins, threshold, expected):
    assert accept_new_model(new_wins, old_wins, threshold) == expected


def test_compare_models_reports_new_model_wins(game, monkeypatch, capsys):
    calls = {}

    def fake_play_games(self, num, verbose=False):
        calls['num'] = num
        # player1 是旧模型
        return 1, 3, 0

    monkeypatch.setattr(Arena, 'play_games', fake_play_games)
    args = {'num_simulations': 2, 'cpuct': 1.0, 'arena_compare': 4,
            'update_threshold': 0.6, 'verbose': False}
    nnet = UniformNet(game.get_action_size())

    new_wins, old_wins, draws, accepted = compare_models(game, nnet, nnet, args)
    assert (new_wins, old_wins, draws, accepted) == (3, 1, 0, True)
    assert calls['num'] == 4
    assert "接受" in capsys.readouterr().out
