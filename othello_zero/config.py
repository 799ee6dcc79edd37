# -*- coding: utf-8 -*-
"""配置加载 - 从 YAML 读取并合并成统一的 args 字典"""

import logging

import yaml

logger = logging.getLogger(__name__)

# Coach / MCTS / Arena 必需的配置项，缺失时直接报错，不使用默认值
REQUIRED_KEYS = (
    'num_iterations',
    'num_episodes',
    'temp_threshold',
    'update_threshold',
    'max_queue_length',
    'num_simulations',
    'arena_compare',
    'cpuct',
    'checkpoint',
    'load_model',
    'load_folder',
    'load_folder_file',
    'load_examples_file',
    'num_iters_for_train_examples_history',
    'verbose',
)

# 估值器和运行环境的可选参数
DEFAULTS = {
    'board_size': 6,
    'num_filters': 64,
    'num_res_blocks': 4,
    'dropout': 0.3,
    'lr': 0.001,
    'epochs': 10,
    'batch_size': 64,
    'weight_decay': 1e-4,
    'grad_clip': 5.0,
    'cuda': False,
    'num_workers': 1,
    'tensorboard': False,
    'log_dir': 'results/logs',
}


def load_config_from_yaml(config_path='config/config.yaml'):
    """
    从 YAML 配置文件加载所有配置

    Args:
        config_path: 配置文件路径

    Returns:
        dict: 完整的配置字典
    """
    with open(config_path, 'r', encoding='utf-8') as f:
        config = yaml.safe_load(f)

    if not isinstance(config, dict):
        raise ValueError(f"配置文件格式错误: {config_path}")

    args = build_args(config)
    logger.info(f"已加载配置: {config_path}")
    return args


def build_args(config):
    """
    把分节的配置（game / model / trainer / mcts / arena / checkpoint）合并成一层

    同名键以后出现的分节为准；必需项缺失抛出 KeyError
    """
    args = dict(DEFAULTS)
    for section in ('game', 'model', 'trainer', 'mcts', 'arena', 'checkpoint'):
        args.update(config.get(section) or {})

    missing = [key for key in REQUIRED_KEYS if key not in args]
    if missing:
        raise KeyError(f"配置缺少必需项: {', '.join(missing)}")

    validate_args(args)
    return args


def validate_args(args):
    """检查取值范围"""
    n = args['board_size']
    if not isinstance(n, int) or n < 4 or n % 2 != 0:
        raise ValueError(f"board_size 必须是不小于 4 的偶数，实际为 {n}")

    if not 0.0 <= float(args['update_threshold']) <= 1.0:
        raise ValueError(f"update_threshold 必须在 [0, 1] 之间，实际为 {args['update_threshold']}")

    for key in ('num_iterations', 'num_episodes', 'num_simulations', 'arena_compare',
                'max_queue_length', 'num_iters_for_train_examples_history'):
        if int(args[key]) < 1:
            raise ValueError(f"{key} 必须为正整数，实际为 {args[key]}")

    if float(args['cpuct']) <= 0:
        raise ValueError(f"cpuct 必须为正数，实际为 {args['cpuct']}")
