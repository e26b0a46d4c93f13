"""
Random number generation helpers.

Responsibilities
  - Centralize numpy RNG creation and seeding for simulation paths.

Limitations
  - numpy generators are not cryptographically strong; production noise
    masks use the ``secrets`` module instead (see ``SecureMaskSource``).
"""
# 说明：随机数生成辅助工具，用于在模拟与测试路径中统一管理 numpy RNG 的创建与派生。
# 职责：
# - create_rng / reseed_rng：集中封装 numpy Generator 的创建与重置逻辑，支持显式种子、全局配置种子与已有生成器

from __future__ import annotations

from typing import Any, Optional

import numpy as np

from .config import get_config


def create_rng(seed: Optional[Any] = None) -> np.random.Generator:
    """Create a numpy Generator from a seed, SeedSequence, or existing generator."""
    # 将输入规范化为 numpy.random.Generator；未给出种子时回退到运行时配置中的 rng_seed
    if isinstance(seed, np.random.Generator):
        return seed
    if seed is None:
        seed = get_config().rng_seed
    return np.random.default_rng(seed)


def reseed_rng(rng: np.random.Generator, seed: Optional[int]) -> np.random.Generator:
    """Replace RNG state with a new seed; returns the generator for chaining."""
    # 用新的种子生成状态并替换给定 rng 的内部状态，保持对象标识不变
    rng.bit_generator.state = np.random.default_rng(seed).bit_generator.state
    return rng
