"""
Sources of probabilistic bit masks for the IRR stage.

Responsibilities
  - Define the injectable ``NoiseMaskSource`` capability.
  - Provide the default cryptographically strong source.
  - Provide a numpy-seeded source for reproducible simulations.

Usage Context
  - The encoder draws one p-mask and one q-mask per transmitted report.
  - Tests substitute deterministic sources through the same interface.

Limitations
  - Per-bit probabilities are quantized to ``1 / resolution``.
"""
# 说明：IRR 阶段使用的概率比特掩码来源，统一为可注入的 NoiseMaskSource 接口。
# 职责：
# - NoiseMaskSource：约定 generate_mask(probability, width)，并以其实现 generate_p_mask / generate_q_mask
# - SecureMaskSource：默认实现，每一位从 secrets 抽取 [0, resolution) 内的均匀整数，并与 round(probability * resolution) 比较
# - SeededMaskSource：基于 numpy Generator 的可复现实现，仅用于模拟与测试，不具备密码学强度
# 约定：
# - 采用整数抽样与阈值比较而非浮点随机数比较，噪声分辨率固定且便于分析

from __future__ import annotations

import secrets
from abc import ABC, abstractmethod
from typing import Any, Optional

import numpy as np

from wrappor.core.utils.config import get_config
from wrappor.core.utils.random import create_rng, reseed_rng
from wrappor.rappor.rappor_utils import ensure_probability, ensure_width


class NoiseMaskSource(ABC):
    """Produces integers whose bits are independently 1 with a given probability."""

    @abstractmethod
    def generate_mask(self, probability: float, width: int) -> int:
        """Return a ``width``-bit integer; each bit is 1 with ``probability``."""
        raise NotImplementedError

    def generate_p_mask(self, prob_p: float, width: int) -> int:
        # IRR 中 PRR 位为 0 时上报 1 的掩码
        return self.generate_mask(prob_p, width)

    def generate_q_mask(self, prob_q: float, width: int) -> int:
        # IRR 中 PRR 位为 1 时上报 1 的掩码
        return self.generate_mask(prob_q, width)


def _resolve_resolution(resolution: Optional[int]) -> int:
    # 未显式给出时使用运行时配置中的量化精度
    value = get_config().mask_resolution if resolution is None else resolution
    return ensure_width(value, name="resolution", maximum=None)


class SecureMaskSource(NoiseMaskSource):
    """
    Default source backed by the operating system CSPRNG.

    Each bit draws a uniform integer in ``[0, resolution)`` with
    ``secrets.randbelow`` and is set when the draw falls below
    ``round(probability * resolution)``.
    """

    def __init__(self, resolution: Optional[int] = None):
        self.resolution = _resolve_resolution(resolution)

    def generate_mask(self, probability: float, width: int) -> int:
        threshold = round(ensure_probability(probability, name="probability") * self.resolution)
        ensure_width(width, name="width")
        mask = 0
        for i in range(width):
            if secrets.randbelow(self.resolution) < threshold:
                mask |= 1 << i
        return mask


class SeededMaskSource(NoiseMaskSource):
    """
    Reproducible source driven by a numpy Generator.

    Not cryptographically strong: use it for simulations and tests only.
    """

    def __init__(self, seed: Optional[Any] = None, resolution: Optional[int] = None):
        # seed 可为整数、SeedSequence 或现成的 Generator；为空时回退到 RuntimeConfig.rng_seed
        self._rng: np.random.Generator = create_rng(seed)
        self.resolution = _resolve_resolution(resolution)

    def reseed(self, seed: Optional[int]) -> "SeededMaskSource":
        reseed_rng(self._rng, seed)
        return self

    def generate_mask(self, probability: float, width: int) -> int:
        threshold = round(ensure_probability(probability, name="probability") * self.resolution)
        ensure_width(width, name="width")
        draws = self._rng.integers(0, self.resolution, size=width)
        mask = 0
        for i in np.flatnonzero(draws < threshold):
            mask |= 1 << int(i)
        return mask
