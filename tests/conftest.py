"""Shared pytest configuration, path setup, and deterministic noise sources."""

import sys
from pathlib import Path
from typing import List, Sequence

import pytest

# Ensure repo root and src/ are on sys.path for all tests
_ROOT = Path(__file__).resolve().parents[1]
_SRC = _ROOT / "src"
for p in (str(_ROOT), str(_SRC)):
    if p not in sys.path:
        sys.path.insert(0, p)

from wrappor.core.utils import configure  # noqa: E402
from wrappor.rappor.mechanisms.random_source import NoiseMaskSource  # noqa: E402


class FixedMaskSource(NoiseMaskSource):
    """
    Deterministic source: bit i is 1 iff thresholds[i % len(thresholds)] < probability.

    Records every request so tests can assert whether randomness was consumed.
    """

    def __init__(self, thresholds: Sequence[float]):
        self.thresholds: List[float] = list(thresholds)
        self.calls: List[tuple] = []

    def generate_mask(self, probability: float, width: int) -> int:
        self.calls.append((probability, width))
        mask = 0
        for i in range(width):
            if self.thresholds[i % len(self.thresholds)] < probability:
                mask |= 1 << i
        return mask


@pytest.fixture
def fixed_source():
    # 返回与参考测试向量一致的确定性随机源工厂
    def _make(thresholds: Sequence[float] = (0.0, 0.6, 0.0)) -> FixedMaskSource:
        return FixedMaskSource(thresholds)

    return _make


@pytest.fixture(autouse=True)
def _restore_runtime_config():
    # 每个测试结束后恢复全局运行时配置，避免测试间相互污染
    from wrappor.core.utils.config import get_config

    cfg = get_config()
    snapshot = dict(vars(cfg))
    yield
    configure(**{k: v for k, v in snapshot.items()})
