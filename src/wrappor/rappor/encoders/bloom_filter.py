"""Bloom filter signal stage for RAPPOR encoding."""
# 说明：将 (cohort, value) 通过 MD5 摘要映射到固定宽度布隆过滤器的若干比特位，作为 PRR 的输入，编码不可逆。
# 职责：
# - signal_positions：以 4 字节大端 cohort 前缀拼接原始值，取 MD5 前 hashes 个字节对 bloom_bits 取模得到比特位置
# - build_bloom / compute_bloom：将比特位置按位或折叠为整数掩码
# - BloomSignaller：绑定编码参数与队列编号的内置信号源，与外部 signaller 共享同一接口
# 约定：
# - MD5 不带密钥，相同 (cohort, value) 永远得到相同比特模式，这是 PRR 可复现与跨队列聚合的前提
# - 位置允许重复，不做去重

from __future__ import annotations

import hashlib
from typing import Any, Iterable, List, Mapping

from wrappor.core.utils.param_validation import ParamValidationError
from wrappor.rappor.rappor_utils import ensure_width, to_big_endian_bytes, value_to_bytes
from wrappor.rappor.types import MAX_HASHES, EncoderConfig
from .base import BaseSignaller, SignalValue


def signal_positions(value: SignalValue, cohort: int, hashes: int, bloom_bits: int) -> List[int]:
    """
    Return the list of bloom bit positions activated by ``value`` in ``cohort``.

    The digest input is the 4-byte big-endian cohort followed by the raw value
    bytes (strings are UTF-8 encoded). Each of the first ``hashes`` MD5 digest
    bytes, reduced modulo ``bloom_bits``, is one position.
    """
    ensure_width(hashes, name="hashes", maximum=MAX_HASHES)
    ensure_width(bloom_bits, name="bloom_bits", maximum=None)
    digest = hashlib.md5(to_big_endian_bytes(cohort, 4) + value_to_bytes(value)).digest()
    return [digest[i] % bloom_bits for i in range(hashes)]


def build_bloom(positions: Iterable[int]) -> int:
    """Bitwise-OR ``1 << position`` for every position (duplicates are harmless)."""
    bloom = 0
    for position in positions:
        if position < 0:
            raise ParamValidationError("bloom positions must be non-negative")
        bloom |= 1 << position
    return bloom


def compute_bloom(value: SignalValue, cohort: int, hashes: int, bloom_bits: int) -> int:
    return build_bloom(signal_positions(value, cohort, hashes, bloom_bits))


class BloomSignaller(BaseSignaller):
    """Built-in signal source hashing values into the cohort's bloom filter."""

    def __init__(self, config: EncoderConfig, cohort: int):
        # 绑定编码参数与队列编号；队列范围由 ClientContext 统一校验
        self.config = config
        self.cohort = int(cohort)

    def signal(self, value: SignalValue) -> int:
        return compute_bloom(value, self.cohort, self.config.hashes, self.config.bloom_bits)

    def get_metadata(self) -> Mapping[str, Any]:
        """Metadata describing bloom dimensions and hash config."""
        return {
            "type": "bloom_filter",
            "num_bits": self.config.bloom_bits,
            "num_hashes": self.config.hashes,
            "cohort": self.cohort,
            "digest": "md5",
        }
