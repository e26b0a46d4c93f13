"""Instantaneous Randomized Response (IRR) stage."""
# 说明：以两次新抽取的概率掩码对 PRR 做逐位随机响应，得到每次实际上报的 IRR。
# 约定：
# - PRR 位为 0 时以概率 p 上报 1；PRR 位为 1 时以概率 q 上报 1
# - 每次上报都重新抽取随机性，结果不缓存

from __future__ import annotations

from wrappor.core.utils.param_validation import ParamValidationError
from wrappor.rappor.rappor_utils import MAX_MASK_BITS, ensure_probability, ensure_width
from .random_source import NoiseMaskSource


def compute_irr(prr: int, random_source: NoiseMaskSource, prob_p: float, prob_q: float, num_bits: int) -> int:
    """Return ``(p_mask & ~prr) | (q_mask & prr)`` with fresh masks from ``random_source``."""
    ensure_probability(prob_p, name="prob_p")
    ensure_probability(prob_q, name="prob_q")
    ensure_width(num_bits, name="num_bits", maximum=MAX_MASK_BITS)
    if prr < 0 or prr >> num_bits:
        raise ParamValidationError(f"prr must fit in {num_bits} bits")
    p_bits = random_source.generate_p_mask(prob_p, num_bits)
    q_bits = random_source.generate_q_mask(prob_q, num_bits)
    return (p_bits & ~prr) | (q_bits & prr)
