"""Differential-privacy levels implied by a set of RAPPOR encoding parameters."""
# 说明：根据编码参数计算 RAPPOR 的隐私强度，用于在部署前审阅参数选择。
# 职责：
# - epsilon_permanent：PRR 的长期（无限次上报）隐私上界 2h·ln((1-f/2)/(f/2))
# - epsilon_one_report：单次上报（PRR 与 IRR 叠加）的隐私上界 h·ln(q*(1-p*)/(p*(1-q*)))
# - privacy_summary：汇总上述指标与有效概率 p*/q*
# 约定：
# - 退化参数（f=0、p*=0 或 q*=1）返回 math.inf，而不是抛出异常

from __future__ import annotations

import math
from typing import Any, Dict, Tuple

from .types import EncoderConfig


def effective_probabilities(config: EncoderConfig) -> Tuple[float, float]:
    """Return ``(p*, q*)``: probability that a reported bit is 1 given a true bloom bit of 0 / 1."""
    f, p, q = config.prob_f, config.prob_p, config.prob_q
    p_star = 0.5 * f * (p + q) + (1.0 - f) * p
    q_star = 0.5 * f * (p + q) + (1.0 - f) * q
    return p_star, q_star


def epsilon_permanent(config: EncoderConfig) -> float:
    """Longitudinal privacy bound of the PRR (holds for any number of reports)."""
    f = config.prob_f
    if f <= 0.0:
        return math.inf
    half = 0.5 * f
    return 2.0 * config.hashes * math.log((1.0 - half) / half)


def epsilon_one_report(config: EncoderConfig) -> float:
    """Privacy bound of a single IRR given the combined PRR + IRR noise."""
    p_star, q_star = effective_probabilities(config)
    if p_star <= 0.0 or q_star >= 1.0:
        return math.inf
    ratio = (q_star * (1.0 - p_star)) / (p_star * (1.0 - q_star))
    if ratio <= 0.0:
        return math.inf
    return config.hashes * abs(math.log(ratio))


def privacy_summary(config: EncoderConfig) -> Dict[str, Any]:
    p_star, q_star = effective_probabilities(config)
    return {
        "config": config.to_dict(),
        "p_star": p_star,
        "q_star": q_star,
        "epsilon_permanent": epsilon_permanent(config),
        "epsilon_one_report": epsilon_one_report(config),
    }
