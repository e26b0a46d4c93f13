"""Permanent Randomized Response (PRR) derivation."""
# 说明：由 bloom 值与客户端密钥确定性地推导 PRR 噪声掩码，并与 bloom 值混合得到永久随机响应。
# 职责：
# - derive_prr_masks：对消息计算 HMAC-SHA256，逐字节拆分出均匀硬币位（最低位）与 f 噪声位（高 7 位与 f*128 比较）
# - compute_prr：以 4 字节大端 bloom 值为消息求掩码，按 (bloom & ~f_mask) | (uniform & f_mask) 混合
# 约定：
# - 两个掩码完全由 (secret, bloom) 决定，同一值在同一密钥下永远得到同一 PRR
# - f 以 1/128 的分辨率量化

from __future__ import annotations

import hashlib
import hmac
from typing import Tuple, Union

from wrappor.core.utils.param_validation import ParamValidationError, validate_arguments
from wrappor.rappor.rappor_utils import (
    MAX_MASK_BITS,
    ensure_probability,
    ensure_width,
    to_big_endian_bytes,
    value_to_bytes,
)

Secret = Union[str, bytes]

_PRR_ARGUMENTS = {
    "prob_f": lambda value: ensure_probability(value, name="prob_f"),
    "num_bits": lambda value: ensure_width(value, name="num_bits", maximum=MAX_MASK_BITS),
}


@validate_arguments(_PRR_ARGUMENTS)
def derive_prr_masks(message: bytes, secret: Secret, prob_f: float, num_bits: int) -> Tuple[int, int]:
    """
    Return ``(uniform, f_mask)`` derived from HMAC-SHA256(secret, message).

    For each bit ``i < num_bits`` the digest byte ``i`` supplies one bit of
    entropy for the uniform coin (its lowest bit) and seven bits compared
    against ``prob_f * 128`` for the noise mask.
    """
    digest = hmac.new(value_to_bytes(secret), value_to_bytes(message), hashlib.sha256).digest()
    # num_bits 已被限制在 32 以内，恰好等于 SHA-256 摘要长度
    threshold128 = prob_f * 128

    uniform = 0
    f_mask = 0
    for i in range(num_bits):
        byte = digest[i]
        uniform |= (byte & 0x01) << i
        if (byte >> 1) < threshold128:
            f_mask |= 1 << i
    return uniform, f_mask


@validate_arguments(_PRR_ARGUMENTS)
def compute_prr(bloom: int, secret: Secret, prob_f: float, num_bits: int) -> int:
    """
    Blend the bloom value with its secret-keyed noise masks.

    Bit i of the PRR is 1 with probability f/2, 0 with probability f/2,
    and bloom bit i otherwise.
    """
    if bloom < 0 or bloom >> num_bits:
        raise ParamValidationError(f"bloom value must fit in {num_bits} bits")
    uniform, f_mask = derive_prr_masks(to_big_endian_bytes(bloom, 4), secret, prob_f, num_bits)
    return (bloom & ~f_mask) | (uniform & f_mask)
