"""RAPPOR helpers for byte framing, bit-mask rendering, and parameter validation."""
# 说明：为 RAPPOR 编码流水线提供字节帧、比特掩码渲染与参数校验等通用工具函数。
# 职责：
# - 将无符号整数按大端序编码为定长字节序列，作为 MD5 与 HMAC 摘要的输入帧
# - 将整数掩码渲染为定长 0/1 字符串（高位在前），并提供反向解析
# - 将整数掩码转换为 bitarray / numpy 数组，便于与按位向量处理的 LDP 工具互通
# - 校验概率与位宽等关键参数范围

from __future__ import annotations

from typing import TYPE_CHECKING, Any, List, Union

import numpy as np

from wrappor.core.utils.param_validation import ParamValidationError, ensure_type

try:
    from bitarray import bitarray as _BitArrayRuntime
except ImportError:  # pragma: no cover - optional dependency
    # 可选依赖 bitarray 缺失时退化为 None，相关功能使用纯 Python 列表替代
    _BitArrayRuntime = None  # type: ignore

if TYPE_CHECKING:
    from bitarray import bitarray as BitArrayType
else:
    BitArrayType = Any

BitVector = Union["BitArrayType", List[int]]

MAX_MASK_BITS = 32
# 掩码以 32 位整数承载，同时受限于 HMAC-SHA256 摘要的 32 字节长度


def to_big_endian_bytes(value: int, width: int = 4) -> bytes:
    """
    Encode an unsigned integer as ``width`` big-endian bytes.

    Only the lowest ``width * 8`` bits are kept; higher bits are truncated
    deterministically rather than rejected.

    Raises:
        ParamValidationError: if value is negative or width is not positive.
    """
    ensure_type(value, (int,), label="value")
    if value < 0:
        raise ParamValidationError("value must be non-negative")
    if width <= 0:
        raise ParamValidationError("width must be positive")
    truncated = value & ((1 << (width * 8)) - 1)
    return truncated.to_bytes(width, "big")


def value_to_bytes(value: Union[str, bytes, bytearray]) -> bytes:
    # 字符串按 UTF-8 编码，bytes 原样透传，其它类型直接拒绝以免隐式 str() 转换
    if isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    raise ParamValidationError("value must be str or bytes")


def bit_string(mask: int, width: int) -> str:
    """Like bin(), but zero-padded to ``width`` and without the '0b' prefix."""
    # 从最高位 (width-1) 到最低位 0 依次输出字符，超出 width 的高位被忽略
    ensure_width(width, name="width", maximum=None)
    return "".join("1" if mask & (1 << bit) else "0" for bit in reversed(range(width)))


def parse_bit_string(text: str) -> int:
    """Parse a most-significant-bit-first 0/1 string back into an integer mask."""
    if not text or any(ch not in "01" for ch in text):
        raise ParamValidationError("bit string must be a non-empty sequence of '0'/'1'")
    return int(text, 2)


def mask_to_bitvector(mask: int, width: int) -> BitVector:
    """
    Expand an integer mask into a bit vector indexed by bit position.

    Index ``i`` of the result holds bit ``i`` of the mask (least significant
    first), matching how bloom positions are numbered.
    """
    # 优先使用 bitarray 实现，缺失时退化为 0/1 列表
    ensure_width(width, name="width", maximum=None)
    if _BitArrayRuntime is not None:
        bits = _BitArrayRuntime(width)
        bits.setall(False)
        for idx in range(width):
            if mask & (1 << idx):
                bits[idx] = True
        return bits
    return [1 if mask & (1 << idx) else 0 for idx in range(width)]


def mask_to_array(mask: int, width: int) -> np.ndarray:
    """Return the mask as a numpy int array (least significant bit at index 0)."""
    ensure_width(width, name="width", maximum=None)
    return np.fromiter(((mask >> idx) & 1 for idx in range(width)), dtype=np.int64, count=width)


def ensure_probability(p: float, name: str = "p") -> float:
    """Ensure p is within [0, 1]; otherwise raise ParamValidationError."""
    if isinstance(p, bool) or not isinstance(p, (int, float)):
        raise ParamValidationError(f"{name} must be a number")
    if not (0.0 <= p <= 1.0):
        raise ParamValidationError(f"{name} must be within [0, 1]")
    return float(p)


def ensure_width(n: int, name: str = "num_bits", maximum: Any = MAX_MASK_BITS) -> int:
    """Ensure n is an integer in [1, maximum] (no upper bound when maximum is None)."""
    ensure_type(n, (int,), label=name)
    if n < 1:
        raise ParamValidationError(f"{name} must be positive")
    if maximum is not None and n > maximum:
        raise ParamValidationError(f"{name} must be at most {maximum}")
    return n
