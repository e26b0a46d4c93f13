"""Base abstraction for deterministic bloom-value sources."""
# 说明：定义 RAPPOR 信号层的基础接口，负责原始值到 bloom 整数掩码的确定性映射，不引入任何随机性。
# 职责：
# - 为内置哈希信号与外部注入的 BASIC 模式信号源定义统一的抽象基类
# - 约定 signal/get_metadata 最小方法集合，便于编码器在两种来源之间切换

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping, Union

SignalValue = Union[str, bytes]


class BaseSignaller(ABC):
    """
    Deterministic mapping from a raw client value to a bloom value.

    Implementations must return the same integer for the same value on every
    call, and the result must fit in the encoder's ``bloom_bits``; the PRR is
    only "permanent" if its input is.
    """

    @abstractmethod
    def signal(self, value: SignalValue) -> int:
        """Return the bloom value (an unsigned integer mask) for ``value``."""
        raise NotImplementedError

    def get_metadata(self) -> Mapping[str, Any]:
        """Return JSON-serializable metadata describing the signal source."""
        return {"type": self.__class__.__name__}
