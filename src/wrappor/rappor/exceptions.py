"""Exception types raised by the RAPPOR client encoder."""
# 说明：RAPPOR 客户端编码器的异常类型。
# 约定：
# - 数值越界（位宽、概率、队列编号、摘要长度）统一使用 ParamValidationError
# - 编码器装配错误（BASIC 模式缺少 signaller、未知模式名、参数文件格式错误）使用 ConfigurationError

from __future__ import annotations


class RapporError(Exception):
    """Base exception for RAPPOR encoder errors."""


class ConfigurationError(RapporError):
    """Raised when an encoder is assembled with an unusable configuration."""
