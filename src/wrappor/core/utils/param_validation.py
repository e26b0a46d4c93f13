"""
Reusable validation helpers and decorators.
"""
# 说明：参数验证相关的辅助函数与装饰器，用于在编码流水线内部统一进行轻量级参数检查与转换。
# 职责：
# - ParamValidationError：参数校验失败（位宽、概率、队列编号越界等）时抛出的异常类型
# - ensure_type：检查参数是否属于指定类型集合，并在失败时给出带 label 的错误提示
# - validate_arguments：根据 schema 为函数参数应用验证/转换逻辑的装饰器，统一处理位置参数与关键字参数

from __future__ import annotations

import functools
import inspect
from typing import Any, Callable, Dict, Mapping, Tuple


class ParamValidationError(ValueError):
    """Raised when parameter validation fails."""


def ensure_type(value: Any, expected: Tuple[type, ...], *, label: str = "value") -> None:
    # 检查 value 是否为 expected 集合中的任意类型；bool 不被视为整数
    if isinstance(value, bool) and bool not in expected:
        raise ParamValidationError(f"{label} must be instance of {', '.join(t.__name__ for t in expected)}")
    if not isinstance(value, expected):
        names = ", ".join(t.__name__ for t in expected)
        raise ParamValidationError(f"{label} must be instance of {names}")


def validate_arguments(schema: Mapping[str, Callable[[Any], Any]]) -> Callable:
    """
    Decorator validating arguments according to callables.

    Each validator receives the argument and should return the (possibly
    transformed) value or raise ParamValidationError.
    """
    # schema：以参数名为键、验证/转换函数为值的映射，用于在调用前统一处理入参

    def decorator(func: Callable) -> Callable:
        params = list(inspect.signature(func).parameters)

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            mutable = list(args)
            kw: Dict[str, Any] = dict(kwargs)
            for name, validator in schema.items():
                if name in kw:
                    kw[name] = validator(kw[name])
                    continue
                # schema 中多余的条目直接忽略
                if name not in params:
                    continue
                index = params.index(name)
                # 未显式提供对应位置参数时（使用默认值），不强制验证
                if index >= len(mutable):
                    continue
                mutable[index] = validator(mutable[index])
            return func(*mutable, **kw)

        return wrapper

    return decorator
