"""
Serialization helpers for configuration and report payloads.

Provides a JSON encoder aware of objects exposing ``to_dict`` and a helper
masking sensitive fields before they leave the process.
"""
# 说明：序列化辅助工具，统一 JSON 编码行为与敏感字段掩码。
# 职责：
# - mask_sensitive_data：对给定字典中的敏感字段（如客户端密钥）进行掩码处理
# - serialize_to_json：优先使用对象自带的 to_dict，其次展开 dataclass，再编码为 JSON 字符串

from __future__ import annotations

import json
from dataclasses import asdict, is_dataclass
from typing import Any, Dict, Sequence

SensitiveFields = Sequence[str]


def mask_sensitive_data(payload: Dict[str, Any], sensitive_fields: SensitiveFields, mask: str = "***") -> Dict[str, Any]:
    # 对 payload 中指定字段进行掩码，返回浅拷贝后的新字典
    masked = dict(payload)
    for field in sensitive_fields:
        if field in masked:
            masked[field] = mask
    return masked


def _prepare(obj: Any) -> Any:
    # 优先使用对象自带的 to_dict（可能带有字段重命名或掩码），否则退回 dataclass 展开
    if hasattr(obj, "to_dict"):
        return obj.to_dict()
    if is_dataclass(obj) and not isinstance(obj, type):
        return asdict(obj)
    return obj


def serialize_to_json(obj: Any) -> str:
    return json.dumps(_prepare(obj), default=_prepare, ensure_ascii=False)
