"""
Shared type definitions for the RAPPOR client encoder.

Responsibilities
  - Define the immutable encoding parameters (bloom width, hash count,
    cohort space, and the p/q/f flip probabilities).
  - Define the per-client context (cohort and PRR secret).
  - Define the reporting modes that select which pipeline stages run.
  - Provide a report container used by simulation harnesses.

Limitations
  - Parameters are validated eagerly; no instance of these types exists
    with out-of-range values.
  - ClientContext never serializes its secret.
"""
# 说明：RAPPOR 客户端编码器中共享的类型定义与配置/结果载体。
# 职责：
# - EncoderConfig：封装布隆过滤器位宽、哈希个数、队列总数与 p/q/f 概率，并在构造时完成范围校验
# - ClientContext：封装客户端所属队列与 PRR 密钥，密钥不参与序列化与日志
# - ReportingMode：四种上报模式，决定信号来源（内置哈希或外部 signaller）以及是否执行 IRR
# - EncodedReport：模拟与测试场景下同时携带 bloom/PRR/IRR 的结果载体

from __future__ import annotations

import csv
import enum
import json
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Mapping, Optional, Union

from wrappor.core.utils.param_validation import ParamValidationError, ensure_type
from wrappor.core.utils.serialization import mask_sensitive_data, serialize_to_json
from .exceptions import ConfigurationError
from .rappor_utils import MAX_MASK_BITS, bit_string, ensure_probability, ensure_width

MAX_HASHES = 16
# 布隆哈希位置取自 MD5 摘要的前 hashes 个字节，MD5 共 16 字节

_CSV_HEADER = ["k", "h", "m", "p", "q", "f"]


class ReportingMode(str, enum.Enum):
    """Which stages of the pipeline run for every encode call."""

    STANDARD = "STANDARD"
    ONE_TIME = "ONE-TIME"
    BASIC = "BASIC"
    BASIC_ONE_TIME = "BASIC-ONE-TIME"

    @property
    def is_basic(self) -> bool:
        # BASIC 系列模式的 bloom 值由外部注入的 signaller 提供
        return self in (ReportingMode.BASIC, ReportingMode.BASIC_ONE_TIME)

    @property
    def is_one_time(self) -> bool:
        # ONE-TIME 系列模式直接返回 PRR，不再叠加 IRR 随机化
        return self in (ReportingMode.ONE_TIME, ReportingMode.BASIC_ONE_TIME)

    @classmethod
    def parse(cls, value: Union[str, "ReportingMode"]) -> "ReportingMode":
        """Accept an enum member, its value ("BASIC-ONE-TIME") or its name ("basic_one_time")."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise ConfigurationError(f"unknown reporting mode {value!r}")
        normalized = value.strip().upper().replace("_", "-")
        for member in cls:
            if member.value == normalized:
                return member
        raise ConfigurationError(f"unknown reporting mode {value!r}")


@dataclass(frozen=True)
class EncoderConfig:
    """
    RAPPOR encoding parameters. These determine the privacy guarantee.

    - bloom_bits: width k of the bloom filter and every derived mask, in [1, 32].
    - hashes: number h of bloom positions per value, in [1, 16].
    - total_cohorts: size m of the cohort id space.
    - prob_p: IRR probability of reporting 1 for a PRR bit of 0.
    - prob_q: IRR probability of reporting 1 for a PRR bit of 1.
    - prob_f: PRR probability of replacing a bloom bit by a pseudo-random coin.
    """

    bloom_bits: int = 16
    hashes: int = 2
    total_cohorts: int = 64
    prob_p: float = 0.50
    prob_q: float = 0.75
    prob_f: float = 0.50

    def __post_init__(self) -> None:
        # 构造阶段即完成全部范围校验，避免在流水线中途出现未定义行为
        ensure_width(self.bloom_bits, name="bloom_bits", maximum=MAX_MASK_BITS)
        ensure_width(self.hashes, name="hashes", maximum=MAX_HASHES)
        ensure_width(self.total_cohorts, name="total_cohorts", maximum=None)
        for name in ("prob_p", "prob_q", "prob_f"):
            object.__setattr__(self, name, ensure_probability(getattr(self, name), name=name))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "bloom_bits": self.bloom_bits,
            "hashes": self.hashes,
            "total_cohorts": self.total_cohorts,
            "prob_p": self.prob_p,
            "prob_q": self.prob_q,
            "prob_f": self.prob_f,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "EncoderConfig":
        unknown = set(data) - set(cls.__dataclass_fields__)
        if unknown:
            raise ParamValidationError(f"unknown encoder config fields: {sorted(unknown)}")
        return cls(**dict(data))

    def to_json(self) -> str:
        """Convert to JSON using the field names of the RAPPOR collection server."""
        return serialize_to_json(
            {
                "numBits": self.bloom_bits,
                "numHashes": self.hashes,
                "numCohorts": self.total_cohorts,
                "probPrr": self.prob_f,
                "probIrr0": self.prob_p,
                "probIrr1": self.prob_q,
            }
        )

    @classmethod
    def from_json(cls, text: str) -> "EncoderConfig":
        data = json.loads(text)
        try:
            return cls(
                bloom_bits=int(data["numBits"]),
                hashes=int(data["numHashes"]),
                total_cohorts=int(data["numCohorts"]),
                prob_p=float(data["probIrr0"]),
                prob_q=float(data["probIrr1"]),
                prob_f=float(data["probPrr"]),
            )
        except KeyError as exc:
            raise ConfigurationError(f"params JSON missing field {exc}") from exc

    @classmethod
    def from_csv(cls, lines: Iterable[str]) -> "EncoderConfig":
        """
        Read parameters from a two-row ``k,h,m,p,q,f`` CSV params file.

        Raises:
            ConfigurationError: when the file is malformed.
        """
        config: Optional[EncoderConfig] = None
        for i, row in enumerate(csv.reader(lines)):
            if i == 0:
                if row != _CSV_HEADER:
                    raise ConfigurationError(f"header {row} is malformed; expected k,h,m,p,q,f")
            elif i == 1:
                try:
                    k, h, m = int(row[0]), int(row[1]), int(row[2])
                    p, q, f = float(row[3]), float(row[4]), float(row[5])
                except (ValueError, IndexError) as exc:
                    raise ConfigurationError(f"row is malformed: {exc}") from exc
                # 数值越界仍以 ParamValidationError 抛出
                config = cls(bloom_bits=k, hashes=h, total_cohorts=m, prob_p=p, prob_q=q, prob_f=f)
            else:
                raise ConfigurationError("params file should only have two rows")
        if config is None:
            raise ConfigurationError("expected second row with params")
        return config


@dataclass(frozen=True)
class ClientContext:
    """Cohort assignment and PRR keying material of one client."""

    cohort: int
    secret: Union[str, bytes] = field(repr=False)

    def __post_init__(self) -> None:
        ensure_type(self.cohort, (int,), label="cohort")
        if self.cohort < 0:
            raise ParamValidationError("cohort must be non-negative")
        if not isinstance(self.secret, (str, bytes)):
            raise ParamValidationError("secret must be str or bytes")

    def validate(self, config: EncoderConfig) -> "ClientContext":
        # 校验队列编号落在 [0, total_cohorts) 区间内
        if self.cohort >= config.total_cohorts:
            raise ParamValidationError(
                f"cohort must be within [0, {config.total_cohorts}), got {self.cohort}"
            )
        return self

    def to_dict(self) -> Dict[str, Any]:
        # 密钥永不导出
        return mask_sensitive_data({"cohort": self.cohort, "secret": self.secret}, ("secret",))


@dataclass
class EncodedReport:
    """Bloom value, PRR and IRR of a single encode pass. Only ``irr`` is meant to be transmitted."""

    cohort: int
    width: int
    bloom: int
    prr: int
    irr: int

    def to_bit_strings(self) -> Dict[str, str]:
        return {
            "bloom": bit_string(self.bloom, self.width),
            "prr": bit_string(self.prr, self.width),
            "irr": bit_string(self.irr, self.width),
        }

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"cohort": self.cohort}
        payload.update(self.to_bit_strings())
        return payload
