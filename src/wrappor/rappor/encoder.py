"""
RAPPOR client encoder.

Orchestrates Signal -> PRR -> IRR for one client according to a fixed
reporting mode, owning the parameters, cohort, secret, PRR cache and
randomness source.
"""
# 说明：RAPPOR 客户端编码器，按照构造时固定的上报模式编排 Signal → PRR → IRR 三阶段流水线。
# 职责：
# - 构造阶段校验参数、队列编号与模式；BASIC 系列模式缺少 signaller 时立即抛出 ConfigurationError
# - encode：经缓存取得（或推导并写入）PRR，ONE-TIME 系列直接返回 PRR，否则叠加 IRR
# - encode_bits：对外部已形成的 bloom 值直接执行 PRR + IRR（不经过缓存）
# - encode_report：同时返回 bloom / PRR / IRR，供模拟与批处理工具使用
# 约定：
# - 日志中永不出现密钥与原始值
# - 随机性仅在 STANDARD / BASIC 模式的 IRR 阶段消耗

from __future__ import annotations

from typing import Any, Callable, Dict, Optional, Union

from wrappor.core.utils.logging import get_logger
from .cache import InMemoryPRRCache, PRRCache
from .encoders.base import BaseSignaller, SignalValue
from .encoders.bloom_filter import BloomSignaller
from .exceptions import ConfigurationError
from .mechanisms.irr import compute_irr
from .mechanisms.prr import compute_prr
from .mechanisms.random_source import NoiseMaskSource, SecureMaskSource
from .types import ClientContext, EncodedReport, EncoderConfig, ReportingMode

logger = get_logger(__name__)


class RapporEncoder:
    """
    Obfuscates values for a given client using the RAPPOR privacy algorithm.

    - Configuration
      - config: EncoderConfig controlling bloom shape and flip probabilities.
      - cohort: client cohort in [0, config.total_cohorts), salts the bloom hash.
      - secret: client secret keying the PRR; must be stable per client.
      - mode: ReportingMode (or its string) fixed for the instance.
      - random_source: IRR randomness, defaults to SecureMaskSource.
      - cache: PRR cache, defaults to a fresh InMemoryPRRCache.
      - signaller: bloom-value source, required for BASIC modes.

    - Behavior
      - The PRR of a value is derived once and reused from the cache.
      - ONE_TIME modes return the PRR; STANDARD and BASIC return a fresh IRR.
    """

    def __init__(
        self,
        config: EncoderConfig,
        cohort: int,
        secret: Union[str, bytes],
        mode: Union[ReportingMode, str] = ReportingMode.STANDARD,
        *,
        random_source: Optional[NoiseMaskSource] = None,
        cache: Optional[PRRCache] = None,
        signaller: Optional[BaseSignaller] = None,
    ):
        if not isinstance(config, EncoderConfig):
            raise ConfigurationError("config must be an EncoderConfig")
        self.config = config
        self.mode = ReportingMode.parse(mode)
        self._client = ClientContext(cohort=cohort, secret=secret).validate(config)

        # BASIC 系列模式必须在构造阶段就拿到外部 signaller，否则拒绝任何后续 encode
        if self.mode.is_basic:
            if signaller is None:
                raise ConfigurationError(f"{self.mode.value} mode requires a signaller")
            self._signaller: BaseSignaller = signaller
        else:
            self._signaller = BloomSignaller(config, self._client.cohort)

        self.random_source: NoiseMaskSource = random_source if random_source is not None else SecureMaskSource()
        self.cache: PRRCache = cache if cache is not None else InMemoryPRRCache()
        logger.debug(
            "encoder ready mode=%s bloom_bits=%d hashes=%d cohort=%d",
            self.mode.value,
            config.bloom_bits,
            config.hashes,
            self._client.cohort,
        )

    @property
    def cohort(self) -> int:
        return self._client.cohort

    @property
    def signaller(self) -> BaseSignaller:
        return self._signaller

    def _signal(self, value: SignalValue) -> int:
        # 按模式选择 bloom 来源；BASIC 分支的 signaller 缺失在构造阶段已被排除
        if self.mode in (ReportingMode.STANDARD, ReportingMode.ONE_TIME):
            return self._signaller.signal(value)
        if self.mode in (ReportingMode.BASIC, ReportingMode.BASIC_ONE_TIME):
            if self._signaller is None:
                raise ConfigurationError(f"{self.mode.value} mode requires a signaller")
            return self._signaller.signal(value)
        raise ConfigurationError(f"unhandled reporting mode {self.mode!r}")

    def _derive_prr(self, bloom: int) -> int:
        return compute_prr(bloom, self._client.secret, self.config.prob_f, self.config.bloom_bits)

    def _irr(self, prr: int) -> int:
        return compute_irr(
            prr,
            self.random_source,
            self.config.prob_p,
            self.config.prob_q,
            self.config.bloom_bits,
        )

    def _cached_prr(self, value: SignalValue, bloom: Callable[[], int]) -> int:
        # 仅在缓存未命中时调用 bloom 求值并推导 PRR
        prr, hit = self.cache.get_or_compute(value, lambda: self._derive_prr(bloom()))
        logger.debug("PRR cache %s", "hit" if hit else "miss")
        return prr

    def permanent_response(self, value: SignalValue) -> int:
        """Return the PRR of ``value``, deriving and caching it on first use."""
        return self._cached_prr(value, lambda: self._signal(value))

    def encode(self, value: SignalValue) -> int:
        """
        Encode a value with RAPPOR.

        Args:
          value: the string (or bytes) that should be privately transmitted.

        Returns:
          The PRR for ONE_TIME modes, otherwise the IRR.
        """
        prr = self.permanent_response(value)
        if self.mode.is_one_time:
            return prr
        return self._irr(prr)

    def encode_bits(self, bloom: int) -> int:
        """
        Encode an already-formed bloom value, bypassing signal stage and cache.

        Returns the PRR for ONE_TIME modes, otherwise the IRR.
        """
        prr = self._derive_prr(bloom)
        if self.mode.is_one_time:
            return prr
        return self._irr(prr)

    def encode_report(self, value: SignalValue) -> EncodedReport:
        """
        Return bloom value, PRR and IRR of ``value`` for simulation and testing.

        The bloom value and PRR must never be sent over the network. For
        ONE_TIME modes the reported ``irr`` equals the PRR.
        """
        # signaller 每次上报只调用一次，未命中时 PRR 由同一 bloom 值推导
        bloom = self._signal(value)
        prr = self._cached_prr(value, lambda: bloom)
        irr = prr if self.mode.is_one_time else self._irr(prr)
        return EncodedReport(
            cohort=self._client.cohort,
            width=self.config.bloom_bits,
            bloom=bloom,
            prr=prr,
            irr=irr,
        )

    def get_metadata(self) -> Dict[str, Any]:
        """Configuration snapshot without the secret."""
        return {
            "mode": self.mode.value,
            "config": self.config.to_dict(),
            "client": self._client.to_dict(),
            "signaller": dict(self._signaller.get_metadata()),
            "random_source": type(self.random_source).__name__,
            "cache_size": len(self.cache),
        }
