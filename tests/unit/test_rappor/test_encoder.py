"""
Unit tests for the RAPPOR client encoder.
"""
# 说明：RapporEncoder 编排与模式状态机的单元测试。
# 覆盖：
# - STANDARD 模式完整编码参考向量
# - BASIC 系列模式缺少 signaller 时构造即失败
# - 缓存优先：命中时不再重新推导 PRR
# - ONE-TIME 系列模式输出等于 PRR 且不消耗随机性
# - encode_bits / encode_report / get_metadata，encode_report 每次只调用一次 signaller

import pytest

from wrappor.core.utils.param_validation import ParamValidationError
from wrappor.rappor.cache import InMemoryPRRCache
from wrappor.rappor.encoder import RapporEncoder
from wrappor.rappor.encoders.base import BaseSignaller
from wrappor.rappor.exceptions import ConfigurationError
from wrappor.rappor.mechanisms.prr import compute_prr
from wrappor.rappor.mechanisms.random_source import SecureMaskSource
from wrappor.rappor.types import EncoderConfig, ReportingMode

CONFIG = EncoderConfig(bloom_bits=16, hashes=2, total_cohorts=64, prob_p=0.5, prob_q=0.75, prob_f=0.5)


class ConstantSignaller(BaseSignaller):
    def __init__(self, bloom: int):
        self.bloom = bloom
        self.calls = 0

    def signal(self, value) -> int:
        self.calls += 1
        return self.bloom


def test_full_encoding_pass(fixed_source) -> None:
    encoder = RapporEncoder(CONFIG, 0, "secret", ReportingMode.STANDARD, random_source=fixed_source())
    assert encoder.encode("abc") == 64493


def test_string_mode_and_default_components() -> None:
    encoder = RapporEncoder(CONFIG, 0, "secret", "standard")
    assert encoder.mode is ReportingMode.STANDARD
    assert isinstance(encoder.random_source, SecureMaskSource)
    assert isinstance(encoder.cache, InMemoryPRRCache)
    assert 0 <= encoder.encode("abc") < (1 << 16)


@pytest.mark.parametrize("mode", [ReportingMode.BASIC, ReportingMode.BASIC_ONE_TIME, "BASIC-ONE-TIME"])
def test_basic_modes_require_signaller(mode) -> None:
    with pytest.raises(ConfigurationError):
        RapporEncoder(CONFIG, 0, "secret", mode)


def test_invalid_construction() -> None:
    with pytest.raises(ParamValidationError):
        RapporEncoder(CONFIG, 64, "secret")
    with pytest.raises(ConfigurationError):
        RapporEncoder(CONFIG, 0, "secret", "NEVER")
    with pytest.raises(ConfigurationError):
        RapporEncoder(CONFIG.to_dict(), 0, "secret")  # type: ignore[arg-type]


def test_cache_hit_takes_precedence(fixed_source) -> None:
    # 预先写入缓存的 PRR 在命中路径上被原样复用，不再经过 bloom 与 PRR 推导
    cache = InMemoryPRRCache()
    cache.put("abc", 57576)
    signaller = ConstantSignaller(0)
    encoder = RapporEncoder(
        CONFIG, 0, "other-secret", ReportingMode.BASIC_ONE_TIME, cache=cache, signaller=signaller
    )
    assert encoder.encode("abc") == 57576
    assert signaller.calls == 0

    standard = RapporEncoder(CONFIG, 0, "other-secret", random_source=fixed_source(), cache=cache)
    assert standard.encode("abc") == 64493


def test_zero_prr_is_cached() -> None:
    # f=0 时 PRR 等于 bloom；全零 bloom 得到全零 PRR，第二次编码必须命中缓存
    signaller = ConstantSignaller(0)
    encoder = RapporEncoder(
        EncoderConfig(bloom_bits=16, hashes=2, prob_f=0.0), 0, "secret", "BASIC-ONE-TIME", signaller=signaller
    )
    assert encoder.encode("abc") == 0
    assert encoder.encode("abc") == 0
    assert signaller.calls == 1
    assert encoder.cache.get("abc") == 0


@pytest.mark.parametrize("mode", [ReportingMode.ONE_TIME, ReportingMode.BASIC_ONE_TIME])
def test_one_time_modes_return_prr_without_randomness(mode, fixed_source) -> None:
    source = fixed_source()
    signaller = ConstantSignaller(8256)
    encoder = RapporEncoder(CONFIG, 0, "secret", mode, random_source=source, signaller=signaller)
    assert encoder.encode("abc") == 57576
    assert encoder.encode("abc") == 57576
    assert source.calls == []


def test_standard_mode_draws_fresh_masks_each_report(fixed_source) -> None:
    source = fixed_source()
    encoder = RapporEncoder(CONFIG, 0, "secret", random_source=source)
    encoder.encode("abc")
    encoder.encode("abc")
    assert len(source.calls) == 4
    assert len(encoder.cache) == 1


def test_basic_mode_uses_injected_signaller(fixed_source) -> None:
    signaller = ConstantSignaller(8256)
    encoder = RapporEncoder(CONFIG, 0, "secret", ReportingMode.BASIC, random_source=fixed_source(), signaller=signaller)
    assert encoder.encode("anything") == 64493
    assert encoder.signaller is signaller


def test_encode_bits_bypasses_cache(fixed_source) -> None:
    encoder = RapporEncoder(CONFIG, 0, "secret", random_source=fixed_source())
    assert encoder.encode_bits(8256) == 64493
    assert len(encoder.cache) == 0
    one_time = RapporEncoder(CONFIG, 0, "secret", ReportingMode.ONE_TIME)
    assert one_time.encode_bits(8256) == compute_prr(8256, "secret", 0.5, 16)


def test_encode_report(fixed_source) -> None:
    encoder = RapporEncoder(CONFIG, 0, "secret", random_source=fixed_source())
    report = encoder.encode_report("abc")
    assert (report.bloom, report.prr, report.irr) == (8256, 57576, 64493)
    assert report.cohort == 0 and report.width == 16

    one_time = RapporEncoder(CONFIG, 0, "secret", ReportingMode.ONE_TIME).encode_report("abc")
    assert one_time.irr == one_time.prr == 57576


def test_metadata_hides_secret() -> None:
    encoder = RapporEncoder(CONFIG, 5, "very-secret")
    meta = encoder.get_metadata()
    assert meta["mode"] == "STANDARD"
    assert meta["client"] == {"cohort": 5, "secret": "***"}
    assert meta["signaller"]["type"] == "bloom_filter"
    assert "very-secret" not in repr(meta)


def test_encode_report_signals_once(fixed_source) -> None:
    # 未命中时 PRR 由本次上报的同一 bloom 值推导，命中时同样只调用一次 signaller
    signaller = ConstantSignaller(8256)
    encoder = RapporEncoder(CONFIG, 0, "secret", ReportingMode.BASIC, random_source=fixed_source(), signaller=signaller)
    report = encoder.encode_report("abc")
    assert signaller.calls == 1
    assert (report.bloom, report.prr, report.irr) == (8256, 57576, 64493)
    encoder.encode_report("abc")
    assert signaller.calls == 2
