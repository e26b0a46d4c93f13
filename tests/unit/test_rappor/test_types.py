"""
Unit tests for RAPPOR configuration and context types.
"""
# 说明：EncoderConfig / ClientContext / ReportingMode / EncodedReport 的单元测试。
# 覆盖：
# - EncoderConfig 构造期范围校验（位宽、哈希数、队列数、概率）
# - JSON / dict / CSV 参数文件的导入导出
# - ReportingMode 的解析与分类属性
# - ClientContext 的队列范围校验与密钥掩码

import io
import json

import pytest

from wrappor.core.utils.param_validation import ParamValidationError
from wrappor.rappor.exceptions import ConfigurationError
from wrappor.rappor.types import ClientContext, EncodedReport, EncoderConfig, ReportingMode


@pytest.mark.parametrize(
    "kwargs",
    [
        {"bloom_bits": 0},
        {"bloom_bits": 33},
        {"hashes": 0},
        {"hashes": 17},
        {"total_cohorts": 0},
        {"prob_p": -0.1},
        {"prob_q": 1.01},
        {"prob_f": 2.0},
    ],
)
def test_encoder_config_rejects_out_of_range(kwargs) -> None:
    with pytest.raises(ParamValidationError):
        EncoderConfig(**kwargs)


def test_encoder_config_boundaries_accepted() -> None:
    cfg = EncoderConfig(bloom_bits=32, hashes=16, total_cohorts=1, prob_p=0, prob_q=1, prob_f=0)
    assert cfg.prob_q == 1.0 and isinstance(cfg.prob_q, float)
    with pytest.raises(Exception):
        cfg.bloom_bits = 8  # type: ignore[misc]


def test_encoder_config_json_uses_server_names() -> None:
    cfg = EncoderConfig()
    data = json.loads(cfg.to_json())
    assert data == {
        "numBits": 16,
        "numHashes": 2,
        "numCohorts": 64,
        "probPrr": 0.5,
        "probIrr0": 0.5,
        "probIrr1": 0.75,
    }
    assert EncoderConfig.from_json(cfg.to_json()) == cfg
    with pytest.raises(ConfigurationError):
        EncoderConfig.from_json('{"numBits": 16}')


def test_encoder_config_dict_roundtrip() -> None:
    cfg = EncoderConfig(bloom_bits=8, hashes=3, total_cohorts=4, prob_p=0.1, prob_q=0.9, prob_f=0.25)
    assert EncoderConfig.from_dict(cfg.to_dict()) == cfg
    with pytest.raises(ParamValidationError):
        EncoderConfig.from_dict({"bloom_bits": 8, "colour": "red"})


def test_encoder_config_from_csv() -> None:
    cfg = EncoderConfig.from_csv(io.StringIO("k,h,m,p,q,f\n32,4,128,0.25,0.75,0.5\n"))
    assert cfg == EncoderConfig(bloom_bits=32, hashes=4, total_cohorts=128, prob_p=0.25, prob_q=0.75, prob_f=0.5)


@pytest.mark.parametrize(
    "text",
    [
        "a,b,c\n1,2,3\n",
        "k,h,m,p,q,f\n",
        "k,h,m,p,q,f\n16,2\n",
        "k,h,m,p,q,f\n16,2,64,0.5,0.75,0.5\n16,2,64,0.5,0.75,0.5\n",
    ],
)
def test_encoder_config_from_csv_malformed(text) -> None:
    with pytest.raises(ConfigurationError):
        EncoderConfig.from_csv(io.StringIO(text))


def test_reporting_mode_parse() -> None:
    assert ReportingMode.parse("ONE-TIME") is ReportingMode.ONE_TIME
    assert ReportingMode.parse("basic_one_time") is ReportingMode.BASIC_ONE_TIME
    assert ReportingMode.parse(ReportingMode.BASIC) is ReportingMode.BASIC
    with pytest.raises(ConfigurationError):
        ReportingMode.parse("SOMETIMES")
    assert ReportingMode.BASIC_ONE_TIME.is_basic and ReportingMode.BASIC_ONE_TIME.is_one_time
    assert not ReportingMode.STANDARD.is_basic and not ReportingMode.STANDARD.is_one_time


def test_client_context_validation_and_masking() -> None:
    ctx = ClientContext(cohort=3, secret="s3cr3t")
    assert ctx.validate(EncoderConfig(total_cohorts=4)) is ctx
    with pytest.raises(ParamValidationError):
        ctx.validate(EncoderConfig(total_cohorts=3))
    with pytest.raises(ParamValidationError):
        ClientContext(cohort=-1, secret="x")
    assert "s3cr3t" not in repr(ctx)
    assert ctx.to_dict() == {"cohort": 3, "secret": "***"}


def test_encoded_report_bit_strings() -> None:
    report = EncodedReport(cohort=0, width=16, bloom=8256, prr=57576, irr=64493)
    assert report.to_dict() == {
        "cohort": 0,
        "bloom": "0010000001000000",
        "prr": "1110000011101000",
        "irr": "1111101111101101",
    }
