"""
Shared Hypothesis strategies for property-based testing of the RAPPOR encoder.

Test modules reach them through the session-scoped ``rappor_strategies``
fixture and draw with ``st.data()``.
"""
# 说明：属性测试中共享的 Hypothesis 策略集。
# 职责：
# - 生成合法的 EncoderConfig（位宽、哈希数、队列数与概率均在取值范围内）
# - 生成客户端原始值（文本或字节）与密钥
# - 生成与给定配置匹配的队列编号
# - rappor_strategies：会话级 fixture，将上述策略打包提供给测试模块

from types import SimpleNamespace

import pytest
from hypothesis import strategies as st

from wrappor.rappor.types import EncoderConfig

probabilities = st.floats(min_value=0.0, max_value=1.0, allow_nan=False, allow_infinity=False)


@st.composite
def encoder_configs(draw):
    # 在全部合法范围内组合编码参数
    return EncoderConfig(
        bloom_bits=draw(st.integers(min_value=1, max_value=32)),
        hashes=draw(st.integers(min_value=1, max_value=16)),
        total_cohorts=draw(st.integers(min_value=1, max_value=256)),
        prob_p=draw(probabilities),
        prob_q=draw(probabilities),
        prob_f=draw(probabilities),
    )


@st.composite
def configs_with_cohort(draw):
    config = draw(encoder_configs())
    cohort = draw(st.integers(min_value=0, max_value=config.total_cohorts - 1))
    return config, cohort


values = st.one_of(st.text(max_size=40), st.binary(max_size=40))
secrets_ = st.one_of(st.text(min_size=1, max_size=24), st.binary(min_size=1, max_size=24))


@pytest.fixture(scope="session")
def rappor_strategies():
    # 会话级作用域，与 @given 组合时不会触发 function_scoped_fixture 健康检查
    return SimpleNamespace(
        encoder_configs=encoder_configs,
        configs_with_cohort=configs_with_cohort,
        values=values,
        secrets=secrets_,
    )
