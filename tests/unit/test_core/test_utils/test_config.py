"""
Unit tests for runtime configuration utilities.
"""
# 说明：RuntimeConfig（运行时配置）及全局配置访问辅助函数的单元测试。
# 覆盖：
# - configure(...)：通过关键字参数更新全局配置实例字段
# - RuntimeConfig.load_from_env(...)：从 WRAPPOR_ 前缀环境变量加载并覆写配置选项
# - 未知配置项（包括不存在的校验开关）触发 AttributeError

import pytest

from wrappor.core.utils import RuntimeConfig, configure, get_config


def test_configure_updates_values() -> None:
    # 验证 configure(...) 能正确更新全局配置的字段值
    cfg = configure(mask_sensitive_fields=False, mask_resolution=128)
    assert cfg.mask_sensitive_fields is False
    assert cfg.mask_resolution == 128
    assert get_config() is cfg


def test_runtime_config_env_override(monkeypatch) -> None:
    # 验证 RuntimeConfig.load_from_env(...) 按环境变量覆写默认配置并完成类型转换
    cfg = RuntimeConfig()
    monkeypatch.setenv("WRAPPOR_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("WRAPPOR_MASK_SENSITIVE_FIELDS", "no")
    monkeypatch.setenv("WRAPPOR_RNG_SEED", "17")
    monkeypatch.setenv("WRAPPOR_MASK_RESOLUTION", "1024")
    cfg.load_from_env()
    assert cfg.log_level == "DEBUG"
    assert cfg.mask_sensitive_fields is False
    assert cfg.rng_seed == 17
    assert cfg.mask_resolution == 1024


@pytest.mark.parametrize("option", ["no_such_option", "strict_validation"])
def test_unknown_option_rejected(option) -> None:
    # 参数校验始终开启，不提供可关闭它的配置项
    with pytest.raises(AttributeError):
        configure(**{option: False})
