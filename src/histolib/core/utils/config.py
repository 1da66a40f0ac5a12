"""
Runtime configuration utilities.

Centralises the library's tunable options (tolerance multipliers, the
balancer bias, default dtypes) and exposes helpers to read them from
environment variables or update them at runtime.
"""
# 说明：运行时配置管理工具，集中管理库内可调选项，并支持环境变量覆写与运行期更新。
# 职责：
# - RuntimeConfig：封装计数严格校验开关、默认精度/计数 dtype、三处容差倍数、平衡偏置、日志等级等配置项
# - load_from_env(...)：按统一前缀（如 HISTOLIB_）从环境变量加载并解析配置值
# - get_config()：获取全局 RuntimeConfig 单例，作为库级默认配置入口
# - configure(...)：通过关键字参数便捷更新全局配置并返回更新后的实例
# 约定：
# - 布尔类环境变量使用 {"1", "true", "yes"}（大小写不敏感）视为 True
# - 容差倍数为 machine epsilon 的整数倍，数值含义见下方常量
# - 未知配置键在 update(...) 中会触发 AttributeError，避免静默吞错

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Dict

# 取值定位时末断点的容差倍数
INDEX_TOLERANCE_FACTOR = 1
# 平衡算法判断“已对齐目标区间”的容差倍数
BALANCE_TOLERANCE_FACTOR = 1
# 等距判断需吸收多次加法累积的浮点漂移，因此取较大倍数
EQUIDISTANCE_TOLERANCE_FACTOR = 100
# 平衡时删除末箱的偏置：< 1 表示更倾向于保留箱子（1 表示无偏置）
REMOVE_BIN_BIAS = 0.8

_BOOL_KEYS = ("STRICT_COUNTS",)
_INT_KEYS = ("INDEX_TOLERANCE", "BALANCE_TOLERANCE", "EQUIDISTANCE_TOLERANCE", "LOG_ARRAY_THRESHOLD")
_FLOAT_KEYS = ("REMOVE_BIN_BIAS",)
_STR_KEYS = ("DEFAULT_PRECISION", "DEFAULT_COUNT_DTYPE", "LOG_LEVEL")


@dataclass
class RuntimeConfig:
    strict_counts: bool = True
    default_precision: str = "float64"
    default_count_dtype: str = "uint64"
    index_tolerance: int = INDEX_TOLERANCE_FACTOR
    balance_tolerance: int = BALANCE_TOLERANCE_FACTOR
    equidistance_tolerance: int = EQUIDISTANCE_TOLERANCE_FACTOR
    remove_bin_bias: float = REMOVE_BIN_BIAS
    log_level: str = field(default_factory=lambda: os.environ.get("HISTOLIB_LOG_LEVEL", "INFO"))
    log_array_threshold: int = 8
    extra: Dict[str, Any] = field(default_factory=dict)

    def update(self, **kwargs: Any) -> None:
        # 按关键字参数更新当前配置实例，未知字段名将显式报错
        for key, value in kwargs.items():
            if not hasattr(self, key):
                raise AttributeError(f"unknown config option '{key}'")
            setattr(self, key, value)

    def load_from_env(self, prefix: str = "HISTOLIB_") -> None:
        # 从带有指定前缀的环境变量中加载配置，并按字段类型转换后写回实例
        for key in _BOOL_KEYS + _INT_KEYS + _FLOAT_KEYS + _STR_KEYS:
            env_key = f"{prefix}{key}"
            if env_key not in os.environ:
                continue
            raw = os.environ[env_key]
            value: Any
            if key in _BOOL_KEYS:
                value = raw.lower() in {"1", "true", "yes"}
            elif key in _INT_KEYS:
                value = int(raw)
            elif key in _FLOAT_KEYS:
                value = float(raw)
            else:
                value = raw
            setattr(self, key.lower(), value)


# 全局配置单例，用作库内默认的运行时配置
_GLOBAL_CONFIG = RuntimeConfig()


def get_config() -> RuntimeConfig:
    # 返回全局 RuntimeConfig 实例，供调用方读取或在本进程内共享配置
    return _GLOBAL_CONFIG


def configure(**kwargs: Any) -> RuntimeConfig:
    # 以关键字参数更新全局配置，并返回更新后的实例
    _GLOBAL_CONFIG.update(**kwargs)
    return _GLOBAL_CONFIG
