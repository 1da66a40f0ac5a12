"""
Bandwidth rules that derive breaks from the data and a target range.

Mirrors the registry style used elsewhere: a closed enum of rule
identifiers, a mapping from identifier to implementation, and a single
dispatch point (``calculate_breaks``). New rules only need an enum member
and a registry entry; the balancer and the histogram stay untouched.
"""
# 说明：基于数据与目标区间自动计算断点的分箱规则（bandwidth rule）及统一分派入口。
# 职责：
# - BreaksMethod：封闭的规则枚举（当前仅 Scott），支持字符串规范化
# - scott_breaks：width = 3.5 * sigma / cbrt(N)，bins = ceil(跨度 / width)，生成等距断点后交给平衡算法
# - BREAKS_METHOD_REGISTRY / calculate_breaks：按枚举查找规则实现并调用

from __future__ import annotations

import enum
from typing import Any, Callable, Dict, Optional, Tuple

import numpy as np

from ..errors import InvalidInputError
from ..utils.config import RuntimeConfig, get_config
from ..utils.logging import get_logger
from ..utils.math_utils import ArrayLike, variance_welford
from ..utils.param_validation import ensure_dtype
from .balance import balance_to_range

logger = get_logger(__name__)

RangeType = Tuple[float, float]


class BreaksMethod(enum.Enum):
    """Supported bandwidth rules."""

    SCOTT = "scott"

    @classmethod
    def from_str(cls, name: str) -> "BreaksMethod":
        # 从字符串构造规则类型，对大小写与空格做轻量规范化处理
        normalized = str(name).strip().lower().replace(" ", "_")
        try:
            return cls(normalized)
        except ValueError as exc:
            raise InvalidInputError(f"unknown breaks method '{name}'") from exc


def normalize_method(method: "str | BreaksMethod") -> BreaksMethod:
    """Coerce string or enum to BreaksMethod, raising on unknown identifiers."""
    if isinstance(method, BreaksMethod):
        return method
    if isinstance(method, str):
        return BreaksMethod.from_str(method)
    raise InvalidInputError(f"unsupported breaks method {method!r}")


def scott_breaks(
    data: ArrayLike,
    target_range: RangeType,
    *,
    precision: Any = np.float64,
    config: Optional[RuntimeConfig] = None,
) -> np.ndarray:
    """Scott's rule: ``width = 3.5 * sqrt(var) / cbrt(n)``, then balance to ``target_range``.

    Requires at least two samples and a non-empty range.
    """
    dtype = ensure_dtype(precision, "f", label="precision")
    samples = np.asarray(data, dtype=dtype).ravel()
    if samples.size < 2:
        raise InvalidInputError(f"Scott's rule needs at least two samples, got {samples.size}")
    low, high = dtype.type(target_range[0]), dtype.type(target_range[1])
    if not low < high:
        raise InvalidInputError(f"range ({low}, {high}) must satisfy low < high for a bandwidth rule")

    sigma2 = variance_welford(samples, dtype=dtype)
    width = dtype.type(3.5) * np.sqrt(sigma2) / np.cbrt(dtype.type(samples.size))
    if not (np.isfinite(width) and width > 0):
        raise InvalidInputError(f"Scott's rule produced a non-positive bin width ({width})")
    bins = int(np.ceil((high - low) / width))
    logger.debug("Scott width %s over (%s, %s): %d raw bins", width, low, high, bins)

    raw = low + np.arange(bins + 1, dtype=dtype) * width
    return balance_to_range(raw, (low, high), config=config).breaks


BreaksRule = Callable[..., np.ndarray]

# 集中维护规则枚举到具体实现函数的映射表
BREAKS_METHOD_REGISTRY: Dict[BreaksMethod, BreaksRule] = {
    BreaksMethod.SCOTT: scott_breaks,
}


def calculate_breaks(
    data: ArrayLike,
    target_range: RangeType,
    method: "str | BreaksMethod" = BreaksMethod.SCOTT,
    *,
    precision: Any = np.float64,
    config: Optional[RuntimeConfig] = None,
) -> np.ndarray:
    """Dispatch to the bandwidth rule registered for ``method``."""
    rule = BREAKS_METHOD_REGISTRY.get(normalize_method(method))
    if rule is None:
        raise InvalidInputError(f"breaks method '{method}' not registered")
    return rule(data, target_range, precision=precision, config=config)
