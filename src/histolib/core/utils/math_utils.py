"""
Numerical utilities shared across the library.

Responsibilities
  - One-pass (Welford) variance used by the bandwidth rules.
  - Epsilon-tolerant floating point equality used by the balancer and the
    value-to-bin lookup.
  - Representable bounds of count dtypes used by the count mutators.

Usage Context
  - Intended for small helpers reused by the breaks and histogram modules.

Limitations
  - ``variance_welford`` does not guard against fewer than two samples;
    callers needing a meaningful variance must provide at least two.
"""
# 说明：库内共享的数值工具函数集合。
# 职责：
# - variance_welford：Welford 在线算法单遍计算样本方差（除数为 max(N-1, 0)）
# - machine_epsilon / tolerance / approx_equal：基于机器精度倍数的浮点近似相等判断
# - count_limits：计数 dtype 可表示的上下界（整数用 iinfo，浮点用 finfo，下界恒为 0）
# 约定：
# - 容差按参考值量级缩放：factor * eps * max(1, |reference|)，量级 <= 1 时与纯 eps 倍数一致

from __future__ import annotations

from typing import Any, Iterable, Optional, Sequence, Tuple, Union

import numpy as np

ArrayLike = Union[Sequence[float], np.ndarray]


def _floating_dtype(*values: Any) -> np.dtype:
    # 推断参与比较的浮点 dtype；整数输入按 float64 处理
    dtype = np.result_type(*values)
    if dtype.kind != "f":
        return np.dtype(np.float64)
    return dtype


def variance_welford(samples: Iterable[Any], dtype: Any = np.float64) -> Any:
    """Return the sample variance of ``samples`` using Welford's algorithm.

    The accumulation happens in ``dtype``. The divisor is ``max(N - 1, 0)``,
    so fewer than two samples yield ``nan`` or ``inf`` instead of raising.
    """
    cast = np.dtype(dtype).type
    count = 0
    mean_val = cast(0)
    m2 = cast(0)
    for value in samples:
        count += 1
        x = cast(value)
        delta = x - mean_val
        mean_val += delta / cast(count)
        m2 += delta * (x - mean_val)
    with np.errstate(divide="ignore", invalid="ignore"):
        return m2 / cast(max(count - 1, 0))


def machine_epsilon(dtype: Any = np.float64) -> Any:
    """Return the machine epsilon of a floating ``dtype``."""
    return np.finfo(dtype).eps


def tolerance(factor: float = 1, *, reference: Any = 1.0, dtype: Any = np.float64) -> Any:
    """Absolute tolerance ``factor * eps * max(1, |reference|)``."""
    eps = machine_epsilon(dtype)
    scale = max(np.dtype(dtype).type(1), abs(np.dtype(dtype).type(reference)))
    return factor * eps * scale


def approx_equal(a: Any, b: Any, tolerance_factor: float = 1, *, reference: Any = 1.0, dtype: Optional[Any] = None) -> bool:
    """Return True when ``|a - b|`` is within ``tolerance_factor`` epsilons.

    ``reference`` sets the magnitude the epsilon is scaled by; the default
    keeps the plain ``|a - b| <= factor * eps`` rule.
    """
    resolved = np.dtype(dtype) if dtype is not None else _floating_dtype(a, b)
    cast = resolved.type
    diff = abs(cast(a) - cast(b))
    return bool(diff <= tolerance(tolerance_factor, reference=reference, dtype=resolved))


def count_limits(dtype: Any) -> Tuple[Any, Any]:
    """Return the ``(lowest, highest)`` count representable by ``dtype``."""
    resolved = np.dtype(dtype)
    if resolved.kind in "ui":
        return 0, int(np.iinfo(resolved).max)
    return resolved.type(0), np.finfo(resolved).max
