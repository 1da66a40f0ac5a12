"""
Breaks generators and breaks validation predicates.

Responsibilities
  - Build an edge sequence from (low, high, bin count) or (low, high, width).
  - Check the two structural properties every breaks sequence relies on:
    strict monotonicity and equidistance.

Usage Context
  - Use the generators to force breaks where you want them, e.g. integer
    data in ``[0, 10]`` gets integer bin centers with
    ``breaks_from_range_and_bins(-0.5, 10.5, 11)``.

Limitations
  - Generators never balance: the width variant may overshoot ``high``.
"""
# 说明：断点（breaks）生成器与断点结构校验谓词。
# 职责：
# - breaks_from_range_and_bins：按区间与箱数生成 bins+1 个等距断点，首尾恰为 low/high
# - breaks_from_range_and_width：从 low 开始按固定宽度步进，直到断点 >= high + width 为止（不含）
# - is_monotonically_increasing：严格递增校验，显式断点构造直方图前使用
# - are_equidistant：等距校验（容差为 machine epsilon 的倍数），平衡算法的前置条件

from __future__ import annotations

from typing import Any

import numpy as np

from ..errors import InvalidInputError
from ..utils.config import EQUIDISTANCE_TOLERANCE_FACTOR
from ..utils.logging import get_logger
from ..utils.math_utils import ArrayLike, tolerance
from ..utils.param_validation import ensure, ensure_dtype, ensure_type

logger = get_logger(__name__)


def breaks_from_range_and_bins(low: float, high: float, bins: int, *, precision: Any = np.float64) -> np.ndarray:
    """Return ``bins + 1`` edges ``low + i * (high - low) / bins``."""
    dtype = ensure_dtype(precision, "f", label="precision")
    ensure_type(bins, (int, np.integer), label="bins")
    ensure(bins >= 1, f"bins must be a positive integer, got {bins!r}")
    low_, high_ = dtype.type(low), dtype.type(high)
    ensure(low_ < high_, f"low ({low}) must be smaller than high ({high})")
    width = (high_ - low_) / dtype.type(bins)
    breaks = low_ + np.arange(bins + 1, dtype=dtype) * width
    logger.debug("Generated %d breaks over [%s, %s] with width %s", bins + 1, low_, high_, width)
    return breaks


def breaks_from_range_and_width(low: float, high: float, width: float, *, precision: Any = np.float64) -> np.ndarray:
    """Return edges from ``low`` in steps of ``width`` while below ``high + width``.

    The first edge equals ``low``; the last one satisfies
    ``high <= breaks[-1] < high + width`` and usually overshoots ``high``.
    """
    dtype = ensure_dtype(precision, "f", label="precision")
    low_, high_, width_ = dtype.type(low), dtype.type(high), dtype.type(width)
    ensure(bool(np.isfinite(width_)) and width_ > 0, f"width must be positive and finite, got {width!r}")
    ensure(low_ <= high_, f"low ({low}) must not exceed high ({high})")
    upper_limit = high_ + width_
    edges = []
    edge = low_
    # 逐次累加（而非 low + i*width），与固定步长的语义保持一致
    while edge < upper_limit:
        edges.append(edge)
        edge = edge + width_
    breaks = np.asarray(edges, dtype=dtype)
    logger.debug("Generated %d breaks from %s with fixed width %s", breaks.size, low_, width_)
    return breaks


def is_monotonically_increasing(breaks: ArrayLike) -> bool:
    """Return True when every edge is strictly greater than the previous one."""
    arr = np.asarray(breaks)
    if arr.ndim != 1 or arr.size < 2:
        return False
    return bool(np.all(np.diff(arr) > 0))


def are_equidistant(breaks: ArrayLike, tolerance_factor: float = EQUIDISTANCE_TOLERANCE_FACTOR) -> bool:
    """Return True when all consecutive differences match the first one.

    The tolerance is ``tolerance_factor`` epsilons scaled by the largest
    edge magnitude, which absorbs the drift accumulated by repeated sums.
    """
    arr = np.asarray(breaks)
    if arr.ndim != 1 or arr.size < 2:
        return False
    if arr.dtype.kind != "f":
        arr = arr.astype(np.float64)
    diffs = np.diff(arr)
    tol = tolerance(tolerance_factor, reference=np.max(np.abs(arr)), dtype=arr.dtype)
    return bool(np.all(np.abs(diffs - diffs[0]) <= tol))


def as_breaks(breaks: ArrayLike, *, precision: Any = np.float64) -> np.ndarray:
    """Convert ``breaks`` to a 1-D array of ``precision``, rejecting non-monotonic input."""
    dtype = ensure_dtype(precision, "f", label="precision")
    try:
        arr = np.array(breaks, dtype=dtype)
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(f"breaks are not numeric: {exc}") from exc
    if arr.ndim != 1 or arr.size < 2:
        raise InvalidInputError("breaks must be a 1-D sequence with at least two edges")
    if not is_monotonically_increasing(arr):
        raise InvalidInputError("input breaks are not monotonically increasing")
    return arr
