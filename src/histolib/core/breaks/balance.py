"""
Balancing of equidistant breaks onto a target range.

A bandwidth rule produces equidistant breaks whose last edge rarely lands on
the requested upper bound. ``balance_to_range`` translates the sequence so
the first edge sits on the lower bound, then either drops the last bin,
appends bins at the current width, or rescales the widths so the last edge
sits on the upper bound.

Responsibilities
  - Reject breaks that are not equidistant.
  - Keep the output strictly increasing and pinned to the target range.

Limitations
  - The output stays equidistant only up to floating point rounding.
"""
# 说明：将等距断点平衡到目标区间 [low, high] 的核心算法。
# 步骤：
# 1. 非等距输入直接报错（InvalidInputError）
# 2. 首尾偏差均为零：无需调整（changed=False）
# 3. 首断点偏差非零：整体平移，使首断点落在 low
# 4. 末断点偏差为零：结束
# 5. 若删除末箱显著更优（受 remove_bin_bias 偏置约束），删除末断点并按索引比例拉伸
# 6. 末断点仍未到达 high：按当前宽度逐箱追加，直到达到或越过 high
# 7. 末断点越过 high：按索引比例整体收缩，使末断点落在 high
# 最后将首尾断点钉在目标值上，并校验结果严格递增。

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Tuple

import numpy as np

from ..errors import InvalidInputError
from ..utils.config import RuntimeConfig, get_config
from ..utils.logging import get_logger
from ..utils.math_utils import ArrayLike, approx_equal
from .generators import are_equidistant, is_monotonically_increasing

logger = get_logger(__name__)


@dataclass(frozen=True)
class BalanceResult:
    """Outcome of ``balance_to_range``."""
    # breaks：平衡后的断点；changed=False 表示输入已与目标区间对齐

    breaks: np.ndarray
    changed: bool
    bins_before: int
    bins_after: int

    @property
    def bins(self) -> int:
        return self.bins_after


def _scale_by_index(edges: np.ndarray, step: Any) -> np.ndarray:
    # 第 i 个断点平移 i * step：首断点不动，末断点平移 n * step
    return edges + np.arange(edges.size, dtype=edges.dtype) * step


def balance_to_range(
    breaks: ArrayLike,
    target_range: Tuple[float, float],
    *,
    config: Optional[RuntimeConfig] = None,
) -> BalanceResult:
    """Adjust equidistant ``breaks`` so they span exactly ``target_range``.

    The input is not modified. The number of bins of the result may differ
    from the input. Raises ``InvalidInputError`` when the breaks are not
    equidistant or the target range is empty or inverted.
    """
    cfg = config or get_config()
    edges = np.array(breaks)
    if edges.dtype.kind != "f":
        edges = edges.astype(np.float64)
    if edges.ndim != 1 or edges.size < 2:
        raise InvalidInputError("balancing requires at least two breaks")
    dtype = edges.dtype
    low, high = dtype.type(target_range[0]), dtype.type(target_range[1])
    if not low < high:
        raise InvalidInputError(f"target range ({low}, {high}) must satisfy low < high")
    if not are_equidistant(edges, cfg.equidistance_tolerance):
        raise InvalidInputError(f"cannot balance non-equidistant breaks: {edges}")
    if not edges[1] > edges[0]:
        raise InvalidInputError("cannot balance breaks with non-positive width")

    reference = max(abs(low), abs(high))

    def is_zero(diff: Any) -> bool:
        return approx_equal(diff, 0, cfg.balance_tolerance, reference=reference, dtype=dtype)

    bins_before = edges.size - 1
    # diff_low > 0：首断点未到达 low；diff_high < 0：末断点未到达 high
    diff_low = edges[0] - low
    diff_high = edges[-1] - high
    if is_zero(diff_low) and is_zero(diff_high):
        logger.debug("Breaks already balanced to (%s, %s)", low, high)
        return BalanceResult(_pin(edges, low, high), False, bins_before, bins_before)

    if not is_zero(diff_low):
        edges = edges - diff_low
        logger.debug("Shifted breaks by %s", -diff_low)
    diff_high = edges[-1] - high

    if not is_zero(diff_high):
        edges = _settle_upper_edge(edges, high, diff_high, is_zero, cfg.remove_bin_bias)

    result = _pin(edges, low, high)
    if not is_monotonically_increasing(result):
        raise InvalidInputError(f"balancing produced non-monotonic breaks: {result}")
    logger.debug("Balanced breaks to (%s, %s): %d -> %d bins", low, high, bins_before, result.size - 1)
    return BalanceResult(result, True, bins_before, result.size - 1)


def _settle_upper_edge(edges: np.ndarray, high: Any, diff_high: Any, is_zero, bias: float) -> np.ndarray:
    # 首断点已对齐，只处理末断点：删除末箱 / 追加箱 / 比例收缩
    nbins = edges.size - 1
    if nbins > 1:
        diff_before = edges[-2] - high
        # 倒数第二个断点更接近 high（且在其左侧）时，删除末箱并拉伸剩余箱
        if diff_before < 0 < diff_high and abs(diff_before) < bias * abs(diff_high):
            edges = edges[:-1]
            nbins -= 1
            edges = _scale_by_index(edges, -diff_before / edges.dtype.type(nbins))
            logger.debug("Removed last bin and expanded remaining %d bins", nbins)
            # 拉伸后末断点在解析意义上恰为 high，舍入误差由 _pin 消除
            return edges

    if diff_high < 0:
        width = edges[1] - edges[0]
        extra = []
        last = edges[-1]
        # 迭代次数有界：ceil(|diff_high| / width)
        while last < high:
            nbins += 1
            last = edges[0] + edges.dtype.type(nbins) * width
            extra.append(last)
        edges = np.concatenate([edges, np.asarray(extra, dtype=edges.dtype)])
        logger.debug("Appended %d bins of width %s", len(extra), width)
        diff_high = edges[-1] - high
        if is_zero(diff_high):
            return edges

    if diff_high > 0:
        edges = _scale_by_index(edges, -diff_high / edges.dtype.type(nbins))
        logger.debug("Shrank %d bins by %s each", nbins, diff_high / nbins)
    return edges


def _pin(edges: np.ndarray, low: Any, high: Any) -> np.ndarray:
    pinned = edges.copy()
    pinned[0] = low
    pinned[-1] = high
    return pinned
