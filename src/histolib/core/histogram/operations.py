"""
Derived quantities computed from a histogram's public fields.
"""
# 说明：基于直方图公开字段（断点、计数、箱中心）计算派生量。
# 职责：
# - mean：箱中心与计数的内积再除以箱数（注意：除数是箱数而非样本总数，保留原有行为）
# - normalize_by_area：按总面积 Σ count[i] * width[i] 归一化，返回计数为浮点、沿用原配置的新直方图

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from ..errors import InvalidInputError

if TYPE_CHECKING:  # pragma: no cover
    from .histogram import Histogram


def mean(histogram: "Histogram") -> float:
    """Inner product of bin centers and counts divided by the number of bins.

    The divisor is ``bins``, not the number of samples.
    """
    centers = histogram.compute_bin_centers()
    counts = histogram.counts.values.astype(np.float64)
    return float(np.dot(centers.astype(np.float64), counts) / histogram.bins)


def normalize_by_area(histogram: "Histogram") -> "Histogram":
    """Return a copy whose counts are divided by the total area.

    The copy shares the breaks and stores counts in the histogram's
    floating precision, so ``sum(counts * widths) == 1``.
    """
    widths = np.abs(histogram.bin_widths())
    counts = histogram.counts.values.astype(histogram.precision)
    area = np.sum(counts * widths)
    if not area > 0:
        raise InvalidInputError("cannot normalize a histogram with zero total area")
    return type(histogram).from_counts(
        histogram.breaks,
        counts / area,
        name=histogram.name,
        precision=histogram.precision,
        count_dtype=histogram.precision,
        config=histogram.config,
    )
