"""
One-dimensional histogram aggregate.

Responsibilities
  - Resolve range and breaks from data, an explicit range or explicit breaks.
  - Map values onto bins (half-open bins, the last one closed on both ends).
  - Fill counts from data and expose checked count mutators.
  - Offer a read-only query surface for collaborators (printing, saving,
    plotting) that only consume breaks, counts and bin centers.

Usage Context
  - ``Histogram(data)`` bins ``data`` over ``(min, max)`` with Scott's rule.
  - ``Histogram(data, value_range=(lo, hi))`` uses Scott's rule over a fixed
    range; the data only feeds the variance.
  - ``Histogram(data, breaks=edges)`` uses the breaks verbatim.

Limitations
  - Samples are not retained, only their counts.
  - Not thread-safe: guard mixed reads and writes with an external lock.
"""
# 说明：一维直方图聚合对象，持有区间、断点、箱数、计数与可选名称。
# 职责：
# - 构造：三种路径（仅数据 / 数据 + 固定区间 / 数据 + 显式断点）最终都归结为
#   “确定区间 -> 确定断点 -> 计数清零 -> 用数据填充计数”
# - index_from_value：二分查找值所在箱；末箱右端闭合，末断点附近允许 index_tolerance 倍容差
# - fill_counts：逐样本计数；遇到越界或计数溢出的样本即抛错，此前已计入的样本不回滚
# - increase / decrease / set_count：带上下界检查的计数修改（委托给 Counts）
# - compute_bin_centers / mean / normalized_by_area / describe：只读派生查询

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, Mapping, Optional, Tuple

import numpy as np

from ..breaks.generators import as_breaks
from ..breaks.methods import BreaksMethod, calculate_breaks
from ..errors import InvalidInputError, OutOfRangeError
from ..utils.config import RuntimeConfig, get_config
from ..utils.logging import get_logger
from ..utils.math_utils import ArrayLike, tolerance
from ..utils.param_validation import ensure, ensure_dtype, ensure_type
from . import operations
from .counts import Counts

logger = get_logger(__name__)

RangeType = Tuple[Any, Any]


@dataclass(frozen=True)
class HistogramInfo:
    """Lightweight descriptor used for logging and inspection."""

    name: str
    bins: int
    range: RangeType
    total: Any
    precision: str
    count_dtype: str
    metadata: Mapping[str, Any] = field(default_factory=dict)


class Histogram:
    """Histogram with breaks of a floating ``precision`` and counts of ``count_dtype``."""

    def __init__(
        self,
        data: ArrayLike = (),
        *,
        value_range: Optional[RangeType] = None,
        breaks: Optional[ArrayLike] = None,
        method: "str | BreaksMethod" = BreaksMethod.SCOTT,
        name: str = "",
        precision: Any = None,
        count_dtype: Any = None,
        config: Optional[RuntimeConfig] = None,
    ):
        self._config = config or get_config()
        if precision is None:
            precision = self._config.default_precision
        if count_dtype is None:
            count_dtype = self._config.default_count_dtype
        self._precision = ensure_dtype(precision, "f", label="precision")
        count_kind = ensure_dtype(count_dtype, "uif", label="count dtype")
        ensure_type(name, (str,), label="name")
        self.name = name
        samples = self._as_samples(data)

        if breaks is not None:
            ensure(value_range is None, "pass either value_range or breaks, not both")
            resolved = as_breaks(breaks, precision=self._precision)
            low, high = resolved[0], resolved[-1]
        else:
            if value_range is None:
                if samples.size == 0:
                    raise InvalidInputError("cannot derive a range from empty data")
                low, high = samples.min(), samples.max()
            else:
                low, high = self._as_range(value_range)
            resolved = calculate_breaks(samples, (low, high), method, precision=self._precision, config=self._config)

        self._init_state(resolved, (low, high), Counts(resolved.size - 1, dtype=count_kind))
        self.fill_counts(samples)
        logger.debug(
            "Built histogram %r: %d bins over (%s, %s), %s samples",
            self.name,
            self.bins,
            self._range[0],
            self._range[1],
            samples.size,
        )

    def _init_state(self, breaks: np.ndarray, value_range: RangeType, counts: Counts) -> None:
        self._breaks = breaks
        self._range = (value_range[0], value_range[1])
        self._counts = counts

    # ------------------------------------------------------------------ alternative constructors
    @classmethod
    def from_breaks(cls, breaks: ArrayLike, data: ArrayLike = (), **kwargs: Any) -> "Histogram":
        """Histogram over explicit ``breaks``, optionally filled with ``data``."""
        return cls(data, breaks=breaks, **kwargs)

    @classmethod
    def from_counts(
        cls,
        breaks: ArrayLike,
        counts: ArrayLike,
        *,
        name: str = "",
        precision: Any = None,
        count_dtype: Any = None,
        config: Optional[RuntimeConfig] = None,
    ) -> "Histogram":
        """Histogram over explicit ``breaks`` holding precomputed ``counts``."""
        cfg = config or get_config()
        obj = cls.__new__(cls)
        obj._config = cfg
        if precision is None:
            precision = cfg.default_precision
        if count_dtype is None:
            count_dtype = cfg.default_count_dtype
        obj._precision = ensure_dtype(precision, "f", label="precision")
        ensure_type(name, (str,), label="name")
        obj.name = name
        resolved = as_breaks(breaks, precision=obj._precision)
        values = Counts(dtype=count_dtype, values=counts)
        if len(values) != resolved.size - 1:
            raise InvalidInputError(f"{len(values)} counts do not match {resolved.size - 1} bins")
        obj._init_state(resolved, (resolved[0], resolved[-1]), values)
        return obj

    # ------------------------------------------------------------------ helpers
    def _as_samples(self, data: ArrayLike) -> np.ndarray:
        try:
            samples = np.asarray(data, dtype=self._precision).ravel()
        except (TypeError, ValueError) as exc:
            raise InvalidInputError(f"data is not numeric: {exc}") from exc
        if np.isnan(samples).any():
            raise InvalidInputError("data contains NaN samples")
        return samples

    def _as_range(self, value_range: RangeType) -> RangeType:
        try:
            low, high = value_range
        except (TypeError, ValueError) as exc:
            raise InvalidInputError(f"range must be a (low, high) pair, got {value_range!r}") from exc
        low, high = self._precision.type(low), self._precision.type(high)
        if low > high:
            raise InvalidInputError(f"range low ({low}) exceeds high ({high})")
        return low, high

    def _upper_tolerance(self) -> Any:
        last = self._breaks[-1]
        return tolerance(self._config.index_tolerance, reference=last, dtype=self._precision)

    # ------------------------------------------------------------------ read accessors
    @property
    def range(self) -> RangeType:
        return self._range

    @property
    def breaks(self) -> np.ndarray:
        """Read-only view of the edges."""
        view = self._breaks.view()
        view.flags.writeable = False
        return view

    @property
    def bins(self) -> int:
        return int(self._breaks.size - 1)

    @property
    def counts(self) -> Counts:
        return self._counts

    @property
    def config(self) -> RuntimeConfig:
        return self._config

    @property
    def precision(self) -> np.dtype:
        return self._precision

    @property
    def count_dtype(self) -> np.dtype:
        return self._counts.dtype

    def __repr__(self) -> str:
        label = f"{self.name!r}, " if self.name else ""
        return f"Histogram({label}bins={self.bins}, range=({self._range[0]}, {self._range[1]}))"

    # ------------------------------------------------------------------ lookup
    def index_from_value(self, value: Any) -> int:
        """Return the index of the bin holding ``value``.

        Bins are ``[breaks[i], breaks[i+1])`` except the last, which also
        holds ``breaks[-1]``. Raises ``OutOfRangeError`` outside the breaks.
        """
        try:
            v = self._precision.type(value)
        except (TypeError, ValueError) as exc:
            raise InvalidInputError(f"value {value!r} is not numeric") from exc
        lo, hi = 0, self.bins
        breaks = self._breaks
        inside = v >= breaks[lo] and (v < breaks[hi] or abs(v - breaks[hi]) <= self._upper_tolerance())
        if not inside:
            raise OutOfRangeError(f"index_from_value: {value} is out of bounds [{breaks[0]}, {breaks[-1]}]")
        while hi - lo >= 2:
            mid = (hi + lo) // 2
            if v >= breaks[mid]:
                lo = mid
            else:
                hi = mid
        return lo

    def _indices_from_values(self, samples: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        # 向量化版本，与 index_from_value 语义一致：返回 (索引, 是否在区间内)
        breaks = self._breaks
        inside = (samples >= breaks[0]) & (
            (samples < breaks[-1]) | (np.abs(samples - breaks[-1]) <= self._upper_tolerance())
        )
        indices = np.searchsorted(breaks, samples, side="right") - 1
        return np.clip(indices, 0, self.bins - 1), inside

    # ------------------------------------------------------------------ counts
    def reset_counts(self) -> Counts:
        """Resize counts to ``bins`` and set them to zero."""
        self._counts.reset(self.bins)
        return self._counts

    def fill_counts(self, data: ArrayLike) -> Counts:
        """Add one count per sample of ``data``.

        Stops at the first sample outside the breaks and raises
        ``OutOfRangeError``, or at the first sample whose bin is already at
        ``max_count`` and raises ``CountOverflowError``. Samples before the
        stopping one stay counted.
        """
        samples = self._as_samples(data)
        if samples.size == 0:
            return self._counts
        indices, inside = self._indices_from_values(samples)
        outside = np.flatnonzero(~inside)
        stop = int(outside[0]) if outside.size else samples.size
        self._counts.add_indices(indices[:stop])
        if outside.size:
            logger.debug("fill_counts stopped at sample %d of %d", stop, samples.size)
            # 复用标量查找生成一致的错误信息
            self.index_from_value(samples[stop])
        return self._counts

    def increase(self, index: int) -> None:
        self._counts.increase(index)

    def decrease(self, index: int) -> None:
        self._counts.decrease(index)

    def set_count(self, index: int, value: Any, *, strict: Optional[bool] = None) -> None:
        """Set a count; ``strict`` defaults to ``RuntimeConfig.strict_counts``."""
        if strict is None:
            strict = self._config.strict_counts
        self._counts.set(index, value, strict=strict)

    # ------------------------------------------------------------------ derived queries
    def compute_bin_centers(self) -> np.ndarray:
        breaks = self._breaks
        return breaks[:-1] + (breaks[1:] - breaks[:-1]) / self._precision.type(2)

    def bin_widths(self) -> np.ndarray:
        return np.diff(self._breaks)

    def iter_centers_and_counts(self) -> Iterator[Tuple[Any, Any]]:
        """Yield ``(center, count)`` pairs in bin order."""
        return zip(self.compute_bin_centers(), self._counts.values)

    def mean(self) -> float:
        return operations.mean(self)

    def normalized_by_area(self) -> "Histogram":
        return operations.normalize_by_area(self)

    def describe(self) -> HistogramInfo:
        return HistogramInfo(
            name=self.name,
            bins=self.bins,
            range=self._range,
            total=self._counts.total(),
            precision=str(self._precision),
            count_dtype=str(self._counts.dtype),
            metadata={"max_count": self._counts.max_count},
        )
