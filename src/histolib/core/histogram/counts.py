"""
Per-bin counts with a raw fast path and checked mutators.

``Counts`` wraps a 1-D numpy array. Indexing, assignment and ``values``
give direct, unchecked access (the escape hatch: wrap-around or negative
values are not detected there). ``increase``, ``decrease``, ``set`` and
``add_indices`` check the index and the representable bounds of the count
dtype.
"""
# 说明：直方图计数容器，同时提供“原始快速路径”和“安全修改接口”。
# 职责：
# - 原始路径：__getitem__ / __setitem__ / values，直接读写底层数组，不做任何检查
# - 安全路径：increase / decrease / set / add_indices，检查索引范围与计数 dtype 的上下界
# - reset：按给定箱数重建并清零计数数组

from __future__ import annotations

from typing import Any, Iterator, Optional

import numpy as np

from ..errors import CountOverflowError, CountUnderflowError, InvalidInputError, OutOfRangeError
from ..utils.math_utils import count_limits
from ..utils.param_validation import ensure_dtype

# 计数允许的 dtype 种类：无符号/有符号整数，或（归一化后的）浮点
COUNT_DTYPE_KINDS = "uif"


class Counts:
    """Counts of a histogram, one entry per bin."""

    def __init__(self, size: int = 0, dtype: Any = np.uint64, values: Optional[Any] = None):
        self._dtype = ensure_dtype(dtype, COUNT_DTYPE_KINDS, label="count dtype")
        self._lowest, self._highest = count_limits(self._dtype)
        if values is not None:
            self._values = np.array(values, dtype=self._dtype).ravel()
        else:
            self._values = np.zeros(int(size), dtype=self._dtype)

    # ------------------------------------------------------------------ raw access
    @property
    def values(self) -> np.ndarray:
        """The underlying writable array. Writes through it are unchecked."""
        return self._values

    @property
    def dtype(self) -> np.dtype:
        return self._dtype

    @property
    def max_count(self) -> Any:
        return self._highest

    def __len__(self) -> int:
        return int(self._values.size)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._values)

    def __getitem__(self, index: Any) -> Any:
        return self._values[index]

    def __setitem__(self, index: Any, value: Any) -> None:
        # 不做任何检查：与直接修改底层数组等价
        self._values[index] = value

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Counts):
            other = other.values
        try:
            other_arr = np.asarray(other)
        except (TypeError, ValueError):
            return NotImplemented
        return bool(other_arr.shape == self._values.shape and np.array_equal(other_arr, self._values))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Counts({self._values.tolist()!r}, dtype={self._dtype})"

    def tolist(self) -> list:
        return self._values.tolist()

    def total(self) -> Any:
        """Sum of all counts."""
        if self._dtype.kind in "ui":
            return int(sum(int(v) for v in self._values))
        return self._values.sum()

    # ------------------------------------------------------------------ checked access
    def _check_index(self, index: Any) -> int:
        if isinstance(index, bool) or not isinstance(index, (int, np.integer)):
            raise OutOfRangeError(f"count index must be an integer, got {index!r}")
        if not 0 <= index < self._values.size:
            raise OutOfRangeError(f"index {index} is out of bounds for {self._values.size} bins")
        return int(index)

    def increase(self, index: int) -> None:
        """Add one to the count at ``index``."""
        idx = self._check_index(index)
        if self._values[idx] >= self._highest:
            raise CountOverflowError(
                f"increase exceeds the maximum of {self._dtype}. Index: {idx} Value: {self._values[idx]}"
            )
        self._values[idx] += self._dtype.type(1)

    def decrease(self, index: int) -> None:
        """Subtract one from the count at ``index``."""
        idx = self._check_index(index)
        if self._values[idx] <= self._lowest:
            raise CountUnderflowError(f"decrease would go below zero. Index: {idx} Value: {self._values[idx]}")
        self._values[idx] -= self._dtype.type(1)

    def add_indices(self, indices: np.ndarray) -> None:
        """Add one count per entry of ``indices`` (already valid bin indices).

        When a count would exceed ``max_count``, the entries before the first
        overflowing one are kept and ``CountOverflowError`` is raised.
        """
        indices = np.asarray(indices, dtype=np.intp)
        if indices.size == 0:
            return
        stop = indices.size
        if self._dtype.kind in "ui":
            increments = np.bincount(indices, minlength=self._values.size)
            # 以 Python 整数计算余量，避免有符号 dtype 下 max - 负值 的回绕
            headroom = {int(b): self._highest - int(self._values[b]) for b in np.flatnonzero(increments)}
            full = [b for b, room in headroom.items() if int(increments[b]) > room]
            if full:
                # 每个溢出箱中第 room + 1 次出现的位置；取最早者为截断点
                stop = min(int(np.flatnonzero(indices == b)[headroom[b]]) for b in full)
        np.add.at(self._values, indices[:stop], 1)
        if stop < indices.size:
            idx = int(indices[stop])
            raise CountOverflowError(
                f"fill exceeds the maximum of {self._dtype}. Index: {idx} Value: {self._values[idx]}"
            )

    def _check_value(self, value: Any) -> None:
        # 严格模式下拒绝 NaN，以及整数计数上的非整数值
        try:
            as_float = float(value)
        except (TypeError, ValueError) as exc:
            raise InvalidInputError(f"count value {value!r} is not numeric") from exc
        if np.isnan(as_float):
            raise InvalidInputError("count value must not be NaN")
        if self._dtype.kind in "ui" and not isinstance(value, (int, np.integer)):
            if not (np.isfinite(as_float) and as_float.is_integer()):
                raise InvalidInputError(f"count value {value!r} is not an integer for {self._dtype}")

    def set(self, index: int, value: Any, *, strict: bool = True) -> None:
        """Set the count at ``index``.

        With ``strict`` the value must lie within ``[0, max_count]``, must
        not be NaN and, for integer counts, must be a whole number.
        """
        idx = self._check_index(index)
        if strict:
            self._check_value(value)
            if value < self._lowest:
                raise CountUnderflowError(f"cannot set a negative count. Index: {idx} Value: {value}")
            if value > self._highest:
                raise CountOverflowError(
                    f"count exceeds the maximum of {self._dtype}. Index: {idx} Value: {value}"
                )
        self._values[idx] = value

    def reset(self, size: Optional[int] = None) -> None:
        """Resize to ``size`` entries (defaults to the current size) and zero them."""
        length = self._values.size if size is None else int(size)
        self._values = np.zeros(length, dtype=self._dtype)
