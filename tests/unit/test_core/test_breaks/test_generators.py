"""
Unit tests for breaks generators and breaks predicates.
"""
# 说明：断点生成器与结构校验谓词的单元测试。
# 覆盖：
# - breaks_from_range_and_bins：箱数 + 区间 -> bins+1 个等距断点，首尾恰为 low/high
# - breaks_from_range_and_width：固定宽度步进，末断点满足 high <= last < high + width
# - is_monotonically_increasing / are_equidistant / as_breaks：非法断点被拒绝

import numpy as np
import pytest

from histolib.core.breaks import (
    are_equidistant,
    as_breaks,
    breaks_from_range_and_bins,
    breaks_from_range_and_width,
    is_monotonically_increasing,
)
from histolib.core.errors import InvalidInputError
from histolib.core.utils import ParamValidationError


def test_breaks_from_range_and_bins() -> None:
    breaks = breaks_from_range_and_bins(0.0, 20.0, 10)
    assert breaks.size == 11
    assert breaks.tolist() == [2.0 * i for i in range(11)]


def test_breaks_from_range_and_bins_with_negative_low() -> None:
    assert breaks_from_range_and_bins(-2, 2, 2).tolist() == [-2.0, 0.0, 2.0]


def test_breaks_from_range_and_bins_keeps_precision() -> None:
    breaks = breaks_from_range_and_bins(0, 1, 4, precision=np.float32)
    assert breaks.dtype == np.float32
    assert breaks[-1] == np.float32(1.0)


@pytest.mark.parametrize("bins", [0, -3, 2.5])
def test_breaks_from_range_and_bins_rejects_bad_bins(bins) -> None:
    with pytest.raises(InvalidInputError):
        breaks_from_range_and_bins(0.0, 1.0, bins)


@pytest.mark.parametrize("bins", [2.0, "3", None])
def test_breaks_from_range_and_bins_requires_integer_bins(bins) -> None:
    with pytest.raises(ParamValidationError, match="bins must be instance of"):
        breaks_from_range_and_bins(0.0, 1.0, bins)


def test_breaks_from_range_and_bins_rejects_empty_range() -> None:
    with pytest.raises(InvalidInputError):
        breaks_from_range_and_bins(1.0, 1.0, 3)


def test_breaks_from_range_and_width_with_same_upper() -> None:
    breaks = breaks_from_range_and_width(0.0, 4.0, 1.0)
    assert breaks.size == 5
    assert breaks.tolist() == pytest.approx([0.0, 1.0, 2.0, 3.0, 4.0])


def test_breaks_from_range_and_width_with_greater_upper() -> None:
    # 末断点允许越过 high：4.5 <= 5.0 < 5.5
    breaks = breaks_from_range_and_width(0.0, 4.5, 1.0)
    assert breaks.size == 6
    assert breaks.tolist() == pytest.approx([0.0, 1.0, 2.0, 3.0, 4.0, 5.0])


def test_breaks_from_range_and_width_rejects_non_positive_width() -> None:
    with pytest.raises(InvalidInputError):
        breaks_from_range_and_width(0.0, 4.0, 0.0)
    with pytest.raises(InvalidInputError):
        breaks_from_range_and_width(0.0, 4.0, -1.0)


def test_is_monotonically_increasing() -> None:
    assert is_monotonically_increasing([1.0, 2.0, 15.0, 20.0])
    assert not is_monotonically_increasing([1.0, 2.0, 2.0, 3.0])
    assert not is_monotonically_increasing([3.0, 2.0])
    assert not is_monotonically_increasing([1.0])


def test_are_equidistant() -> None:
    assert are_equidistant(np.linspace(0.0, 1.0, 11))
    assert not are_equidistant([0.0, 1.0, 3.0])


def test_are_equidistant_absorbs_accumulated_drift() -> None:
    # 逐次累加 0.1 会累积舍入误差，默认容差（100 eps）应能吸收
    edges = [0.0]
    for _ in range(50):
        edges.append(edges[-1] + 0.1)
    assert are_equidistant(edges)
    assert not are_equidistant(edges, tolerance_factor=0)


def test_as_breaks_validates_input() -> None:
    assert as_breaks([1, 2, 15, 20]).dtype == np.float64
    with pytest.raises(InvalidInputError):
        as_breaks([1.0, 2.0, 2.0])
    with pytest.raises(InvalidInputError):
        as_breaks(["a", "b"])
    with pytest.raises(InvalidInputError):
        as_breaks([[0.0, 1.0], [2.0, 3.0]])
    with pytest.raises(InvalidInputError):
        as_breaks([0.0])
