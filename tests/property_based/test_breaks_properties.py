"""
Property-based tests for breaks generators and the balancer.
"""
# 说明：断点生成器与平衡算法的属性测试。
# 覆盖：
# - breaks_from_range_and_bins：断点数、首尾值与等距性
# - breaks_from_range_and_width：末断点覆盖上界且不超过一个宽度
# - balance_to_range：首尾钉在目标区间、严格递增、平衡后仍近似等距

import numpy as np
import pytest
from hypothesis import given, strategies as st

from histolib.core.breaks import (
    are_equidistant,
    balance_to_range,
    breaks_from_range_and_bins,
    breaks_from_range_and_width,
    is_monotonically_increasing,
)


# ------------------------------------------------------------------ Generators
@given(
    st.floats(min_value=-1e3, max_value=1e3, allow_nan=False),
    st.floats(min_value=0.5, max_value=1e3, allow_nan=False),
    st.integers(min_value=1, max_value=200),
)
def test_breaks_from_bins(low, span, bins):
    # 验证断点个数为 bins + 1，首断点为 low，且等距严格递增
    high = low + span
    breaks = breaks_from_range_and_bins(low, high, bins)
    assert breaks.size == bins + 1
    assert breaks[0] == low
    assert breaks[-1] == pytest.approx(high)
    assert is_monotonically_increasing(breaks)
    assert are_equidistant(breaks)


@given(
    st.floats(min_value=-1e3, max_value=1e3, allow_nan=False),
    st.floats(min_value=0.5, max_value=100.0, allow_nan=False),
    st.floats(min_value=0.1, max_value=10.0, allow_nan=False),
)
def test_breaks_from_width_cover_range(low, span, width):
    # 末断点不小于上界，倒数第二个断点小于上界（允许累加舍入误差）
    high = low + span
    breaks = breaks_from_range_and_width(low, high, width)
    slack = 1e-9 * max(1.0, abs(high))
    assert breaks[0] == low
    assert breaks[-1] >= high - slack
    assert breaks[-2] < high + slack
    assert is_monotonically_increasing(breaks)


# ------------------------------------------------------------------ Balancer
@given(
    st.floats(min_value=-100.0, max_value=100.0, allow_nan=False),
    st.floats(min_value=0.1, max_value=10.0, allow_nan=False),
    st.integers(min_value=1, max_value=50),
    st.floats(min_value=-100.0, max_value=100.0, allow_nan=False),
    st.floats(min_value=0.5, max_value=200.0, allow_nan=False),
)
def test_balance_postconditions(start, width, nbins, target_low, target_span):
    # 任意等距输入平衡后：首尾断点精确等于目标区间，严格递增，宽度一致
    raw = start + np.arange(nbins + 1, dtype=np.float64) * width
    target_high = target_low + target_span
    result = balance_to_range(raw, (target_low, target_high))
    edges = result.breaks
    assert edges[0] == target_low
    assert edges[-1] == np.float64(target_high)
    assert result.bins == edges.size - 1 >= 1
    assert is_monotonically_increasing(edges)
    widths = np.diff(edges)
    assert np.allclose(widths, widths[0], rtol=1e-6, atol=1e-9)
    # 输入数组保持不变
    assert raw[0] == start
