"""
Property-based tests for histogram construction, lookup and normalization.
"""
# 说明：直方图构造、索引查找与面积归一化的属性测试。
# 覆盖：
# - bins 与断点、计数长度之间的一致性
# - 区间内数据的计数总和守恒
# - index_from_value 的箱归属：左闭右开、末箱两端闭合
# - normalize_by_area 后面积和为 1
# - Scott 规则在 (min, max) 上构造的直方图首尾断点与数据极值一致

import numpy as np
import pytest
from hypothesis import HealthCheck, assume, given, settings, strategies as st

from histolib.core.histogram import Histogram


def _finite_floats(low: float = -1e3, high: float = 1e3):
    return st.floats(
        min_value=low,
        max_value=high,
        allow_nan=False,
        allow_infinity=False,
        allow_subnormal=False,
    )


# ------------------------------------------------------------------ Strategies
@st.composite
def increasing_breaks(draw, min_size=2, max_size=20):
    # 由去重后的有限浮点数排序得到严格递增的断点序列
    values = draw(st.lists(_finite_floats(), min_size=min_size, max_size=max_size, unique=True))
    return sorted(values)


@st.composite
def breaks_and_samples(draw):
    # 先生成断点，再在 [首断点, 末断点] 闭区间内抽取样本
    breaks = draw(increasing_breaks())
    samples = draw(st.lists(_finite_floats(breaks[0], breaks[-1]), min_size=0, max_size=50))
    return breaks, samples


# ------------------------------------------------------------------ Shape
@given(breaks_and_samples())
def test_bins_match_breaks_and_counts(case):
    # 验证箱数恒等于断点数减一，且等于计数向量长度
    breaks, samples = case
    h = Histogram(samples, breaks=breaks)
    assert h.bins == len(breaks) - 1 == len(h.counts)
    assert h.breaks.tolist() == breaks


@given(breaks_and_samples())
def test_counts_sum_to_number_of_samples(case):
    # 区间内的每个样本恰好计入一次
    breaks, samples = case
    h = Histogram(samples, breaks=breaks)
    assert int(h.counts.total()) == len(samples)


# ------------------------------------------------------------------ Lookup
@given(breaks_and_samples())
def test_index_from_value_lands_in_owning_bin(case):
    # 验证返回的箱满足 breaks[i] <= v < breaks[i+1]，末箱允许 v == breaks[-1]
    breaks, samples = case
    h = Histogram.from_breaks(breaks)
    last = h.bins - 1
    for v in samples:
        i = h.index_from_value(v)
        assert 0 <= i <= last
        assert breaks[i] <= v
        assert v < breaks[i + 1] or i == last
        # 同一值重复查找结果一致
        assert h.index_from_value(v) == i


@given(increasing_breaks())
def test_edges_map_to_expected_bins(breaks):
    # 首断点落在首箱，末断点落在末箱，内部断点落在以其为左端的箱
    h = Histogram.from_breaks(breaks)
    assert h.index_from_value(breaks[0]) == 0
    assert h.index_from_value(breaks[-1]) == h.bins - 1
    for i, edge in enumerate(breaks[1:-1], start=1):
        assert h.index_from_value(edge) == i


# ------------------------------------------------------------------ Normalization
@given(breaks_and_samples())
def test_normalized_area_is_one(case):
    # 非空直方图归一化后 Σ count[i] * width[i] == 1
    breaks, samples = case
    assume(len(samples) > 0)
    normalized = Histogram(samples, breaks=breaks).normalized_by_area()
    area = float(np.sum(normalized.counts.values * normalized.bin_widths()))
    assert area == pytest.approx(1.0)


# ------------------------------------------------------------------ Scott's rule
@settings(suppress_health_check=[HealthCheck.filter_too_much])
@given(st.lists(_finite_floats(), min_size=2, max_size=50))
def test_scott_histogram_spans_data(samples):
    # 仅数据构造时，区间取数据极值，断点首尾与极值完全一致且全部样本被计入
    assume(max(samples) - min(samples) > 1e-3)
    h = Histogram(samples)
    assert h.breaks[0] == min(samples)
    assert h.breaks[-1] == max(samples)
    assert h.bins >= 1
    assert np.all(np.diff(h.breaks) > 0)
    assert int(h.counts.total()) == len(samples)
