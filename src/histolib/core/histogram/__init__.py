"""Histogram aggregate, counts view and derived operations."""

from .counts import Counts
from .histogram import Histogram, HistogramInfo
from .operations import mean, normalize_by_area

__all__ = [
    "Counts",
    "Histogram",
    "HistogramInfo",
    "mean",
    "normalize_by_area",
]
