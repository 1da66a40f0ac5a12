"""Entry point for the core library components."""

from __future__ import annotations

from .errors import (
    CountOverflowError,
    CountUnderflowError,
    HistoError,
    InvalidInputError,
    OutOfRangeError,
)
from .utils import (
    ParamValidationError,
    RuntimeConfig,
    approx_equal,
    configure,
    get_config,
    get_logger,
    variance_welford,
)
from .breaks import (
    BalanceResult,
    BreaksMethod,
    are_equidistant,
    balance_to_range,
    breaks_from_range_and_bins,
    breaks_from_range_and_width,
    calculate_breaks,
    is_monotonically_increasing,
    scott_breaks,
)
from .histogram import (
    Counts,
    Histogram,
    HistogramInfo,
    mean,
    normalize_by_area,
)

__all__: list[str] = [
    "CountOverflowError",
    "CountUnderflowError",
    "HistoError",
    "InvalidInputError",
    "OutOfRangeError",
    "ParamValidationError",
    "RuntimeConfig",
    "approx_equal",
    "configure",
    "get_config",
    "get_logger",
    "variance_welford",
    "BalanceResult",
    "BreaksMethod",
    "are_equidistant",
    "balance_to_range",
    "breaks_from_range_and_bins",
    "breaks_from_range_and_width",
    "calculate_breaks",
    "is_monotonically_increasing",
    "scott_breaks",
    "Counts",
    "Histogram",
    "HistogramInfo",
    "mean",
    "normalize_by_area",
]
