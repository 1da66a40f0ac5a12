"""Breaks generation, validation and balancing."""

from .generators import (
    are_equidistant,
    as_breaks,
    breaks_from_range_and_bins,
    breaks_from_range_and_width,
    is_monotonically_increasing,
)
from .balance import BalanceResult, balance_to_range
from .methods import (
    BREAKS_METHOD_REGISTRY,
    BreaksMethod,
    calculate_breaks,
    normalize_method,
    scott_breaks,
)

__all__ = [
    "are_equidistant",
    "as_breaks",
    "breaks_from_range_and_bins",
    "breaks_from_range_and_width",
    "is_monotonically_increasing",
    "BalanceResult",
    "balance_to_range",
    "BREAKS_METHOD_REGISTRY",
    "BreaksMethod",
    "calculate_breaks",
    "normalize_method",
    "scott_breaks",
]
