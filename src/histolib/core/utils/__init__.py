"""Shared utility helpers used across the core library."""

from .math_utils import (
    ArrayLike,
    approx_equal,
    count_limits,
    machine_epsilon,
    tolerance,
    variance_welford,
)
from .config import (
    BALANCE_TOLERANCE_FACTOR,
    EQUIDISTANCE_TOLERANCE_FACTOR,
    INDEX_TOLERANCE_FACTOR,
    REMOVE_BIN_BIAS,
    RuntimeConfig,
    get_config,
    configure,
)
from .logging import (
    ArrayAbbreviationFilter,
    get_logger,
    configure_logging,
)
from .param_validation import (
    ensure,
    ensure_dtype,
    ensure_type,
    ParamValidationError,
)

__all__ = [
    "ArrayLike",
    "approx_equal",
    "count_limits",
    "machine_epsilon",
    "tolerance",
    "variance_welford",
    "BALANCE_TOLERANCE_FACTOR",
    "EQUIDISTANCE_TOLERANCE_FACTOR",
    "INDEX_TOLERANCE_FACTOR",
    "REMOVE_BIN_BIAS",
    "RuntimeConfig",
    "get_config",
    "configure",
    "ArrayAbbreviationFilter",
    "get_logger",
    "configure_logging",
    "ensure",
    "ensure_dtype",
    "ensure_type",
    "ParamValidationError",
]
