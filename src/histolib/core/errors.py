"""
Error hierarchy for histogram construction and count manipulation.

Responsibilities
  - Define a shared base type so callers can catch every library failure.
  - Map each failure kind onto the closest built-in exception family.

Usage Context
  - Raised synchronously to the immediate caller; nothing is retried.

Limitations
  - Exceptions only carry message text.
"""
# 说明：直方图库的异常体系，统一输入非法、越界、计数上溢/下溢四类错误。
# 职责：
# - HistoError：库内所有异常的公共基类
# - InvalidInputError：非单调断点、不可平衡的断点、未知分箱规则、样本不足等
# - OutOfRangeError：取值落在 [首断点, 末断点] 之外，或计数索引越界
# - CountOverflowError / CountUnderflowError：计数修改超出计数类型可表示范围

from __future__ import annotations


class HistoError(Exception):
    """Base error type for histogram failures."""


class InvalidInputError(HistoError, ValueError):
    """Raised when breaks, ranges, samples or rule selectors are unusable."""


class OutOfRangeError(HistoError, ValueError):
    """Raised when a value or a bin index lies outside of the histogram."""
    # 值不在断点覆盖区间内，或索引不满足 0 <= index < bins


class CountOverflowError(HistoError, OverflowError):
    """Raised when a count would exceed the maximum of its dtype."""


class CountUnderflowError(HistoError, ArithmeticError):
    """Raised when a count would drop below zero."""
