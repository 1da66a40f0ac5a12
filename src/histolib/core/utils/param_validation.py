"""
Reusable validation helpers.
"""
# 说明：参数验证相关的辅助函数，用于在库内部统一进行轻量级参数检查。
# 职责：
# - ParamValidationError：参数校验失败的异常类型（属于 InvalidInputError）
# - ensure：基于布尔条件触发指定异常的轻量断言工具
# - ensure_type：检查参数是否属于指定类型集合，并在失败时给出带 label 的错误提示
# - ensure_dtype：将 dtype 描述规范化为 numpy dtype，并检查其种类（整数/无符号/浮点）

from __future__ import annotations

from typing import Any, Tuple, Type

import numpy as np

from ..errors import InvalidInputError


class ParamValidationError(InvalidInputError):
    """Raised when parameter validation fails."""


def ensure(condition: bool, message: str, *, error: Type[Exception] = ParamValidationError) -> None:
    # 条件不满足时抛出指定的异常类型（默认使用 ParamValidationError）
    if not condition:
        raise error(message)


def ensure_type(value: Any, expected: Tuple[type, ...], *, label: str = "value") -> None:
    if not isinstance(value, expected):
        names = ", ".join(t.__name__ for t in expected)
        raise ParamValidationError(f"{label} must be instance of {names}")


def ensure_dtype(dtype: Any, kinds: str, *, label: str = "dtype") -> np.dtype:
    """Return ``np.dtype(dtype)`` after checking its kind is one of ``kinds``."""
    # kinds 使用 numpy 的 dtype.kind 字符："u" 无符号整数、"i" 有符号整数、"f" 浮点
    try:
        resolved = np.dtype(dtype)
    except TypeError as exc:
        raise ParamValidationError(f"{label} {dtype!r} is not a numpy dtype") from exc
    if resolved.kind not in kinds:
        raise ParamValidationError(f"{label} {resolved} must be of kind {kinds!r}")
    return resolved
