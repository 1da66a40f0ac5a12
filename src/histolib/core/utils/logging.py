"""
Lightweight logging helpers with array-friendly defaults.
"""
# 说明：轻量级日志工具，提供统一的 logger 获取入口，并避免把整段断点/计数数组写入日志。
# 职责：
# - ArrayAbbreviationFilter：将日志参数中的 numpy 数组按运行时配置截断为摘要形式
# - configure_logging(...)：初始化 logging 基本配置
# - get_logger(...)：按名称获取 logger，挂载数组摘要过滤器，必要时自动完成日志系统初始化
# 约定：
# - 摘要阈值由 RuntimeConfig.log_array_threshold 控制
# - 日志级别优先级：显式参数 level > 环境变量 HISTOLIB_LOG_LEVEL > 运行时配置的 log_level

from __future__ import annotations

import logging
import os
from typing import Any, Optional

import numpy as np

from .config import get_config


class ArrayAbbreviationFilter(logging.Filter):
    """Filter that abbreviates numpy arrays passed as log arguments."""

    def _abbreviate(self, value: Any, threshold: int) -> Any:
        if isinstance(value, np.ndarray) and value.size > threshold:
            return np.array2string(value, threshold=threshold, edgeitems=max(1, threshold // 2))
        return value

    def filter(self, record: logging.LogRecord) -> bool:
        threshold = get_config().log_array_threshold
        if isinstance(record.args, tuple):
            record.args = tuple(self._abbreviate(arg, threshold) for arg in record.args)
        elif isinstance(record.args, dict):
            record.args = {key: self._abbreviate(arg, threshold) for key, arg in record.args.items()}
        return True


def configure_logging(level: Optional[str] = None) -> None:
    # 初始化根 logger：确定最终日志级别并设置格式
    log_level = level or os.environ.get("HISTOLIB_LOG_LEVEL", get_config().log_level)
    logging.basicConfig(
        level=log_level,
        format="[%(levelname)s] %(name)s %(asctime)s | %(message)s",
    )


def get_logger(name: str) -> logging.Logger:
    # 获取指定名称的 logger；根 logger 尚无 handler 时懒加载初始化，过滤器只挂载一次
    logger = logging.getLogger(name)
    if not logging.getLogger().handlers:
        configure_logging()
    if not any(isinstance(flt, ArrayAbbreviationFilter) for flt in logger.filters):
        logger.addFilter(ArrayAbbreviationFilter())
    return logger
