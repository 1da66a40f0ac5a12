"""Shared pytest configuration and path setup for test modules."""

import sys
from pathlib import Path

import pytest

# Ensure repo root and src/ are on sys.path for all tests
_ROOT = Path(__file__).resolve().parents[1]
_SRC = _ROOT / "src"
for p in (str(_ROOT), str(_SRC)):
    if p not in sys.path:
        sys.path.insert(0, p)

from histolib.core.utils import get_config  # noqa: E402


@pytest.fixture(autouse=True)
def restore_global_config():
    # 每个测试结束后恢复全局配置，避免 configure(...) 在测试之间泄漏
    cfg = get_config()
    snapshot = dict(vars(cfg))
    snapshot["extra"] = dict(cfg.extra)
    yield cfg
    cfg.update(**snapshot)
