"""配置常量模块 -- 可通过环境变量覆盖

包含存储后端选择、SQLite 路径、列表默认条数等可配置项。
"""

import os
from pathlib import Path

import structlog

from .models.enums import StorageKind

log = structlog.get_logger()

# 列表查询默认条数 / 上限
DEFAULT_LIST_LIMIT: int = 20
MAX_LIST_LIMIT: int = 200


def _get_base_dir() -> Path:
    """获取项目 data 基础目录"""
    return Path(os.environ.get("QMAX_DATA_DIR", "data"))


def get_db_path() -> str:
    """获取 SQLite 数据库路径"""
    return os.environ.get(
        "QMAX_DB_PATH",
        str(_get_base_dir() / "sqlite" / "qmax.db"),
    )


def get_storage_backend() -> StorageKind:
    """获取存储后端：memory（默认）或 sqlite

    未知取值记录 warning 并回退到 memory，不阻塞启动。
    """
    value = os.environ.get("QMAX_STORAGE_BACKEND", "memory").strip().lower()
    try:
        return StorageKind(value)
    except ValueError:
        log.warning(
            "invalid_storage_backend",
            env_var="QMAX_STORAGE_BACKEND",
            value=value,
            fallback=StorageKind.MEMORY.value,
        )
        return StorageKind.MEMORY


def get_default_list_limit() -> int:
    """获取列表查询默认条数（上限 MAX_LIST_LIMIT）"""
    raw = os.environ.get("QMAX_LIST_DEFAULT_LIMIT")
    if not raw:
        return DEFAULT_LIST_LIMIT
    try:
        value = int(raw)
    except ValueError:
        value = 0
    if value < 1:
        log.warning(
            "invalid_list_limit_config",
            env_var="QMAX_LIST_DEFAULT_LIMIT",
            value=raw,
            fallback=DEFAULT_LIST_LIMIT,
        )
        return DEFAULT_LIST_LIMIT
    return min(value, MAX_LIST_LIMIT)
