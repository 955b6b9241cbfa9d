"""全局 pytest 配置 -- 临时 SQLite 数据库 + 双存储后端 fixture"""

from collections.abc import AsyncGenerator
from pathlib import Path

import aiosqlite
import pytest_asyncio
from qmax.core.models import StorageKind
from qmax.core.store import StoreGroup, create_store_group


@pytest_asyncio.fixture
async def tmp_db_path(tmp_path: Path) -> Path:
    """提供临时 SQLite 数据库路径"""
    return tmp_path / "sqlite" / "test.db"


@pytest_asyncio.fixture
async def db_conn(tmp_db_path: Path) -> AsyncGenerator[aiosqlite.Connection, None]:
    """提供已初始化的临时 SQLite 数据库连接"""
    from qmax.core.store.sqlite_init import init_db

    tmp_db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = await aiosqlite.connect(str(tmp_db_path))
    await init_db(conn)
    yield conn
    await conn.close()


@pytest_asyncio.fixture(
    params=[StorageKind.MEMORY, StorageKind.SQLITE],
    ids=["memory", "sqlite"],
)
async def store_group(request, tmp_db_path: Path) -> AsyncGenerator[StoreGroup, None]:
    """分别以内存 / SQLite 后端提供 StoreGroup"""
    group = await create_store_group(request.param, str(tmp_db_path))
    yield group
    await group.close()
