"""qmax Core Store -- 内存 / SQLite 两种持久化实现

提供工厂函数按配置创建 Store 实例组。
"""

import asyncio
from pathlib import Path

import aiosqlite
import structlog

from ..models.enums import StorageKind
from .blueprint_store import SqliteBlueprintStore
from .event_store import SqliteEventStore
from .memory_store import InMemoryBlueprintStore, InMemoryEventStore
from .protocols import BlueprintStore, EventStore
from .sqlite_init import init_db
from .transaction import write_transaction

log = structlog.get_logger()


class StoreGroup:
    """Store 实例组 -- SQLite 模式下共享同一个数据库连接，内存模式下 conn 为 None"""

    def __init__(
        self,
        blueprint_store: BlueprintStore,
        event_store: EventStore,
        conn: aiosqlite.Connection | None = None,
        backend: StorageKind = StorageKind.MEMORY,
    ) -> None:
        self.blueprint_store = blueprint_store
        self.event_store = event_store
        self.conn = conn
        self.backend = backend

    @classmethod
    def in_memory(cls) -> "StoreGroup":
        return cls(InMemoryBlueprintStore(), InMemoryEventStore())

    async def close(self) -> None:
        if self.conn is not None:
            await self.conn.close()
            self.conn = None


async def create_store_group(
    backend: StorageKind | str = StorageKind.MEMORY,
    db_path: str | None = None,
) -> StoreGroup:
    """创建 Store 实例组

    Args:
        backend: 存储后端（memory / sqlite）
        db_path: SQLite 数据库文件路径，backend=sqlite 时必填

    Returns:
        StoreGroup 实例
    """
    backend = StorageKind(backend)
    if backend is StorageKind.MEMORY:
        log.info("store_group_created", backend=backend.value)
        return StoreGroup.in_memory()

    if not db_path:
        raise ValueError("db_path is required for the sqlite backend")

    # 确保数据库目录存在
    db_dir = Path(db_path).parent
    db_dir.mkdir(parents=True, exist_ok=True)

    conn = await aiosqlite.connect(db_path)
    await init_db(conn)
    # 两个 Store 共享连接，也共享写锁
    write_lock = asyncio.Lock()

    log.info("store_group_created", backend=backend.value, db_path=db_path)
    return StoreGroup(
        blueprint_store=SqliteBlueprintStore(conn, write_lock),
        event_store=SqliteEventStore(conn, write_lock),
        conn=conn,
        backend=backend,
    )


__all__ = [
    "StoreGroup",
    "create_store_group",
    "BlueprintStore",
    "EventStore",
    "InMemoryBlueprintStore",
    "InMemoryEventStore",
    "SqliteBlueprintStore",
    "SqliteEventStore",
    "init_db",
    "write_transaction",
]
