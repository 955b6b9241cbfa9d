"""SQLite 数据库初始化

PRAGMA 配置 + 两张表 DDL + 索引创建。
使用 aiosqlite 异步操作。
"""

import aiosqlite

# blueprints 表 DDL（rowid 记录插入顺序，用于同时间戳的排序）
_BLUEPRINTS_DDL = """
CREATE TABLE IF NOT EXISTS blueprints (
    blueprint_id  TEXT PRIMARY KEY,
    screen_id     TEXT NOT NULL,
    version       TEXT NOT NULL,
    label         TEXT,
    tags          TEXT NOT NULL DEFAULT '[]',
    content       TEXT NOT NULL,
    created_at    TEXT NOT NULL,
    updated_at    TEXT NOT NULL
);
"""

_BLUEPRINTS_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_blueprints_screen ON blueprints(screen_id, updated_at DESC);",
    "CREATE INDEX IF NOT EXISTS idx_blueprints_version ON blueprints(screen_id, version);",
    "CREATE INDEX IF NOT EXISTS idx_blueprints_updated_at ON blueprints(updated_at DESC);",
]

# events 表 DDL
_EVENTS_DDL = """
CREATE TABLE IF NOT EXISTS events (
    event_id    TEXT PRIMARY KEY,
    event_type  TEXT NOT NULL,
    screen_id   TEXT,
    metadata    TEXT NOT NULL DEFAULT '{}',
    ts          TEXT NOT NULL
);
"""

_EVENTS_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_events_screen ON events(screen_id);",
    "CREATE INDEX IF NOT EXISTS idx_events_type ON events(event_type);",
]


async def init_db(conn: aiosqlite.Connection) -> None:
    """初始化数据库：设置 PRAGMA + 创建表 + 创建索引（幂等）

    Args:
        conn: aiosqlite 数据库连接
    """
    await conn.execute("PRAGMA journal_mode = WAL;")
    await conn.execute("PRAGMA busy_timeout = 5000;")

    await conn.execute(_BLUEPRINTS_DDL)
    await conn.execute(_EVENTS_DDL)

    for idx_sql in _BLUEPRINTS_INDEXES + _EVENTS_INDEXES:
        await conn.execute(idx_sql)

    await conn.commit()


async def verify_wal_mode(conn: aiosqlite.Connection) -> bool:
    """验证 WAL 模式是否生效"""
    cursor = await conn.execute("PRAGMA journal_mode;")
    row = await cursor.fetchone()
    return row is not None and row[0].lower() == "wal"
