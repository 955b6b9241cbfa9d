"""EventStore SQLite 实现

事件表 append-only：只允许插入，不允许更新或删除。
"""

import asyncio
import json
from datetime import datetime

import aiosqlite

from ..models.event import Event
from .blueprint_store import format_ts
from .transaction import write_transaction


class SqliteEventStore:
    """EventStore 的 SQLite 实现"""

    def __init__(
        self, conn: aiosqlite.Connection, write_lock: asyncio.Lock | None = None
    ) -> None:
        self._conn = conn
        self._write_lock = write_lock or asyncio.Lock()

    async def append(self, event: Event) -> None:
        """追加事件并立即提交"""
        async with write_transaction(self._conn, self._write_lock) as conn:
            await conn.execute(
                """
                INSERT INTO events (event_id, event_type, screen_id, metadata, ts)
                VALUES (?, ?, ?, ?, ?)
                """,
                (
                    event.event_id,
                    event.event_type,
                    event.screen_id,
                    json.dumps(event.metadata, ensure_ascii=False),
                    format_ts(event.timestamp),
                ),
            )

    async def list_events(self) -> list[Event]:
        """查询所有事件，按插入顺序"""
        cursor = await self._conn.execute(
            "SELECT event_id, event_type, screen_id, metadata, ts FROM events ORDER BY rowid ASC"
        )
        rows = await cursor.fetchall()
        return [self._row_to_event(row) for row in rows]

    @staticmethod
    def _row_to_event(row: aiosqlite.Row) -> Event:
        """将数据库行转换为 Event 模型"""
        return Event(
            event_id=row[0],
            event_type=row[1],
            screen_id=row[2],
            metadata=json.loads(row[3]) if row[3] else {},
            timestamp=datetime.fromisoformat(row[4]),
        )
