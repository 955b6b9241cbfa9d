"""BlueprintStore SQLite 实现

blueprints 表 append-only：只允许插入，blueprint_id 主键保证 write-if-absent。
时间戳统一存为微秒精度的 ISO 字符串，字典序即时间序。
"""

import asyncio
import json
from datetime import datetime

import aiosqlite

from ..models.blueprint import Blueprint
from .transaction import write_transaction

_COLUMNS = (
    "blueprint_id, screen_id, version, label, tags, content, created_at, updated_at"
)


def format_ts(ts: datetime) -> str:
    """定长 ISO 时间戳（始终带微秒）"""
    return ts.isoformat(timespec="microseconds")


class SqliteBlueprintStore:
    """BlueprintStore 的 SQLite 实现"""

    def __init__(
        self, conn: aiosqlite.Connection, write_lock: asyncio.Lock | None = None
    ) -> None:
        self._conn = conn
        self._write_lock = write_lock or asyncio.Lock()

    async def insert(self, blueprint: Blueprint) -> None:
        """插入新记录并立即提交；主键冲突抛出 IntegrityError"""
        async with write_transaction(self._conn, self._write_lock) as conn:
            await conn.execute(
                f"""
                INSERT INTO blueprints ({_COLUMNS})
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    blueprint.blueprint_id,
                    blueprint.screen_id,
                    blueprint.version,
                    blueprint.label,
                    json.dumps(blueprint.tags, ensure_ascii=False),
                    json.dumps(blueprint.content, ensure_ascii=False),
                    format_ts(blueprint.created_at),
                    format_ts(blueprint.updated_at),
                ),
            )

    async def get(self, blueprint_id: str) -> Blueprint | None:
        cursor = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM blueprints WHERE blueprint_id = ?",
            (blueprint_id,),
        )
        row = await cursor.fetchone()
        return self._row_to_blueprint(row) if row else None

    async def find_version(self, screen_id: str, version: str) -> Blueprint | None:
        cursor = await self._conn.execute(
            f"""
            SELECT {_COLUMNS} FROM blueprints
            WHERE screen_id = ? AND version = ?
            ORDER BY rowid DESC LIMIT 1
            """,
            (screen_id, version),
        )
        row = await cursor.fetchone()
        return self._row_to_blueprint(row) if row else None

    async def latest_for_screen(self, screen_id: str) -> Blueprint | None:
        cursor = await self._conn.execute(
            f"""
            SELECT {_COLUMNS} FROM blueprints
            WHERE screen_id = ?
            ORDER BY updated_at DESC, rowid DESC LIMIT 1
            """,
            (screen_id,),
        )
        row = await cursor.fetchone()
        return self._row_to_blueprint(row) if row else None

    async def query(
        self,
        screen_id: str | None = None,
        tag: str | None = None,
        limit: int = 20,
    ) -> list[Blueprint]:
        clauses: list[str] = []
        params: list = []
        if screen_id is not None:
            clauses.append("screen_id = ?")
            params.append(screen_id)
        if tag is not None:
            clauses.append(
                "EXISTS (SELECT 1 FROM json_each(blueprints.tags) WHERE json_each.value = ?)"
            )
            params.append(tag)
        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        params.append(limit)

        cursor = await self._conn.execute(
            f"""
            SELECT {_COLUMNS} FROM blueprints
            {where}
            ORDER BY updated_at DESC, rowid DESC
            LIMIT ?
            """,
            params,
        )
        rows = await cursor.fetchall()
        return [self._row_to_blueprint(row) for row in rows]

    @staticmethod
    def _row_to_blueprint(row: aiosqlite.Row) -> Blueprint:
        """将数据库行转换为 Blueprint 模型"""
        return Blueprint(
            blueprint_id=row[0],
            screen_id=row[1],
            version=row[2],
            label=row[3],
            tags=json.loads(row[4]) if row[4] else [],
            content=json.loads(row[5]),
            created_at=datetime.fromisoformat(row[6]),
            updated_at=datetime.fromisoformat(row[7]),
        )
