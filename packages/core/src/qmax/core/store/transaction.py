"""共享连接上的写事务

同一个 aiosqlite 连接上的所有写操作经同一把 asyncio.Lock 串行化：
一个协程的 rollback 不会丢弃另一个协程已执行但尚未提交的 INSERT。
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import aiosqlite


@asynccontextmanager
async def write_transaction(
    conn: aiosqlite.Connection, lock: asyncio.Lock
) -> AsyncIterator[aiosqlite.Connection]:
    """持锁执行写操作：正常退出时提交，异常时回滚并重新抛出"""
    async with lock:
        try:
            yield conn
            await conn.commit()
        except Exception:
            await conn.rollback()
            raise
