"""CLI 入口模块 -- python -m qmax.core <command>

支持的命令：
  provision-db  在 QMAX_DB_PATH 创建 SQLite 表和索引（幂等）
  list-events   以 JSON Lines 输出 SQLite 中的事件日志
"""

import asyncio
import json
import sys

from .config import get_db_path


def main() -> None:
    """CLI 主入口"""
    if len(sys.argv) < 2:
        print("用法: python -m qmax.core <command>")
        print("命令:")
        print("  provision-db  创建 SQLite 表和索引")
        print("  list-events   输出事件日志（JSON Lines）")
        sys.exit(1)

    command = sys.argv[1]

    if command == "provision-db":
        asyncio.run(provision_db())
    elif command == "list-events":
        asyncio.run(list_events())
    else:
        print(f"未知命令: {command}")
        print("可用命令: provision-db, list-events")
        sys.exit(1)


async def provision_db() -> None:
    """创建数据库表（已存在时不做改动）"""
    from .models.enums import StorageKind
    from .store import create_store_group

    db_path = get_db_path()
    print(f"数据库路径: {db_path}")

    store_group = await create_store_group(StorageKind.SQLITE, db_path)
    await store_group.close()
    print("DB provision complete")


async def list_events() -> None:
    """逐行打印事件"""
    from .event_log import EventLog
    from .models.enums import StorageKind
    from .store import create_store_group

    store_group = await create_store_group(StorageKind.SQLITE, get_db_path())
    try:
        events = await EventLog(store_group.event_store).list()
        for event in events:
            print(json.dumps(event.to_wire(), ensure_ascii=False))
    finally:
        await store_group.close()


if __name__ == "__main__":
    main()
