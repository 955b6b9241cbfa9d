"""Store Protocol 接口定义

定义 BlueprintStore、EventStore 的抽象接口，
使用 Python Protocol 实现结构化子类型（duck typing）。
内存实现与 SQLite 实现都满足这两个接口，由配置选择。
"""

from typing import Protocol

from ..models.blueprint import Blueprint
from ..models.event import Event


class BlueprintStore(Protocol):
    """Blueprint 存储接口

    记录 append-only：只允许插入，blueprint_id 已存在时插入失败。
    """

    async def insert(self, blueprint: Blueprint) -> None:
        """插入新记录（write-if-absent）"""
        ...

    async def get(self, blueprint_id: str) -> Blueprint | None:
        """根据 blueprint_id 查询"""
        ...

    async def find_version(self, screen_id: str, version: str) -> Blueprint | None:
        """查询 screen_id + version 精确匹配的记录"""
        ...

    async def latest_for_screen(self, screen_id: str) -> Blueprint | None:
        """查询 screen 下 updated_at 最大的记录（同时间取最后插入）"""
        ...

    async def query(
        self,
        screen_id: str | None = None,
        tag: str | None = None,
        limit: int = 20,
    ) -> list[Blueprint]:
        """按 screen_id / tag 筛选，updated_at 倒序，截断到 limit"""
        ...


class EventStore(Protocol):
    """Event 存储接口

    事件日志 append-only：只允许插入，不允许更新或删除。
    """

    async def append(self, event: Event) -> None:
        """追加事件"""
        ...

    async def list_events(self) -> list[Event]:
        """按插入顺序返回全部事件（最早在前）"""
        ...
