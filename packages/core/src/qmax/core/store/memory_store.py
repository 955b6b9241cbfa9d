"""内存 Store 实现

单事件循环内使用：所有方法内部没有 await，
读写各自是一个不可中断的步骤，因此无需加锁。
存入和读出时都做深拷贝，调用方拿到的是快照。
"""

from ..models.blueprint import Blueprint
from ..models.event import Event


class InMemoryBlueprintStore:
    """BlueprintStore 的内存实现 -- 按插入顺序的主表 + screen_id 二级索引"""

    def __init__(self) -> None:
        self._records: dict[str, Blueprint] = {}
        self._seq: dict[str, int] = {}
        self._by_screen: dict[str, list[str]] = {}

    async def insert(self, blueprint: Blueprint) -> None:
        if blueprint.blueprint_id in self._records:
            raise ValueError(f"blueprint_id {blueprint.blueprint_id} already exists")
        self._records[blueprint.blueprint_id] = blueprint.model_copy(deep=True)
        self._seq[blueprint.blueprint_id] = len(self._seq)
        self._by_screen.setdefault(blueprint.screen_id, []).append(blueprint.blueprint_id)

    async def get(self, blueprint_id: str) -> Blueprint | None:
        record = self._records.get(blueprint_id)
        return record.model_copy(deep=True) if record else None

    async def find_version(self, screen_id: str, version: str) -> Blueprint | None:
        for blueprint_id in reversed(self._by_screen.get(screen_id, [])):
            record = self._records[blueprint_id]
            if record.version == version:
                return record.model_copy(deep=True)
        return None

    async def latest_for_screen(self, screen_id: str) -> Blueprint | None:
        ids = self._by_screen.get(screen_id)
        if not ids:
            return None
        latest = max(ids, key=self._sort_key)
        return self._records[latest].model_copy(deep=True)

    async def query(
        self,
        screen_id: str | None = None,
        tag: str | None = None,
        limit: int = 20,
    ) -> list[Blueprint]:
        if screen_id is not None:
            ids = list(self._by_screen.get(screen_id, []))
        else:
            ids = list(self._records)
        if tag is not None:
            ids = [i for i in ids if tag in self._records[i].tags]
        ids.sort(key=self._sort_key, reverse=True)
        return [self._records[i].model_copy(deep=True) for i in ids[:limit]]

    def _sort_key(self, blueprint_id: str) -> tuple:
        return (self._records[blueprint_id].updated_at, self._seq[blueprint_id])


class InMemoryEventStore:
    """EventStore 的内存实现"""

    def __init__(self) -> None:
        self._events: list[Event] = []
        self._ids: set[str] = set()

    async def append(self, event: Event) -> None:
        if event.event_id in self._ids:
            raise ValueError(f"event_id {event.event_id} already exists")
        self._ids.add(event.event_id)
        self._events.append(event.model_copy(deep=True))

    async def list_events(self) -> list[Event]:
        return [e.model_copy(deep=True) for e in self._events]
