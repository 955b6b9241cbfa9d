"""EventLog -- append-only 事件日志

只有 append 与 list 两个操作，不提供删除或修改。
"""

from datetime import UTC, datetime
from typing import Any

import structlog

from .exceptions import InvalidArgumentError
from .ids import new_id
from .models.event import Event
from .store.protocols import EventStore

log = structlog.get_logger()


class EventLog:
    """生命周期与 dispatch 事件日志"""

    def __init__(self, store: EventStore) -> None:
        self._store = store

    async def append(
        self,
        event_type: str | None,
        screen_id: str | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> Event:
        """追加事件，分配 event_id 与 timestamp，返回存储后的记录

        Raises:
            InvalidArgumentError: event_type 为空或 metadata 不是对象
        """
        if not isinstance(event_type, str) or not event_type.strip():
            raise InvalidArgumentError("eventType is required")
        if metadata is None:
            metadata = {}
        if not isinstance(metadata, dict):
            raise InvalidArgumentError("metadata must be an object")
        if screen_id is not None and not isinstance(screen_id, str):
            raise InvalidArgumentError("screenId must be a string")

        event = Event(
            event_id=new_id(),
            event_type=event_type,
            screen_id=screen_id or None,
            metadata=metadata,
            timestamp=datetime.now(UTC),
        )
        await self._store.append(event)

        log.info(
            "event_appended",
            event_id=event.event_id,
            event_type=event_type,
            screen_id=event.screen_id,
        )
        return event

    async def list(self) -> list[Event]:
        """全部事件，按插入顺序（最早在前）"""
        return await self._store.list_events()
