"""Event Domain Model

事件日志 append-only，不允许更新或删除。
event_id 使用 ULID 格式，时间有序。
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Event(BaseModel):
    """Event 数据模型 -- 生命周期审计记录（dispatch、手动记录）"""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    event_id: str = Field(alias="eventId", description="唯一标识，ULID 格式，时间有序")
    event_type: str = Field(alias="eventType", description="事件类型，CA_DISPATCH 或自定义")
    screen_id: str | None = Field(default=None, alias="screenId", description="关联的 screen")
    metadata: dict[str, Any] = Field(default_factory=dict, description="结构化 metadata")
    timestamp: datetime = Field(description="事件时间戳")

    def to_wire(self) -> dict[str, Any]:
        """序列化为对外 JSON 结构（camelCase）"""
        return self.model_dump(by_alias=True, mode="json")
