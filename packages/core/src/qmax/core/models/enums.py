"""枚举定义

EventType 只枚举系统自身产生的事件类型；
手动记录（logBuildEvent）的事件类型由调用方自由填写。
"""

from enum import StrEnum


class EventType(StrEnum):
    """系统事件类型"""

    CA_DISPATCH = "CA_DISPATCH"


class StorageKind(StrEnum):
    """存储后端类型"""

    MEMORY = "memory"
    SQLITE = "sqlite"
