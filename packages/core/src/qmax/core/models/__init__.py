"""qmax Core Domain Models -- 公共类型导出

所有公共模型类型从此入口导入。
"""

from .blueprint import Blueprint
from .enums import EventType, StorageKind
from .event import Event
from .payloads import CaDispatchPayload
from .validation import ValidationResult

__all__ = [
    # 枚举
    "EventType",
    "StorageKind",
    # Blueprint
    "Blueprint",
    "ValidationResult",
    # Event
    "Event",
    "CaDispatchPayload",
]
