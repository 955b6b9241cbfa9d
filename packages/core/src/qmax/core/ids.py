"""标识符生成 -- blueprint_id / event_id / version 的唯一来源

- ID 使用 ULID：48 位毫秒时间戳 + 80 位随机数，同一毫秒内也不会碰撞。
- version 使用 VersionClock：毫秒时间戳 + 单调计数器，
  定长编码保证字典序即时间序，时钟回拨时沿用上一个时间戳继续计数。
"""

import time

from ulid import ULID


def new_id() -> str:
    """生成全局唯一 ID（ULID 字符串，26 字符）"""
    return str(ULID())


class VersionClock:
    """单调递增的 version token 生成器

    格式: v<13 位毫秒时间戳>-<6 位序号>，例如 v1760000000000-000000
    """

    def __init__(self) -> None:
        self._last_ms = 0
        self._seq = 0

    def next(self, now_ms: int | None = None) -> str:
        ms = now_ms if now_ms is not None else time.time_ns() // 1_000_000
        if ms > self._last_ms:
            self._last_ms = ms
            self._seq = 0
        else:
            # 同一毫秒或时钟回拨
            self._seq += 1
        return f"v{self._last_ms:013d}-{self._seq:06d}"


_default_clock = VersionClock()


def new_version() -> str:
    """从进程级 VersionClock 获取下一个 version token"""
    return _default_clock.next()
