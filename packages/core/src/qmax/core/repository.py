"""BlueprintRepository -- 版本化 blueprint 存取

在 BlueprintStore 之上负责：
1. 参数校验（screen_id / content 必填）
2. blueprint_id / version 生成与时间戳
3. "latest" 解析：指定 version 优先，找不到时降级到最新版本
"""

from datetime import UTC, datetime
from typing import Any

import structlog

from .config import MAX_LIST_LIMIT, get_default_list_limit
from .exceptions import InvalidArgumentError, NotFoundError
from .ids import new_id, new_version
from .models.blueprint import Blueprint
from .store.protocols import BlueprintStore

log = structlog.get_logger()


def _normalize_tags(tags: Any) -> list[str]:
    """校验 tags 为字符串列表，去重并保留首次出现的顺序"""
    if tags is None:
        return []
    if not isinstance(tags, list) or not all(isinstance(t, str) for t in tags):
        raise InvalidArgumentError("tags must be an array of strings")
    return list(dict.fromkeys(tags))


class BlueprintRepository:
    """版本化 Blueprint 仓库

    每次 save 都写入新记录，从不覆盖已有记录。
    """

    def __init__(self, store: BlueprintStore) -> None:
        self._store = store

    async def save(
        self,
        screen_id: str | None,
        content: Any,
        label: str | None = None,
        tags: list[str] | None = None,
    ) -> Blueprint:
        """保存新版本

        Raises:
            InvalidArgumentError: screen_id 为空或 content 缺失
        """
        if not isinstance(screen_id, str) or not screen_id.strip():
            raise InvalidArgumentError("screenId is required")
        if content is None:
            raise InvalidArgumentError("blueprint is required")
        if label is not None and not isinstance(label, str):
            raise InvalidArgumentError("label must be a string")
        normalized_tags = _normalize_tags(tags)

        # ID、version、时间戳与插入之间没有挂起点
        now = datetime.now(UTC)
        blueprint = Blueprint(
            blueprint_id=new_id(),
            screen_id=screen_id,
            version=new_version(),
            label=label,
            tags=normalized_tags,
            content=content,
            created_at=now,
            updated_at=now,
        )
        await self._store.insert(blueprint)

        log.info(
            "blueprint_saved",
            blueprint_id=blueprint.blueprint_id,
            screen_id=screen_id,
            version=blueprint.version,
        )
        return blueprint

    async def get_by_id(self, blueprint_id: str) -> Blueprint:
        """根据 blueprint_id 查询

        Raises:
            NotFoundError: 记录不存在
        """
        blueprint = await self._store.get(blueprint_id)
        if blueprint is None:
            raise NotFoundError(f"Blueprint with id {blueprint_id} does not exist")
        return blueprint

    async def get_latest(self, screen_id: str, version: str | None = None) -> Blueprint:
        """查询 screen 的当前版本或指定版本

        指定的 version 不存在时降级返回最新版本（非错误）。

        Raises:
            NotFoundError: screen 下没有任何记录
        """
        if version:
            exact = await self._store.find_version(screen_id, version)
            if exact is not None:
                return exact

        latest = await self._store.latest_for_screen(screen_id)
        if latest is None:
            raise NotFoundError(f"No blueprint exists for screen {screen_id}")

        if version:
            log.info(
                "blueprint_version_fallback",
                screen_id=screen_id,
                requested_version=version,
                resolved_version=latest.version,
            )
        return latest

    async def list(
        self,
        screen_id: str | None = None,
        tag: str | None = None,
        limit: int | None = None,
    ) -> list[Blueprint]:
        """按 screen_id / tag 筛选，updated_at 倒序

        Raises:
            InvalidArgumentError: limit 小于 1
        """
        if limit is None:
            limit = get_default_list_limit()
        if limit < 1:
            raise InvalidArgumentError("limit must be a positive integer")
        limit = min(limit, MAX_LIST_LIMIT)

        return await self._store.query(
            screen_id=screen_id or None,
            tag=tag or None,
            limit=limit,
        )
