"""BlueprintLifecycleService -- blueprint 生命周期编排

gateway 所有路由都只调用这个 facade：
1. validate: 建议性校验，不落盘、不阻止保存
2. save / get / list: 版本化仓库读写
3. send_to_build_service: dispatch 到构建服务，成功后记录 CA_DISPATCH 事件
4. log_event / list_events: 手动事件记录与查询

这里假定调用已在 gateway 层完成授权。
"""

from typing import Any

import structlog
from qmax.core.event_log import EventLog
from qmax.core.exceptions import InvalidArgumentError
from qmax.core.models import Blueprint, Event, ValidationResult
from qmax.core.repository import BlueprintRepository
from qmax.core.store import StoreGroup
from qmax.core.validator import validate_blueprint
from qmax.dispatch import BuildServiceClient, DispatchProxy, DispatchResult

log = structlog.get_logger()


class BlueprintLifecycleService:
    """blueprint 生命周期管理器：Saved -> (可选) Dispatched"""

    def __init__(
        self,
        repository: BlueprintRepository,
        event_log: EventLog,
        dispatch_proxy: DispatchProxy,
        store_group: StoreGroup | None = None,
        build_client: BuildServiceClient | None = None,
    ) -> None:
        self._repository = repository
        self._event_log = event_log
        self._dispatch_proxy = dispatch_proxy
        self.store_group = store_group
        self.build_client = build_client

    @classmethod
    def create(
        cls,
        store_group: StoreGroup,
        build_client: BuildServiceClient,
    ) -> "BlueprintLifecycleService":
        """按 Store 实例组与构建服务客户端装配各组件"""
        event_log = EventLog(store_group.event_store)
        return cls(
            repository=BlueprintRepository(store_group.blueprint_store),
            event_log=event_log,
            dispatch_proxy=DispatchProxy(build_client, event_log),
            store_group=store_group,
            build_client=build_client,
        )

    def validate(self, candidate: Any) -> ValidationResult:
        return validate_blueprint(candidate)

    async def save(
        self,
        screen_id: str | None,
        content: Any,
        label: str | None = None,
        tags: list[str] | None = None,
    ) -> Blueprint:
        return await self._repository.save(screen_id, content, label=label, tags=tags)

    async def get(
        self,
        screen_id: str | None = None,
        blueprint_id: str | None = None,
        version: str | None = None,
    ) -> Blueprint:
        """blueprint_id 优先；否则按 screen_id (+ version) 解析

        Raises:
            InvalidArgumentError: 两种 ID 都未提供
            NotFoundError: 记录不存在
        """
        if blueprint_id:
            return await self._repository.get_by_id(blueprint_id)
        if screen_id:
            return await self._repository.get_latest(screen_id, version=version or None)
        raise InvalidArgumentError("screenId or blueprintId is required")

    async def list_blueprints(
        self,
        screen_id: str | None = None,
        tag: str | None = None,
        limit: int | None = None,
    ) -> list[Blueprint]:
        return await self._repository.list(screen_id=screen_id, tag=tag, limit=limit)

    async def send_to_build_service(
        self,
        screen_id: str | None,
        blueprint: Any,
        build_prompt: str | None,
    ) -> DispatchResult:
        try:
            return await self._dispatch_proxy.dispatch(screen_id, blueprint, build_prompt)
        except Exception as e:
            log.warning(
                "ca_dispatch_failed",
                screen_id=screen_id,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise

    async def log_event(
        self,
        event_type: str | None,
        screen_id: str | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> Event:
        return await self._event_log.append(event_type, screen_id=screen_id, metadata=metadata)

    async def list_events(self) -> list[Event]:
        return await self._event_log.list()
