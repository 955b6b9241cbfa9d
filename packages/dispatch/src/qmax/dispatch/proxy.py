"""DispatchProxy -- 把 blueprint 和构建指令发送给构建服务并记录事件

调用之间不保存任何状态。
事件写入严格发生在外部调用成功返回之后；失败或超时不写任何事件。
"""

import time
from typing import Any

import structlog
from qmax.core.event_log import EventLog
from qmax.core.exceptions import InvalidArgumentError
from qmax.core.ids import new_id
from qmax.core.models import CaDispatchPayload, EventType

from .client import BuildServiceClient
from .models import DispatchResult

log = structlog.get_logger()

DEFAULT_JOB_STATUS = "submitted"

# 构建服务响应中可能承载 job ID 的字段，按优先级
_JOB_ID_KEYS = ("caJobId", "jobId", "job_id", "id")


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (dict, list)):
        return not value
    return False


def extract_job_id(body: Any) -> str | None:
    """从响应体提取 job ID，支持顶层字段和嵌套的 job.id"""
    if not isinstance(body, dict):
        return None
    for key in _JOB_ID_KEYS:
        value = body.get(key)
        if isinstance(value, (str, int)) and not isinstance(value, bool) and str(value):
            return str(value)
    job = body.get("job")
    if isinstance(job, dict):
        return extract_job_id(job)
    return None


def extract_status(body: Any) -> str:
    """从响应体提取 job 状态"""
    if isinstance(body, dict):
        status = body.get("status")
        if isinstance(status, str) and status:
            return status
        job = body.get("job")
        if isinstance(job, dict):
            return extract_status(job)
    return DEFAULT_JOB_STATUS


class DispatchProxy:
    """构建服务 dispatch 代理"""

    def __init__(self, client: BuildServiceClient, event_log: EventLog) -> None:
        self._client = client
        self._event_log = event_log

    async def dispatch(
        self,
        screen_id: str | None,
        blueprint: Any,
        build_prompt: str | None,
    ) -> DispatchResult:
        """发送 blueprint + buildPrompt 到构建服务

        Returns:
            DispatchResult

        Raises:
            InvalidArgumentError: 任一参数为空
            MisconfiguredError: 构建服务未配置
            DispatchFailedError: 构建服务不可达、非 2xx 或超时
        """
        missing = [
            name
            for name, value in (
                ("screenId", screen_id),
                ("blueprint", blueprint),
                ("buildPrompt", build_prompt),
            )
            if _is_empty(value)
        ]
        if missing:
            raise InvalidArgumentError(f"missing required fields: {', '.join(missing)}")
        if not isinstance(screen_id, str) or not isinstance(build_prompt, str):
            raise InvalidArgumentError("screenId and buildPrompt must be strings")

        start_time = time.monotonic()
        response = await self._client.submit(
            {
                "screenId": screen_id,
                "blueprint": blueprint,
                "buildPrompt": build_prompt,
            }
        )
        duration_ms = int((time.monotonic() - start_time) * 1000)

        ca_job_id = extract_job_id(response.body) or f"ca-{new_id()}"
        result = DispatchResult(
            status=extract_status(response.body),
            ca_job_id=ca_job_id,
            raw_response=response.body,
            upstream_status=response.status_code,
            duration_ms=duration_ms,
        )

        await self._event_log.append(
            EventType.CA_DISPATCH,
            screen_id=screen_id,
            metadata=CaDispatchPayload(
                ca_job_id=ca_job_id,
                status=result.status,
                upstream_status=response.status_code,
                build_prompt_length=len(build_prompt),
                duration_ms=duration_ms,
            ).model_dump(by_alias=True),
        )

        log.info(
            "ca_dispatch_completed",
            screen_id=screen_id,
            ca_job_id=ca_job_id,
            status=result.status,
            upstream_status=response.status_code,
            duration_ms=duration_ms,
        )
        return result
