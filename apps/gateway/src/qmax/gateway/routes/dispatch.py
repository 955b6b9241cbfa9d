"""构建服务 dispatch 路由

POST /sendToCA: 把 blueprint + buildPrompt 发送给构建服务。
- 200: {status, caJobId, rawResponse}
- 400: 缺少字段
- 500: 构建服务未配置
- 502: 构建服务不可达 / 非 2xx / 超时
"""

from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field

from ..deps import get_lifecycle_service
from ..services.lifecycle import BlueprintLifecycleService

router = APIRouter()


class SendToCARequest(BaseModel):
    """dispatch 请求体"""

    model_config = ConfigDict(populate_by_name=True)

    screen_id: str | None = Field(default=None, alias="screenId")
    blueprint: Any = Field(default=None)
    build_prompt: str | None = Field(default=None, alias="buildPrompt")


@router.post("/sendToCA")
async def send_to_ca(
    body: SendToCARequest,
    service: BlueprintLifecycleService = Depends(get_lifecycle_service),
):
    """dispatch 到构建服务，成功后记录 CA_DISPATCH 事件"""
    result = await service.send_to_build_service(
        body.screen_id,
        body.blueprint,
        body.build_prompt,
    )
    return result.to_wire()
