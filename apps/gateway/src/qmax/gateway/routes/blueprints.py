"""Blueprint 路由

POST /validateBlueprint: 建议性校验，返回 issues + 合并默认字段后的 blueprint。
POST /saveBlueprint: 保存新版本。
GET /getBlueprint: 按 blueprintId 或 screenId (+ version) 查询。
GET /listBlueprints: 按 screenId / tag 筛选列表。
"""

import json
from typing import Any

from fastapi import APIRouter, Depends, Query, Request
from pydantic import BaseModel, ConfigDict, Field
from qmax.core.exceptions import InvalidArgumentError

from ..deps import get_lifecycle_service
from ..services.lifecycle import BlueprintLifecycleService

router = APIRouter()


class SaveBlueprintRequest(BaseModel):
    """保存请求体"""

    model_config = ConfigDict(populate_by_name=True)

    screen_id: str | None = Field(default=None, alias="screenId", description="所属 screen")
    blueprint: Any = Field(default=None, description="blueprint 正文")
    label: str | None = Field(default=None, description="展示标签")
    tags: list[str] | None = Field(default=None, description="标签列表")


class SaveBlueprintResponse(BaseModel):
    """保存响应"""

    model_config = ConfigDict(populate_by_name=True)

    ok: bool = True
    blueprint_id: str = Field(serialization_alias="blueprintId")
    version: str
    created_at: str = Field(serialization_alias="createdAt")


@router.post("/validateBlueprint")
async def validate_blueprint(
    request: Request,
    service: BlueprintLifecycleService = Depends(get_lifecycle_service),
):
    """校验 blueprint，接受 {blueprint} 包装或直接传 blueprint"""
    raw = await request.body()
    if not raw.strip():
        raise InvalidArgumentError("request body is required")
    try:
        payload = json.loads(raw)
    except ValueError as e:
        raise InvalidArgumentError(f"request body is not valid JSON: {e}") from e

    candidate = payload
    if isinstance(payload, dict) and "blueprint" in payload:
        candidate = payload["blueprint"]

    return service.validate(candidate).to_wire()


@router.post("/saveBlueprint")
async def save_blueprint(
    body: SaveBlueprintRequest,
    service: BlueprintLifecycleService = Depends(get_lifecycle_service),
):
    """保存 blueprint 新版本"""
    blueprint = await service.save(
        body.screen_id,
        body.blueprint,
        label=body.label,
        tags=body.tags,
    )
    return SaveBlueprintResponse(
        blueprint_id=blueprint.blueprint_id,
        version=blueprint.version,
        created_at=blueprint.to_wire()["createdAt"],
    ).model_dump(by_alias=True)


@router.get("/getBlueprint")
async def get_blueprint(
    screen_id: str | None = Query(default=None, alias="screenId"),
    blueprint_id: str | None = Query(default=None, alias="blueprintId"),
    legacy_id: str | None = Query(default=None, alias="id", description="blueprintId 的旧参数名"),
    version: str | None = Query(default=None),
    service: BlueprintLifecycleService = Depends(get_lifecycle_service),
):
    """查询单个 blueprint

    - blueprintId 优先
    - 仅 screenId 时返回最新版本；带 version 时返回该版本，不存在则降级到最新版本
    """
    blueprint = await service.get(
        screen_id=screen_id,
        blueprint_id=blueprint_id or legacy_id,
        version=version,
    )
    return blueprint.to_wire()


@router.get("/listBlueprints")
async def list_blueprints(
    screen_id: str | None = Query(default=None, alias="screenId"),
    tag: str | None = Query(default=None),
    limit: int | None = Query(default=None, description="返回条数，默认 20"),
    service: BlueprintLifecycleService = Depends(get_lifecycle_service),
):
    """按 screenId / tag 筛选，updatedAt 倒序"""
    items = await service.list_blueprints(screen_id=screen_id, tag=tag, limit=limit)
    return {"items": [b.to_wire() for b in items]}
