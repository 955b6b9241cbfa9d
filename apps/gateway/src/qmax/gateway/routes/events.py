"""事件路由

POST /logBuildEvent: 手动记录构建事件。
GET /events: 查询全部事件（最早在前）。
"""

from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field

from ..deps import get_lifecycle_service
from ..services.lifecycle import BlueprintLifecycleService

router = APIRouter()


class LogBuildEventRequest(BaseModel):
    """事件记录请求体"""

    model_config = ConfigDict(populate_by_name=True)

    event_type: str | None = Field(default=None, alias="eventType")
    screen_id: str | None = Field(default=None, alias="screenId")
    metadata: Any = Field(default=None)


@router.post("/logBuildEvent")
async def log_build_event(
    body: LogBuildEventRequest,
    service: BlueprintLifecycleService = Depends(get_lifecycle_service),
):
    """追加事件"""
    event = await service.log_event(
        body.event_type,
        screen_id=body.screen_id,
        metadata=body.metadata,
    )
    return {
        "ok": True,
        "eventId": event.event_id,
        "timestamp": event.timestamp.isoformat(),
    }


@router.get("/events")
async def list_events(
    service: BlueprintLifecycleService = Depends(get_lifecycle_service),
):
    """全部事件"""
    events = await service.list_events()
    return {"count": len(events), "events": [e.to_wire() for e in events]}
