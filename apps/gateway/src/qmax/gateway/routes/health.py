"""健康检查路由

GET /: 服务信息 + 运行时长。
GET /health: Liveness 检查，永远返回 200。
GET /ready: Readiness 检查，包含存储连通性与构建服务配置状态。
"""

import time
from datetime import UTC, datetime

import structlog
from fastapi import APIRouter, Query, Request
from starlette.responses import JSONResponse

log = structlog.get_logger()

router = APIRouter()

SERVICE_NAME = "qmax-action-server"


@router.get("/")
async def root(request: Request):
    """服务信息"""
    started_at = getattr(request.app.state, "started_at", time.monotonic())
    return {
        "name": SERVICE_NAME,
        "version": request.app.version,
        "uptime_s": round(time.monotonic() - started_at, 3),
    }


@router.get("/health")
async def health():
    """Liveness 检查 -- 永远返回 200"""
    return {"status": "ok", "ts": datetime.now(UTC).isoformat()}


@router.get("/ready")
async def ready(
    request: Request,
    profile: str | None = Query(
        default=None,
        description="检查配置：core（默认）仅检查存储；full 额外探测构建服务",
    ),
):
    """Readiness 检查 -- 验证核心依赖可用性

    检查项：
    1. storage: 存储后端连通性（memory 恒为 ok）
    2. build_service: 构建服务是否已配置；profile=full 时真实探测
    """
    effective_profile = profile or "core"
    service = getattr(request.app.state, "lifecycle_service", None)

    checks: dict[str, str] = {}
    all_ok = True

    # 1. 存储连通性
    store_group = service.store_group if service else None
    if store_group is None:
        checks["storage"] = "error: not initialized"
        all_ok = False
    elif store_group.conn is None:
        checks["storage"] = "ok"
    else:
        try:
            cursor = await store_group.conn.execute("SELECT 1")
            await cursor.fetchone()
            checks["storage"] = "ok"
        except Exception as e:
            checks["storage"] = f"error: {str(e)}"
            all_ok = False

    # 2. 构建服务（未配置不影响 readiness，dispatch 时才报 MISCONFIGURED）
    build_client = service.build_client if service else None
    if build_client is None or not build_client.endpoint:
        checks["build_service"] = "not_configured"
    elif effective_profile == "full":
        reachable = await build_client.health_check()
        checks["build_service"] = "ok" if reachable else "unreachable"
        if not reachable:
            all_ok = False
    else:
        checks["build_service"] = "skipped"

    if not all_ok:
        log.warning("readiness_check_failed", profile=effective_profile, checks=checks)

    status_code = 200 if all_ok else 503
    return JSONResponse(
        status_code=status_code,
        content={
            "status": "ready" if all_ok else "not_ready",
            "profile": effective_profile,
            "checks": checks,
        },
    )
