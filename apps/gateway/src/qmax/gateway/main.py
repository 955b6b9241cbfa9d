"""FastAPI 应用主文件

app 创建 + lifespan 管理：Store 初始化/关闭 + 构建服务客户端 + 路由注册。
"""

import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from qmax.core.config import get_db_path, get_storage_backend
from qmax.core.store import create_store_group
from qmax.dispatch import BuildServiceClient, load_dispatch_config

from .config import GatewayConfig, load_gateway_config
from .errors import register_error_handlers
from .middleware.auth_mw import ApiKeyMiddleware
from .middleware.logging_config import setup_logfire, setup_logging
from .middleware.logging_mw import LoggingMiddleware
from .routes import blueprints, dispatch, events, health
from .services.lifecycle import BlueprintLifecycleService

log = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """应用生命周期管理：启动时初始化 Store 和构建服务客户端，关闭时清理连接"""
    backend = get_storage_backend()
    store_group = await create_store_group(backend, get_db_path())

    dispatch_config = load_dispatch_config()
    build_client = BuildServiceClient.from_config(dispatch_config)
    if not dispatch_config.base_url:
        log.warning("build_service_not_configured", env_var="CA_BASE_URL")

    app.state.lifecycle_service = BlueprintLifecycleService.create(store_group, build_client)
    log.info(
        "lifecycle_service_initialized",
        backend=backend.value,
        build_endpoint=dispatch_config.endpoint or None,
        timeout_s=dispatch_config.timeout_s,
    )

    yield

    await store_group.close()


def create_app(config: GatewayConfig | None = None) -> FastAPI:
    """创建 FastAPI 应用实例"""
    config = config or load_gateway_config()

    app = FastAPI(
        title="qmax Blueprint Service",
        version="0.1.0",
        description="Blueprint 校验、版本化存储、构建服务 dispatch 与事件日志",
        lifespan=lifespan,
    )
    app.state.started_at = time.monotonic()
    app.state.gateway_config = config

    # 注册中间件（后注册的在外层：CORS -> Logging -> ApiKey）
    app.add_middleware(ApiKeyMiddleware, api_key=config.api_key.get_secret_value())
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # 初始化日志
    setup_logging()
    setup_logfire(app)

    register_error_handlers(app)

    # 注册路由
    app.include_router(health.router, tags=["health"])
    app.include_router(blueprints.router, tags=["blueprints"])
    app.include_router(dispatch.router, tags=["dispatch"])
    app.include_router(events.router, tags=["events"])

    return app


# 默认 app 实例（uvicorn 入口）
app = create_app()
