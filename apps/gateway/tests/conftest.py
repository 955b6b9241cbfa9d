"""apps/gateway 测试配置 -- 内存存储 + MockTransport 构建服务 + httpx AsyncClient

ASGITransport 不触发 lifespan，fixture 手动装配 app.state.lifecycle_service。
"""

import os
from collections.abc import AsyncGenerator, Callable

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from pydantic import SecretStr
from qmax.core.store import StoreGroup
from qmax.dispatch import BuildServiceClient
from qmax.gateway.config import GatewayConfig
from qmax.gateway.main import create_app
from qmax.gateway.services.lifecycle import BlueprintLifecycleService

BUILD_ENDPOINT = "http://build.test/api/ai/build-screen"


def default_build_handler(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, json={"jobId": "job-1", "status": "queued"})


AppFactory = Callable[..., FastAPI]


@pytest.fixture
def make_app() -> AppFactory:
    """构造测试 app：make_app(handler=..., endpoint=..., api_key=...)"""
    os.environ["LOGFIRE_SEND_TO_LOGFIRE"] = "false"

    def _make(
        handler: Callable | None = None,
        endpoint: str = BUILD_ENDPOINT,
        api_key: str = "",
        store_group: StoreGroup | None = None,
    ) -> FastAPI:
        app = create_app(GatewayConfig(api_key=SecretStr(api_key)))
        build_client = BuildServiceClient(
            endpoint,
            timeout_s=2,
            transport=httpx.MockTransport(handler or default_build_handler),
        )
        app.state.lifecycle_service = BlueprintLifecycleService.create(
            store_group or StoreGroup.in_memory(),
            build_client,
        )
        return app

    yield _make
    os.environ.pop("LOGFIRE_SEND_TO_LOGFIRE", None)


@pytest.fixture
def app(make_app: AppFactory) -> FastAPI:
    return make_app()


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """提供 httpx AsyncClient 用于测试"""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
def sample_blueprint() -> dict:
    return {"screenId": "home", "name": "Home", "layout": {"type": "stack", "children": []}}
